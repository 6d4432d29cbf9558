"""WhereTo place-discovery backend."""
