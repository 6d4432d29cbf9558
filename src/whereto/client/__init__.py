"""Client-side state: anonymous saves, skip sets, preferences and the save orchestrator."""
