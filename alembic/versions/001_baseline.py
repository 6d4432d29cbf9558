"""Baseline: users, places, saves, visits, social, badges, curated lists, waitlist.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Users ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id VARCHAR(36) PRIMARY KEY,
            email VARCHAR(320) UNIQUE,
            name VARCHAR(128),
            image TEXT,
            username VARCHAR(20) UNIQUE,
            display_name VARCHAR(64),
            custom_avatar TEXT,
            is_creator BOOLEAN NOT NULL DEFAULT false,
            creator_bio TEXT,
            instagram_handle VARCHAR(64),
            tiktok_handle VARCHAR(64),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # --- Places ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS places (
            id VARCHAR(36) PRIMARY KEY,
            google_place_id VARCHAR(256) UNIQUE NOT NULL,
            name VARCHAR(256) NOT NULL,
            address TEXT,
            lat DOUBLE PRECISION,
            lng DOUBLE PRECISION,
            place_type VARCHAR(64),
            price_level INTEGER,
            rating DOUBLE PRECISION,
            photo_url TEXT,
            vibe_tags JSONB NOT NULL DEFAULT '[]'::jsonb,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)

    # --- Social ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS friendships (
            id VARCHAR(36) PRIMARY KEY,
            sender_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            receiver_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            status VARCHAR(16) NOT NULL DEFAULT 'pending',
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_friendships_sender ON friendships(sender_id)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_friendships_receiver ON friendships(receiver_id)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS recommendations (
            id VARCHAR(36) PRIMARY KEY,
            sender_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            receiver_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            place_id VARCHAR(36) NOT NULL REFERENCES places(id) ON DELETE CASCADE,
            note TEXT,
            seen BOOLEAN NOT NULL DEFAULT false,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_recommendations_receiver_seen
        ON recommendations(receiver_id, seen)
    """)

    op.execute("""
        CREATE TABLE IF NOT EXISTS follows (
            id VARCHAR(36) PRIMARY KEY,
            follower_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            following_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT follows_follower_id_following_id_key UNIQUE (follower_id, following_id)
        )
    """)

    # --- Saves & visits ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS saves (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            place_id VARCHAR(36) NOT NULL REFERENCES places(id) ON DELETE CASCADE,
            intent VARCHAR(64) NOT NULL,
            action VARCHAR(16) NOT NULL DEFAULT 'save',
            recommendation_id VARCHAR(36) REFERENCES recommendations(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT saves_user_id_place_id_intent_key UNIQUE (user_id, place_id, intent)
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_saves_user_created ON saves(user_id, created_at DESC)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS visits (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            place_id VARCHAR(36) NOT NULL REFERENCES places(id) ON DELETE CASCADE,
            method VARCHAR(16) NOT NULL DEFAULT 'manual',
            verified_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT visits_user_id_place_id_key UNIQUE (user_id, place_id)
        )
    """)

    # --- Badges ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS badges (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            badge_type VARCHAR(64) NOT NULL,
            earned_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT badges_user_id_badge_type_key UNIQUE (user_id, badge_type)
        )
    """)

    # --- Curated lists ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS curated_lists (
            id VARCHAR(36) PRIMARY KEY,
            creator_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            title VARCHAR(128) NOT NULL,
            description TEXT,
            category VARCHAR(64) NOT NULL,
            is_public BOOLEAN NOT NULL DEFAULT false,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_curated_lists_public
        ON curated_lists(is_public, category, created_at DESC)
    """)

    op.execute("""
        CREATE TABLE IF NOT EXISTS curated_list_items (
            id VARCHAR(36) PRIMARY KEY,
            list_id VARCHAR(36) NOT NULL REFERENCES curated_lists(id) ON DELETE CASCADE,
            place_id VARCHAR(36) NOT NULL REFERENCES places(id) ON DELETE CASCADE,
            note TEXT,
            position INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT curated_list_items_list_id_place_id_key UNIQUE (list_id, place_id),
            CONSTRAINT curated_list_items_list_id_position_key UNIQUE (list_id, position)
        )
    """)

    op.execute("""
        CREATE TABLE IF NOT EXISTS curated_list_saves (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            list_id VARCHAR(36) NOT NULL REFERENCES curated_lists(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT curated_list_saves_user_id_list_id_key UNIQUE (user_id, list_id)
        )
    """)

    # --- Waitlist ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS waitlist (
            id VARCHAR(36) PRIMARY KEY,
            email VARCHAR(320) UNIQUE NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)


def downgrade() -> None:
    for table in (
        "waitlist",
        "curated_list_saves",
        "curated_list_items",
        "curated_lists",
        "badges",
        "visits",
        "saves",
        "follows",
        "recommendations",
        "friendships",
        "places",
        "users",
    ):
        op.execute(f"DROP TABLE IF EXISTS {table} CASCADE")
