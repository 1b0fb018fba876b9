"""initial catalog schema: users, albums, songs

Revision ID: aa10001bbC01
Revises:
Create Date: 2026-01-05 10:00:00.000000

Hey future me - this is the whole starting schema!

Tables:
- users: one row per external identity. uq_users_external_id is what makes
  concurrent provisioning safe, don't drop or rename it without touching
  UserModel and UserRepository too.
- albums: title/artist/cover/year. Track order is NOT stored here.
- songs: album_id is ON DELETE SET NULL - deleting an album keeps its songs.
  position orders songs inside their album (NULL when unattached).
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic
revision: str = "aa10001bbC01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, albums and songs tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.String(1024), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("external_id", name="uq_users_external_id"),
    )
    op.create_index("ix_users_external_id", "users", ["external_id"])

    op.create_table(
        "albums",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("artist", sa.String(255), nullable=False),
        sa.Column("image_url", sa.String(1024), nullable=False, server_default=""),
        sa.Column("release_year", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_albums_artist", "albums", ["artist"])

    op.create_table(
        "songs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("artist", sa.String(255), nullable=False),
        sa.Column(
            "album_id",
            sa.String(36),
            sa.ForeignKey("albums.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("position", sa.Integer, nullable=True),
        sa.Column("duration_seconds", sa.Integer, nullable=False, server_default="0"),
        sa.Column("audio_url", sa.String(1024), nullable=False, server_default=""),
        sa.Column("image_url", sa.String(1024), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_songs_artist", "songs", ["artist"])
    op.create_index("ix_songs_album_id", "songs", ["album_id"])


def downgrade() -> None:
    """Drop all catalog tables."""
    op.drop_index("ix_songs_album_id", table_name="songs")
    op.drop_index("ix_songs_artist", table_name="songs")
    op.drop_table("songs")
    op.drop_index("ix_albums_artist", table_name="albums")
    op.drop_table("albums")
    op.drop_index("ix_users_external_id", table_name="users")
    op.drop_table("users")
