"""SQLAlchemy ORM models for SoundHaven."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


def ensure_utc_aware(dt: datetime) -> datetime:
    """Ensure datetime is UTC-aware, assuming naive datetimes are UTC.

    SQLite drops tzinfo on the way back, so every datetime read from the DB goes
    through here before it reaches a domain entity.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# Hey future me, the unique constraint on external_id is THE backstop for provisioning.
# IdentityProvisioner checks first, but two concurrent callbacks can both miss that check -
# only this constraint guarantees one row per identity. Its name is referenced by the
# alembic migration, keep them in sync.
class UserModel(Base):
    """A user provisioned from an external identity."""

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("external_id", name="uq_users_external_id"),)

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    external_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utc_now, onupdate=utc_now, nullable=False
    )


class AlbumModel(Base):
    """An album; its track order lives on TrackModel.position."""

    __tablename__ = "albums"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    release_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utc_now, onupdate=utc_now, nullable=False
    )

    # passive_deletes: the FK is ON DELETE SET NULL, tracks survive their album.
    tracks: Mapped[list["TrackModel"]] = relationship(
        "TrackModel",
        back_populates="album",
        order_by="TrackModel.position",
        passive_deletes=True,
    )


class TrackModel(Base):
    """A song. Table is called 'songs' to match the public API naming."""

    __tablename__ = "songs"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    album_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("albums.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    audio_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utc_now, onupdate=utc_now, nullable=False
    )

    album: Mapped[AlbumModel | None] = relationship("AlbumModel", back_populates="tracks")
