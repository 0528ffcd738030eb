"""
SQLAlchemy ORM models for Transcriptorator.

Maps the ``sessions`` and ``transcript_segments`` tables of the managed
store using SQLAlchemy 2.0 declarative style with ``mapped_column``.
The schema is owned by the store; these mappings are read-only views of it.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ── Base class ──


class Base(DeclarativeBase):
    """Declarative base for all Transcriptorator ORM models."""


# ── Enum values (mirroring Pydantic enums) ──

CHAMBER_ENUM = Enum("house", "senate", name="chamber", create_constraint=False, native_enum=False)


# ── ORM models ──


class SessionORM(Base):
    """ORM model for the ``sessions`` table."""

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(PG_UUID(as_uuid=False), primary_key=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    youtube_video_id: Mapped[str] = mapped_column(String(32), nullable=False)
    youtube_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    chamber: Mapped[str] = mapped_column(CHAMBER_ENUM, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    session_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    chamber_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    segments: Mapped[list[TranscriptSegmentORM]] = relationship(
        back_populates="session", order_by="TranscriptSegmentORM.seq",
    )


class TranscriptSegmentORM(Base):
    """ORM model for the ``transcript_segments`` table."""

    __tablename__ = "transcript_segments"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    session_id: Mapped[str] = mapped_column(
        PG_UUID(as_uuid=False), ForeignKey("sessions.id"), nullable=False, index=True,
    )
    seq: Mapped[int] = mapped_column(Integer, nullable=False)
    start_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    end_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    session: Mapped[SessionORM] = relationship(back_populates="segments")
