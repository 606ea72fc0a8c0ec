"""SQLModel base classes and mixins for ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from collabcanvas.core.utils import utcnow_naive


class TimestampMixin(SQLModel):
    """Adds created/updated timestamps (app-managed, naive UTC)."""

    created_at: datetime = Field(
        default_factory=utcnow_naive, sa_type=DateTime(timezone=False), nullable=False
    )
    updated_at: datetime = Field(
        default_factory=utcnow_naive, sa_type=DateTime(timezone=False), nullable=False
    )


class Model(TimestampMixin, SQLModel):
    """Opinionated base with `id`/timestamps for SQLModel tables.

    Inherit this along with `table=True` on concrete models.
    """

    id: int | None = Field(default=None, primary_key=True)
