"""Canvas, shape and cursor tables for collaborative drawing."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel

from collabcanvas.core.utils import utcnow_naive
from collabcanvas.models.base import Model


class ShapeType(str, Enum):
    rectangle = "rectangle"
    square = "square"
    triangle = "triangle"


def _coordinate_column() -> Column:
    return Column(Numeric(10, 2), nullable=False)


class Canvas(Model, table=True):
    """A named drawing surface that owns shapes and live cursors."""

    __tablename__ = "canvases"

    name: str = Field(sa_column=Column(Text, nullable=False))
    description: str | None = Field(default=None, sa_column=Column(Text, nullable=True))


class Shape(Model, table=True):
    """A positioned, sized and coloured primitive on one canvas."""

    __tablename__ = "shapes"
    __table_args__ = (
        Index("ix_shapes_canvas_id", "canvas_id"),
        Index("ix_shapes_canvas_z", "canvas_id", "z_index"),
    )

    canvas_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("canvases.id", ondelete="CASCADE"), nullable=False
        )
    )
    type: ShapeType = Field(
        sa_column=Column(
            SAEnum(
                ShapeType,
                name="shape_type",
                values_callable=lambda members: [m.value for m in members],
            ),
            nullable=False,
        )
    )
    x: Decimal = Field(sa_column=_coordinate_column())
    y: Decimal = Field(sa_column=_coordinate_column())
    width: Decimal = Field(sa_column=_coordinate_column())
    height: Decimal = Field(sa_column=_coordinate_column())
    color: str = Field(sa_column=Column(String(7), nullable=False))
    z_index: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))


class UserCursor(SQLModel, table=True):
    """Last known pointer position of one user on one canvas.

    (canvas_id, user_id) is unique by convention only; the cursor service
    upserts on that pair.
    """

    __tablename__ = "user_cursors"
    __table_args__ = (Index("ix_user_cursors_canvas_user", "canvas_id", "user_id"),)

    id: int | None = Field(default=None, primary_key=True)
    canvas_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("canvases.id", ondelete="CASCADE"), nullable=False
        )
    )
    user_id: str = Field(sa_column=Column(Text, nullable=False))
    user_name: str = Field(sa_column=Column(Text, nullable=False))
    x: Decimal = Field(sa_column=_coordinate_column())
    y: Decimal = Field(sa_column=_coordinate_column())
    updated_at: datetime = Field(
        default_factory=utcnow_naive, sa_column=Column(DateTime, nullable=False)
    )


__all__ = ["Canvas", "Shape", "ShapeType", "UserCursor"]
