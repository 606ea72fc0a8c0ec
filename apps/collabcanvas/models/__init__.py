"""Convenient exports for writing ORM models (SQLModel)."""

from sqlmodel import Field, SQLModel

from collabcanvas.models.base import Model, TimestampMixin
from collabcanvas.models.canvas import Canvas, Shape, ShapeType, UserCursor

__all__ = [
    "Model",
    "TimestampMixin",
    "Canvas",
    "Shape",
    "ShapeType",
    "UserCursor",
    "SQLModel",
    "Field",
]
