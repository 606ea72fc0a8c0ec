"""Service layer for canvases and their shapes.

Every method is one independent read/write against the store. Missing rows on
lookup, update or delete are reported as ``None``/``False``; only shape
creation against a missing canvas raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlmodel import Session, select

from collabcanvas.core.exceptions import NotFoundError
from collabcanvas.core.utils import to_fixed2, utcnow_naive
from collabcanvas.models.canvas import Canvas, Shape, ShapeType
from collabcanvas.services._persistence import persistence_guard

logger = logging.getLogger(__name__)

_SHAPE_NUMERIC_FIELDS = ("x", "y", "width", "height")


@dataclass
class CanvasService:
    """Encapsulates canvas and shape CRUD."""

    session: Session

    # Canvases
    def create_canvas(self, *, name: str, description: str | None = None) -> Canvas:
        """Insert a canvas; a blank description is stored as NULL."""

        canvas = Canvas(name=name, description=description or None)
        with persistence_guard(self.session, "Canvas creation", logger):
            self.session.add(canvas)
            self.session.commit()
            self.session.refresh(canvas)
        logger.info("Created canvas id=%s", canvas.id)
        return canvas

    def list_canvases(self) -> list[Canvas]:
        with persistence_guard(self.session, "Canvas listing", logger):
            return list(self.session.exec(select(Canvas)))

    def get_canvas(self, canvas_id: int) -> tuple[Canvas, list[Shape]] | None:
        """Fetch a canvas with its shapes in stacking order, or None."""

        with persistence_guard(self.session, "Canvas retrieval", logger):
            canvas = self.session.get(Canvas, canvas_id)
            if canvas is None:
                return None
            stmt = (
                select(Shape)
                .where(Shape.canvas_id == canvas_id)
                .order_by(Shape.z_index.asc(), Shape.id.asc())
            )
            return canvas, list(self.session.exec(stmt))

    def update_canvas(self, canvas_id: int, **fields: Any) -> Canvas | None:
        """Apply a partial update; only keys present in `fields` change."""

        with persistence_guard(self.session, "Canvas update", logger):
            canvas = self.session.get(Canvas, canvas_id)
            if canvas is None:
                return None
            if fields.get("name") is not None:
                canvas.name = str(fields["name"])
            if "description" in fields:
                canvas.description = fields["description"]
            canvas.updated_at = utcnow_naive()
            self.session.add(canvas)
            self.session.commit()
            self.session.refresh(canvas)
            return canvas

    def delete_canvas(self, canvas_id: int) -> bool:
        """Delete a canvas; shapes and cursors cascade at the store level."""

        with persistence_guard(self.session, "Canvas deletion", logger):
            canvas = self.session.get(Canvas, canvas_id)
            if canvas is None:
                return False
            self.session.delete(canvas)
            self.session.commit()
        # Cascaded children may still sit in the identity map.
        self.session.expunge_all()
        logger.info("Deleted canvas id=%s", canvas_id)
        return True

    # Shapes
    def create_shape(
        self,
        *,
        canvas_id: int,
        type: ShapeType | str,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str,
        z_index: int | None = None,
    ) -> Shape:
        """Add a shape to an existing canvas.

        Raises:
            NotFoundError: the canvas does not exist; nothing is inserted.
        """

        with persistence_guard(self.session, "Shape creation", logger):
            if self.session.get(Canvas, canvas_id) is None:
                raise NotFoundError(
                    f"Canvas with id {canvas_id} not found", code="canvas_not_found"
                )
            shape = Shape(
                canvas_id=canvas_id,
                type=ShapeType(type),
                x=to_fixed2(x),
                y=to_fixed2(y),
                width=to_fixed2(width),
                height=to_fixed2(height),
                color=color,
                z_index=z_index or 0,
            )
            self.session.add(shape)
            self.session.commit()
            self.session.refresh(shape)
        return shape

    def list_shapes(self, canvas_id: int) -> list[Shape]:
        with persistence_guard(self.session, "Shape listing", logger):
            return list(self.session.exec(select(Shape).where(Shape.canvas_id == canvas_id)))

    def get_shape(self, shape_id: int) -> Shape | None:
        return self.session.get(Shape, shape_id)

    def update_shape(self, shape_id: int, **fields: Any) -> Shape | None:
        """Apply a partial update to position, size, colour or stacking order."""

        with persistence_guard(self.session, "Shape update", logger):
            shape = self.get_shape(shape_id)
            if shape is None:
                return None
            for name in _SHAPE_NUMERIC_FIELDS:
                if fields.get(name) is not None:
                    setattr(shape, name, to_fixed2(fields[name]))
            if fields.get("color") is not None:
                shape.color = fields["color"]
            if fields.get("z_index") is not None:
                shape.z_index = int(fields["z_index"])
            shape.updated_at = utcnow_naive()
            self.session.add(shape)
            self.session.commit()
            self.session.refresh(shape)
            return shape

    def delete_shape(self, shape_id: int) -> bool:
        with persistence_guard(self.session, "Shape deletion", logger):
            shape = self.get_shape(shape_id)
            if shape is None:
                return False
            self.session.delete(shape)
            self.session.commit()
            return True
