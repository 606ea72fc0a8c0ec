"""Canvas, shape and cursor procedures exposed over RPC."""

from __future__ import annotations

from sqlmodel import Session

from collabcanvas.core.utils import utcnow
from collabcanvas.models.canvas import Canvas, Shape, UserCursor
from collabcanvas.schemas.canvas import (
    CanvasCreate,
    CanvasIdInput,
    CanvasOut,
    CanvasRefInput,
    CanvasUpdate,
    CanvasWithShapes,
    CursorRemove,
    CursorUpdate,
    HealthStatus,
    ShapeCreate,
    ShapeIdInput,
    ShapeOut,
    ShapeUpdate,
    UserCursorOut,
)
from collabcanvas.services.canvas_service import CanvasService
from collabcanvas.services.cursor_service import CursorService

from .registry import ProcedureRegistry

rpc = ProcedureRegistry()


@rpc.query("healthcheck", output=HealthStatus)
def healthcheck(_session: Session, _payload: None) -> HealthStatus:
    return HealthStatus(status="ok", timestamp=utcnow())


# Canvases
@rpc.mutation("createCanvas", input_model=CanvasCreate, output=CanvasOut)
def create_canvas(session: Session, payload: CanvasCreate) -> Canvas:
    return CanvasService(session).create_canvas(**payload.model_dump())


@rpc.query("getCanvases", output=list[CanvasOut])
def get_canvases(session: Session, _payload: None) -> list[Canvas]:
    return CanvasService(session).list_canvases()


@rpc.query("getCanvas", input_model=CanvasIdInput, output=CanvasWithShapes | None)
def get_canvas(session: Session, payload: CanvasIdInput) -> CanvasWithShapes | None:
    found = CanvasService(session).get_canvas(payload.id)
    if found is None:
        return None
    canvas, shapes = found
    base = CanvasOut.model_validate(canvas).model_dump()
    return CanvasWithShapes(**base, shapes=[ShapeOut.model_validate(s) for s in shapes])


@rpc.mutation("updateCanvas", input_model=CanvasUpdate, output=CanvasOut | None)
def update_canvas(session: Session, payload: CanvasUpdate) -> Canvas | None:
    fields = payload.model_dump(exclude_unset=True, exclude={"id"})
    return CanvasService(session).update_canvas(payload.id, **fields)


@rpc.mutation("deleteCanvas", input_model=CanvasIdInput, output=bool)
def delete_canvas(session: Session, payload: CanvasIdInput) -> bool:
    return CanvasService(session).delete_canvas(payload.id)


# Shapes
@rpc.mutation("createShape", input_model=ShapeCreate, output=ShapeOut)
def create_shape(session: Session, payload: ShapeCreate) -> Shape:
    return CanvasService(session).create_shape(**payload.model_dump())


@rpc.query("getShapes", input_model=CanvasRefInput, output=list[ShapeOut])
def get_shapes(session: Session, payload: CanvasRefInput) -> list[Shape]:
    return CanvasService(session).list_shapes(payload.canvas_id)


@rpc.mutation("updateShape", input_model=ShapeUpdate, output=ShapeOut | None)
def update_shape(session: Session, payload: ShapeUpdate) -> Shape | None:
    fields = payload.model_dump(exclude_unset=True, exclude={"id"})
    return CanvasService(session).update_shape(payload.id, **fields)


@rpc.mutation("deleteShape", input_model=ShapeIdInput, output=bool)
def delete_shape(session: Session, payload: ShapeIdInput) -> bool:
    return CanvasService(session).delete_shape(payload.id)


# Cursors
@rpc.mutation("updateCursor", input_model=CursorUpdate, output=UserCursorOut)
def update_cursor(session: Session, payload: CursorUpdate) -> UserCursor:
    return CursorService(session).update_cursor(**payload.model_dump())


@rpc.query("getCursors", input_model=CanvasRefInput, output=list[UserCursorOut])
def get_cursors(session: Session, payload: CanvasRefInput) -> list[UserCursor]:
    return CursorService(session).get_cursors(payload.canvas_id)


@rpc.mutation("removeCursor", input_model=CursorRemove, output=bool)
def remove_cursor(session: Session, payload: CursorRemove) -> bool:
    return CursorService(session).remove_cursor(payload.canvas_id, payload.user_id)
