from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

from collabcanvas.models.canvas import ShapeType

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

# Largest magnitude a NUMERIC(10, 2) column holds.
MAX_COORDINATE = 99_999_999.99

Coordinate = Annotated[float, Field(ge=-MAX_COORDINATE, le=MAX_COORDINATE, allow_inf_nan=False)]
Extent = Annotated[float, Field(gt=0, le=MAX_COORDINATE, allow_inf_nan=False)]


def _as_utc(value: datetime) -> datetime:
    # Stored timestamps are naive UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


def _reject_null(value, info: ValidationInfo):
    if value is None:
        raise ValueError(f"{info.field_name} may be omitted but not null")
    return value


# Canvases
class CanvasCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None


class CanvasUpdate(BaseModel):
    id: int
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value, info: ValidationInfo):
        return _reject_null(value, info)


class CanvasIdInput(BaseModel):
    id: int


class CanvasOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


# Shapes
class ShapeCreate(BaseModel):
    canvas_id: int
    type: ShapeType
    x: Coordinate
    y: Coordinate
    width: Extent
    height: Extent
    color: str = Field(pattern=HEX_COLOR_PATTERN)
    z_index: int | None = None


class ShapeUpdate(BaseModel):
    """Partial shape update; every field but `id` may be omitted, none may be null."""

    id: int
    x: Coordinate | None = None
    y: Coordinate | None = None
    width: Extent | None = None
    height: Extent | None = None
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    z_index: int | None = None

    @field_validator("x", "y", "width", "height", "color", "z_index")
    @classmethod
    def fields_not_null(cls, value, info: ValidationInfo):
        return _reject_null(value, info)


class ShapeIdInput(BaseModel):
    id: int


class ShapeOut(BaseModel):
    """Shape as returned over RPC; stored decimals come back as floats."""

    id: int
    canvas_id: int
    type: ShapeType
    x: float
    y: float
    width: float
    height: float
    color: str
    z_index: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


class CanvasWithShapes(CanvasOut):
    shapes: list[ShapeOut] = Field(default_factory=list)


# Cursors
class CursorUpdate(BaseModel):
    canvas_id: int
    user_id: str
    user_name: str
    x: Coordinate
    y: Coordinate


class CanvasRefInput(BaseModel):
    """Input for procedures keyed by a canvas (camelCase on the wire)."""

    canvas_id: int = Field(alias="canvasId")

    model_config = ConfigDict(populate_by_name=True)


class CursorRemove(BaseModel):
    canvas_id: int = Field(alias="canvasId")
    user_id: str = Field(alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class UserCursorOut(BaseModel):
    id: int
    canvas_id: int
    user_id: str
    user_name: str
    x: float
    y: float
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime
