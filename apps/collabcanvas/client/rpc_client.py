"""Thin typed wrapper over the RPC endpoint.

Queries go out as GET with JSON-encoded ``input``; mutations as POST with a
JSON body. Responses are unwrapped from ``{"result": {"data": ...}}`` and
validated into the shared schema models.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from collabcanvas.core.settings import settings
from collabcanvas.models.canvas import ShapeType
from collabcanvas.schemas.canvas import (
    CanvasOut,
    CanvasWithShapes,
    HealthStatus,
    ShapeOut,
    UserCursorOut,
)

logger = logging.getLogger(__name__)

_canvas_list = TypeAdapter(list[CanvasOut])
_shape_list = TypeAdapter(list[ShapeOut])
_cursor_list = TypeAdapter(list[UserCursorOut])


class RpcError(RuntimeError):
    """Raised when the server answers a procedure call with an error payload."""

    def __init__(self, procedure: str, status_code: int, message: str, code: str | None = None,
                 details: Any | None = None) -> None:
        self.procedure = procedure
        self.status_code = status_code
        self.code = code
        self.details = details
        super().__init__(f"{procedure} failed ({status_code}, {code}): {message}")


class CanvasRpcClient:
    def __init__(
        self,
        base_url: str = "",
        *,
        prefix: str | None = None,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.prefix = (prefix if prefix is not None else settings.rpc_prefix).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> CanvasRpcClient:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    # Transport
    def _unwrap(self, procedure: str, resp: httpx.Response) -> Any:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if resp.status_code >= 400 or not isinstance(body, dict) or "result" not in body:
            payload = body if isinstance(body, dict) else {}
            raise RpcError(
                procedure,
                resp.status_code,
                str(payload.get("error") or resp.text),
                code=payload.get("code"),
                details=payload.get("details"),
            )
        return body["result"].get("data")

    def query(self, procedure: str, input: Any | None = None) -> Any:  # noqa: A002
        params = {"input": json.dumps(input)} if input is not None else None
        resp = self._http.get(f"{self.prefix}/{procedure}", params=params)
        return self._unwrap(procedure, resp)

    def mutate(self, procedure: str, input: Any | None = None) -> Any:  # noqa: A002
        resp = self._http.post(f"{self.prefix}/{procedure}", json=input)
        return self._unwrap(procedure, resp)

    # Procedures
    def healthcheck(self) -> HealthStatus:
        return HealthStatus.model_validate(self.query("healthcheck"))

    def create_canvas(self, name: str, description: str | None = None) -> CanvasOut:
        data = self.mutate("createCanvas", {"name": name, "description": description})
        return CanvasOut.model_validate(data)

    def get_canvases(self) -> list[CanvasOut]:
        return _canvas_list.validate_python(self.query("getCanvases"))

    def get_canvas(self, canvas_id: int) -> CanvasWithShapes | None:
        data = self.query("getCanvas", {"id": canvas_id})
        return CanvasWithShapes.model_validate(data) if data is not None else None

    def update_canvas(self, canvas_id: int, **fields: Any) -> CanvasOut | None:
        data = self.mutate("updateCanvas", {"id": canvas_id, **fields})
        return CanvasOut.model_validate(data) if data is not None else None

    def delete_canvas(self, canvas_id: int) -> bool:
        return bool(self.mutate("deleteCanvas", {"id": canvas_id}))

    def create_shape(
        self,
        canvas_id: int,
        type: ShapeType | str,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str,
        z_index: int | None = None,
    ) -> ShapeOut:
        payload: dict[str, Any] = {
            "canvas_id": canvas_id,
            "type": ShapeType(type).value,
            "x": x,
            "y": y,
            "width": width,
            "height": height,
            "color": color,
        }
        if z_index is not None:
            payload["z_index"] = z_index
        return ShapeOut.model_validate(self.mutate("createShape", payload))

    def get_shapes(self, canvas_id: int) -> list[ShapeOut]:
        return _shape_list.validate_python(self.query("getShapes", {"canvasId": canvas_id}))

    def update_shape(self, shape_id: int, **fields: Any) -> ShapeOut | None:
        data = self.mutate("updateShape", {"id": shape_id, **fields})
        return ShapeOut.model_validate(data) if data is not None else None

    def delete_shape(self, shape_id: int) -> bool:
        return bool(self.mutate("deleteShape", {"id": shape_id}))

    def update_cursor(
        self, canvas_id: int, user_id: str, user_name: str, x: float, y: float
    ) -> UserCursorOut:
        data = self.mutate(
            "updateCursor",
            {"canvas_id": canvas_id, "user_id": user_id, "user_name": user_name, "x": x, "y": y},
        )
        return UserCursorOut.model_validate(data)

    def get_cursors(self, canvas_id: int) -> list[UserCursorOut]:
        return _cursor_list.validate_python(self.query("getCursors", {"canvasId": canvas_id}))

    def remove_cursor(self, canvas_id: int, user_id: str) -> bool:
        return bool(self.mutate("removeCursor", {"canvasId": canvas_id, "userId": user_id}))
