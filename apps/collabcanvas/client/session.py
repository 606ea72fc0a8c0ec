"""Client-side collaboration state for one user on one canvas.

The server has no push channel, so the session polls cursors on a fixed
interval and replaces its whole canvas snapshot after every shape mutation.
"""

from __future__ import annotations

import logging
import secrets
import string
import threading
from dataclasses import dataclass, field
from typing import Any

import httpx

from collabcanvas.client.rpc_client import CanvasRpcClient, RpcError
from collabcanvas.core.settings import settings
from collabcanvas.models.canvas import ShapeType
from collabcanvas.schemas.canvas import CanvasWithShapes, ShapeOut, UserCursorOut

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def generate_user_id() -> str:
    """Opaque, unauthenticated per-client id such as ``user_k3j9x0q2a``."""

    return "user_" + "".join(secrets.choice(_BASE36) for _ in range(9))


@dataclass
class CollaborationSession:
    client: CanvasRpcClient
    user_name: str
    user_id: str = field(default_factory=generate_user_id)
    canvas: CanvasWithShapes | None = None
    cursors: list[UserCursorOut] = field(default_factory=list)

    @property
    def canvas_id(self) -> int | None:
        return self.canvas.id if self.canvas else None

    def _require_canvas(self) -> int:
        if self.canvas is None:
            raise RuntimeError("No canvas opened; call open_canvas() first")
        return self.canvas.id

    def open_canvas(self, canvas_id: int) -> CanvasWithShapes | None:
        self.canvas = self.client.get_canvas(canvas_id)
        self.cursors = []
        return self.canvas

    def reload(self) -> CanvasWithShapes | None:
        return self.open_canvas(self._require_canvas())

    # Shape mutations; each one is followed by a full reload.
    def add_shape(
        self,
        type: ShapeType | str,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str,
        z_index: int | None = None,
    ) -> ShapeOut:
        shape = self.client.create_shape(
            self._require_canvas(),
            type,
            x=x,
            y=y,
            width=width,
            height=height,
            color=color,
            z_index=z_index,
        )
        self.reload()
        return shape

    def edit_shape(self, shape_id: int, **fields: Any) -> ShapeOut | None:
        self._require_canvas()
        shape = self.client.update_shape(shape_id, **fields)
        self.reload()
        return shape

    def remove_shape(self, shape_id: int) -> bool:
        self._require_canvas()
        removed = self.client.delete_shape(shape_id)
        self.reload()
        return removed

    # Cursors
    def move_cursor(self, x: float, y: float) -> UserCursorOut | None:
        try:
            return self.client.update_cursor(
                self._require_canvas(), self.user_id, self.user_name, x, y
            )
        except (RpcError, httpx.HTTPError) as exc:
            logger.warning("Failed to update cursor: %s", exc)
            return None

    def poll_cursors(self) -> list[UserCursorOut]:
        """Fetch other users' active cursors once; failures are logged only."""

        canvas_id = self.canvas_id
        if canvas_id is None:
            return self.cursors
        try:
            fetched = self.client.get_cursors(canvas_id)
        except (RpcError, httpx.HTTPError) as exc:
            logger.warning("Failed to load cursors: %s", exc)
            return self.cursors
        self.cursors = [c for c in fetched if c.user_id != self.user_id]
        return self.cursors

    def run_cursor_loop(
        self, stop_event: threading.Event, interval: float | None = None
    ) -> None:
        """Poll until `stop_event` is set; no backoff or retry on failure."""

        period = interval if interval is not None else settings.cursor_poll_interval_seconds
        while not stop_event.is_set():
            self.poll_cursors()
            stop_event.wait(period)

    def leave(self) -> bool:
        """Drop this user's cursor from the current canvas."""

        canvas_id = self.canvas_id
        if canvas_id is None:
            return False
        try:
            return self.client.remove_cursor(canvas_id, self.user_id)
        except (RpcError, httpx.HTTPError) as exc:
            logger.warning("Failed to remove cursor: %s", exc)
            return False
