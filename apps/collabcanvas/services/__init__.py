"""Service layer for canvases, shapes and cursors."""

from collabcanvas.services.canvas_service import CanvasService
from collabcanvas.services.cursor_service import CursorService

__all__ = ["CanvasService", "CursorService"]
