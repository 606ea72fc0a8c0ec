from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from typing import List, Optional

from sqlmodel import Session

from collabcanvas.core.database import SessionLocal
from collabcanvas.core.logging import setup_logging
from collabcanvas.core.settings import settings
from collabcanvas.services.cursor_service import CursorService

logger = logging.getLogger(__name__)


def main(
    argv: Optional[List[str]] = None,
    *,
    session_factory: Callable[[], Session] = SessionLocal,
) -> int:
    parser = argparse.ArgumentParser(
        description="Delete cursors that have not been refreshed within the TTL window"
    )
    parser.add_argument("--canvas-id", type=int, default=None, help="Only prune this canvas")
    parser.add_argument(
        "--ttl",
        type=int,
        default=settings.cursor_ttl_seconds,
        help="Staleness window in seconds (default: CURSOR_TTL_SECONDS)",
    )
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    if args.ttl < 1:
        parser.error("--ttl must be at least 1 second")

    setup_logging(args.log_level or settings.effective_log_level)
    with session_factory() as session:
        removed = CursorService(session, ttl_seconds=args.ttl).prune_stale_cursors(
            canvas_id=args.canvas_id
        )
    print(f"Removed {removed} stale cursor(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
