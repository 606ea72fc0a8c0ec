"""Live cursor tracking.

Cursors are upserted per (canvas, user) and expire implicitly: reads only
return rows refreshed within the TTL window. Stale rows stay in storage until
removed explicitly or pruned on demand.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlmodel import Session, select

from collabcanvas.core.settings import settings
from collabcanvas.core.utils import seconds_ago_naive, to_fixed2, utcnow_naive
from collabcanvas.models.canvas import UserCursor
from collabcanvas.services._persistence import persistence_guard

logger = logging.getLogger(__name__)


@dataclass
class CursorService:
    session: Session
    ttl_seconds: int = field(default_factory=lambda: settings.cursor_ttl_seconds)

    def _find(self, canvas_id: int, user_id: str) -> list[UserCursor]:
        stmt = (
            select(UserCursor)
            .where(UserCursor.canvas_id == canvas_id, UserCursor.user_id == user_id)
            .order_by(UserCursor.id.asc())
        )
        return list(self.session.exec(stmt))

    def update_cursor(
        self,
        *,
        canvas_id: int,
        user_id: str,
        user_name: str,
        x: float,
        y: float,
    ) -> UserCursor:
        """Create the cursor on first sight, otherwise refresh every matching row.

        Returns the oldest matching row.
        """

        with persistence_guard(self.session, "Cursor update", logger):
            existing = self._find(canvas_id, user_id)
            if existing:
                now = utcnow_naive()
                for row in existing:
                    row.user_name = user_name
                    row.x = to_fixed2(x)
                    row.y = to_fixed2(y)
                    row.updated_at = now
                    self.session.add(row)
                cursor = existing[0]
            else:
                cursor = UserCursor(
                    canvas_id=canvas_id,
                    user_id=user_id,
                    user_name=user_name,
                    x=to_fixed2(x),
                    y=to_fixed2(y),
                )
                self.session.add(cursor)
            self.session.commit()
            self.session.refresh(cursor)
        return cursor

    def get_cursors(self, canvas_id: int) -> list[UserCursor]:
        """Cursors on `canvas_id` refreshed within the last `ttl_seconds`."""

        cutoff = seconds_ago_naive(self.ttl_seconds)
        stmt = select(UserCursor).where(
            UserCursor.canvas_id == canvas_id,
            UserCursor.updated_at >= cutoff,
        )
        with persistence_guard(self.session, "Cursor retrieval", logger):
            return list(self.session.exec(stmt))

    def remove_cursor(self, canvas_id: int, user_id: str) -> bool:
        with persistence_guard(self.session, "Cursor removal", logger):
            rows = self._find(canvas_id, user_id)
            for row in rows:
                self.session.delete(row)
            self.session.commit()
        return bool(rows)

    def prune_stale_cursors(self, canvas_id: int | None = None) -> int:
        """Delete cursors older than the TTL window; returns the number removed.

        Never called from the read path.
        """

        cutoff = seconds_ago_naive(self.ttl_seconds)
        stmt = select(UserCursor).where(UserCursor.updated_at < cutoff)
        if canvas_id is not None:
            stmt = stmt.where(UserCursor.canvas_id == canvas_id)
        with persistence_guard(self.session, "Cursor pruning", logger):
            stale = list(self.session.exec(stmt))
            for row in stale:
                self.session.delete(row)
            self.session.commit()
        logger.info("Pruned %d stale cursor(s)", len(stale))
        return len(stale)
