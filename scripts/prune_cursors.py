#!/usr/bin/env python
"""Prune stale live-cursor rows.

Usage:
    python scripts/prune_cursors.py
    python scripts/prune_cursors.py --canvas-id 3 --ttl 60

Reads never delete stale cursors; run this from cron when the table needs
trimming.
"""

from __future__ import annotations

from _bootstrap import bootstrap

bootstrap()

from collabcanvas.services.commands.prune_cursors import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
