from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session


@contextmanager
def persistence_guard(session: Session, action: str, logger: logging.Logger) -> Iterator[None]:
    """Log, roll back and re-raise unexpected store failures for one operation."""

    try:
        yield
    except SQLAlchemyError:
        logger.exception("%s failed", action)
        session.rollback()
        raise
