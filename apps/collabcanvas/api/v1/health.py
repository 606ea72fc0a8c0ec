"""Liveness probe: the process is up and the canvas store answers."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from collabcanvas.api.dependencies import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get("")
def health(session: Session = Depends(get_db_session)):
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return JSONResponse(status_code=503, content={"ok": False, "database": "unavailable"})
    return {"ok": True, "database": "ok"}
