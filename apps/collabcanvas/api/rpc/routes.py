from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from sqlmodel import Session

from collabcanvas.api.dependencies import get_db_session
from collabcanvas.core.exceptions import BadRequestError
from collabcanvas.core.settings import settings

from .registry import ProcedureKind, ProcedureRegistry


def _decode_input(raw: str | bytes | None, source: str) -> Any:
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BadRequestError(f"{source} is not valid JSON", code="invalid_json") from exc


async def _mutation_input(request: Request) -> Any:
    return _decode_input(await request.body(), "Request body")


def build_router(registry: ProcedureRegistry, *, prefix: str | None = None) -> APIRouter:
    """Expose every procedure in `registry` under `{prefix}/{name}`.

    Queries are served on GET with JSON-encoded `input`; mutations on POST with
    the input as the request body.
    """

    router = APIRouter(prefix=prefix if prefix is not None else settings.rpc_prefix, tags=["rpc"])

    @router.get("/{procedure_name}")
    def run_query(
        procedure_name: str,
        input: str | None = Query(default=None),  # noqa: A002
        session: Session = Depends(get_db_session),
    ) -> dict[str, Any]:
        data = registry.call(
            procedure_name, ProcedureKind.query, _decode_input(input, "Query input"), session
        )
        return {"result": {"data": data}}

    @router.post("/{procedure_name}")
    def run_mutation(
        procedure_name: str,
        body: Any = Depends(_mutation_input),
        session: Session = Depends(get_db_session),
    ) -> dict[str, Any]:
        data = registry.call(procedure_name, ProcedureKind.mutation, body, session)
        return {"result": {"data": data}}

    return router
