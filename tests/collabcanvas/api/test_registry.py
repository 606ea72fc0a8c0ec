import pytest
from collabcanvas.api.rpc import ProcedureKind, ProcedureRegistry, rpc
from collabcanvas.core.exceptions import InvalidInputError, MethodNotAllowedError, NotFoundError
from pydantic import BaseModel


class _Echo(BaseModel):
    value: int


def test_registered_procedures_match_public_surface() -> None:
    assert rpc.names(ProcedureKind.query) == [
        "getCanvas",
        "getCanvases",
        "getCursors",
        "getShapes",
        "healthcheck",
    ]
    assert rpc.names(ProcedureKind.mutation) == [
        "createCanvas",
        "createShape",
        "deleteCanvas",
        "deleteShape",
        "removeCursor",
        "updateCanvas",
        "updateCursor",
        "updateShape",
    ]


def test_validation_runs_before_handler() -> None:
    registry = ProcedureRegistry()
    calls: list[int] = []

    @registry.mutation("echo", input_model=_Echo, output=int)
    def _echo(_session, payload: _Echo) -> int:
        calls.append(payload.value)
        return payload.value

    with pytest.raises(InvalidInputError) as excinfo:
        registry.call("echo", ProcedureKind.mutation, {"value": "abc"}, session=None)

    assert calls == []
    assert excinfo.value.details[0]["loc"] == ["value"]
    assert registry.call("echo", ProcedureKind.mutation, {"value": "7"}, session=None) == 7
    assert calls == [7]


def test_resolve_errors() -> None:
    registry = ProcedureRegistry()

    @registry.query("ping", output=str)
    def _ping(_session, _payload) -> str:
        return "pong"

    with pytest.raises(NotFoundError):
        registry.resolve("missing", ProcedureKind.query)
    with pytest.raises(MethodNotAllowedError):
        registry.resolve("ping", ProcedureKind.mutation)
    assert registry.call("ping", ProcedureKind.query, None, session=None) == "pong"


def test_duplicate_registration_rejected() -> None:
    registry = ProcedureRegistry()
    registry.query("ping", output=str)(lambda _s, _p: "pong")

    with pytest.raises(ValueError):
        registry.query("ping", output=str)(lambda _s, _p: "again")
