"""Named procedure registry backing the RPC endpoint.

A procedure is a query (read-only, safe to retry) or a mutation. Input is
validated against the procedure's pydantic model before the handler runs, and
the handler's return value is serialized through the declared output type.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlmodel import Session

from collabcanvas.core.exceptions import InvalidInputError, MethodNotAllowedError, NotFoundError

Handler = Callable[[Session, Any], Any]


class ProcedureKind(str, Enum):
    query = "query"
    mutation = "mutation"


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: ProcedureKind
    handler: Handler
    output: TypeAdapter
    input_model: type[BaseModel] | None = None

    def parse_input(self, raw: Any) -> BaseModel | None:
        if self.input_model is None:
            return None
        try:
            return self.input_model.model_validate(raw)
        except ValidationError as exc:
            raise InvalidInputError(
                f"Invalid input for procedure '{self.name}'",
                details=json.loads(exc.json(include_url=False)),
            ) from exc

    def serialize(self, result: Any) -> Any:
        validated = self.output.validate_python(result, from_attributes=True)
        return self.output.dump_python(validated, mode="json", by_alias=False)


@dataclass
class ProcedureRegistry:
    procedures: dict[str, Procedure] = field(default_factory=dict)

    def register(
        self,
        name: str,
        *,
        kind: ProcedureKind,
        output: Any,
        input_model: type[BaseModel] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator binding a handler to a procedure name."""

        def decorator(handler: Handler) -> Handler:
            if name in self.procedures:
                raise ValueError(f"Procedure '{name}' is already registered")
            self.procedures[name] = Procedure(
                name=name,
                kind=kind,
                handler=handler,
                output=TypeAdapter(output),
                input_model=input_model,
            )
            return handler

        return decorator

    def query(self, name: str, *, output: Any, input_model: type[BaseModel] | None = None):
        return self.register(name, kind=ProcedureKind.query, output=output, input_model=input_model)

    def mutation(self, name: str, *, output: Any, input_model: type[BaseModel] | None = None):
        return self.register(
            name, kind=ProcedureKind.mutation, output=output, input_model=input_model
        )

    def resolve(self, name: str, kind: ProcedureKind) -> Procedure:
        procedure = self.procedures.get(name)
        if procedure is None:
            raise NotFoundError(f"No procedure named '{name}'", code="procedure_not_found")
        if procedure.kind is not kind:
            raise MethodNotAllowedError(
                f"'{name}' is a {procedure.kind.value}, not a {kind.value}"
            )
        return procedure

    def call(self, name: str, kind: ProcedureKind, raw_input: Any, session: Session) -> Any:
        procedure = self.resolve(name, kind)
        payload = procedure.parse_input(raw_input)
        return procedure.serialize(procedure.handler(session, payload))

    def names(self, kind: ProcedureKind | None = None) -> list[str]:
        return sorted(n for n, p in self.procedures.items() if kind is None or p.kind is kind)
