from .procedures import rpc
from .registry import Procedure, ProcedureKind, ProcedureRegistry
from .routes import build_router

router = build_router(rpc)

__all__ = ["Procedure", "ProcedureKind", "ProcedureRegistry", "build_router", "router", "rpc"]
