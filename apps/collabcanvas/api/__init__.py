"""API router registration helpers.

Routers are imported lazily inside `register_routes` so importing a submodule
(e.g. the RPC registry in tests) does not build the whole app.
"""

from fastapi import FastAPI


def register_routes(app: FastAPI) -> None:
    """Attach all API routers (lazy imports)."""
    from collabcanvas.api.rpc import router as rpc_router
    from collabcanvas.api.v1.health import router as health_router

    for router in (health_router, rpc_router):
        app.include_router(router)
