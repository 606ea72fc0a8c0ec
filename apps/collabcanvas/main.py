import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from collabcanvas.api import register_routes
from collabcanvas.core.database import create_db_and_tables
from collabcanvas.core.exceptions import register_exception_handlers
from collabcanvas.core.logging import setup_logging
from collabcanvas.core.settings import settings

# Initialize logging early so all modules inherit the handlers/level
setup_logging(settings.effective_log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_db_and_tables()
    logger.info("Database tables ensured")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="CollabCanvas API", lifespan=lifespan)
    register_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    return app


app = create_app()
logger.info("CollabCanvas API initialized")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
