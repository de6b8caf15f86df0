import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tcgbackend.api import auth_router, cards_router, decks_router, health_router
from tcgbackend.api.errors import register_error_handlers
from tcgbackend.config import DEFAULT_JWT_SECRET, Settings, settings
from tcgbackend.db.database import init_db

logger = logging.getLogger(__name__)


def _app_version() -> str:
    try:
        return pkg_version("tcgbackend")
    except PackageNotFoundError:
        return "0.0.0"


def warn_on_insecure_settings(config: Settings) -> bool:
    """Log a warning when tokens would be signed with the built-in secret."""
    if config.jwt_secret != DEFAULT_JWT_SECRET:
        return False
    logger.warning(
        "JWT_SECRET is not set; tokens are signed with the development default. "
        "Set JWT_SECRET before exposing this service."
    )
    return True


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    warn_on_insecure_settings(settings)
    await init_db()
    logger.info("Database ready")
    yield


app = FastAPI(
    title=settings.app_name,
    version=_app_version(),
    lifespan=lifespan,
)

app.include_router(auth_router)
app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(health_router)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def run() -> None:
    """CLI entry point: serve the API with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Server starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
