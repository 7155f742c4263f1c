import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request

from devflow import __version__
from devflow.adapters.sqlite.database import Database
from devflow.api.deps import get_settings, load_rules_cached
from devflow.rules.loader import missing_required_env
from devflow.shell.revalidation import RevalidationBus

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database handle at startup and close it at shutdown."""
    settings = get_settings()
    rules = load_rules_cached(settings.rules_path)
    logger.info("Rules loaded from %s", settings.rules_path)

    missing = missing_required_env(rules)
    if missing:
        logger.warning("Missing required environment variables: %s", ", ".join(missing))

    database = Database.from_env(rules.database.url_env)
    database.connect()

    app.state.database = database
    app.state.revalidator = RevalidationBus()
    try:
        yield
    finally:
        database.close()


app = FastAPI(
    title="DevFlow API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from devflow.api.routes import answers, questions, users  # noqa: E402

app.include_router(questions.router, prefix="/api/questions", tags=["Questions"])
app.include_router(answers.router, prefix="/api/answers", tags=["Answers"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])


@app.get("/health")
def health_check(request: Request) -> dict[str, Any]:
    """Health check endpoint."""
    database: Database = request.app.state.database
    return {
        "status": "ok" if database.connected else "degraded",
        "service": "api",
        "database": "connected" if database.connected else "unavailable",
    }
