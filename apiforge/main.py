import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from sqlalchemy import text
from alembic.config import Config
from alembic import command
from apiforge.core.config import settings
from apiforge.core.logging import configure_logging
from apiforge.api.routes import router as api_router
from apiforge.db.session import engine

configure_logging()
log = logging.getLogger(__name__)

NO_CONTEXT = {"project_id": "-", "stage": "startup"}


def wait_for_database(max_retries: int = 30, retry_delay: float = 1.0) -> None:
    """Block until the configured database answers a trivial query."""
    for attempt in range(max_retries):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            log.info("Database connection successful", extra=NO_CONTEXT)
            return
        except Exception as e:
            if attempt < max_retries - 1:
                log.warning("Database not ready, retrying in %s seconds (attempt %d/%d): %s",
                            retry_delay, attempt + 1, max_retries, e, extra=NO_CONTEXT)
                time.sleep(retry_delay)
            else:
                log.error("Database connection failed after %d attempts", max_retries, extra=NO_CONTEXT)
                raise


def run_migrations(config_path: str = "alembic.ini") -> None:
    """Upgrade the project store schema to the latest revision."""
    try:
        log.info("Running database migrations...", extra=NO_CONTEXT)
        command.upgrade(Config(config_path), "head")
        log.info("Database migrations completed", extra=NO_CONTEXT)
    except Exception as e:
        log.error("Database migration failed: %s", e, exc_info=True, extra=NO_CONTEXT)
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("Starting %s (%s)", settings.app_name, settings.app_env, extra=NO_CONTEXT)
    wait_for_database()
    run_migrations()
    yield
    log.info("Shutting down API server...", extra={"project_id": "-", "stage": "shutdown"})


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    lifespan=lifespan,
)
app.include_router(api_router, prefix="/v1")
