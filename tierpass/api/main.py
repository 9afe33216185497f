import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from tierpass.api.deps import get_rules, get_service, get_settings, reset_service
from tierpass.app_shell.config import validate_ops_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules, validate and open the store on startup (fail-fast)
    try:
        rules = get_rules(settings)
        validate_ops_rules(rules, settings.data_dir)
        get_service(settings, rules)
        logger.info("Rules loaded from %s", settings.rules_path)
    except (OSError, ValueError) as e:
        logger.critical("Startup failed: %s", e)
        sys.exit(1)

    yield
    reset_service()


app = FastAPI(
    title="TierPass API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from tierpass.api.routes import admin, content, earnings, subscriptions  # noqa: E402

app.include_router(subscriptions.router, prefix="/api/subscriptions", tags=["Subscriptions"])
app.include_router(content.router, prefix="/api/content", tags=["Content"])
app.include_router(earnings.router, prefix="/api/earnings", tags=["Earnings"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
