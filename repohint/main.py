from contextlib import asynccontextmanager

import structlog
from cachetools import TTLCache
from fastapi import FastAPI

from repohint import __version__
from repohint.api.check import router as check_router
from repohint.checks.factory import create_pr_check
from repohint.checks.orchestrator import PullRequestCheck
from repohint.core.config import Config

logger = structlog.get_logger(__name__)

RECHECK_HISTORY_SIZE = 1024


def create_app(config: Config, checker: PullRequestCheck | None = None) -> FastAPI:
    """Build the re-check server for one repository configuration."""
    checker = checker or create_pr_check(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("repohint re-check server starting up", repo=config.github.repo)
        yield
        # Close the GitHub session on shutdown
        await checker.client.close()
        logger.info("repohint re-check server shut down")

    app = FastAPI(
        title="repohint",
        description="Pull request title and description re-check server.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.checker = checker
    app.state.recheck_history = TTLCache(maxsize=RECHECK_HISTORY_SIZE, ttl=config.server.recheck_cooldown)

    app.include_router(check_router, prefix="/api", tags=["Re-check"])

    @app.get("/", tags=["Health Check"])
    async def read_root():
        """A simple health check endpoint to confirm the service is running."""
        return {"status": "ok", "repo": config.github.repo}

    return app
