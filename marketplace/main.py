from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.api.account import router as account_router
from marketplace.api.auth import router as auth_router
from marketplace.api.catalog import router as catalog_router
from marketplace.api.enrollments import router as enrollments_router
from marketplace.api.errors import register_error_handlers
from marketplace.api.health import router as health_router
from marketplace.api.marketing import router as marketing_router
from marketplace.api.metrics_endpoint import router as metrics_router
from marketplace.core.config import SETTINGS
from marketplace.core.logging import setup_logging
from marketplace.db import engine
from marketplace.db.redis import lifespan_redis
from marketplace.db.seed import seed_repos
from marketplace.middleware.metrics import MetricsMiddleware
from marketplace.middleware.request_context import (
    RequestContextMiddleware,
    install_log_filter,
)
from marketplace.repos.registry import memory_repos

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_log_filter()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Nested so teardown runs in reverse order.
    async with engine.lifespan_db():
        if engine.engine is None and SETTINGS.seed_sample_data:
            await seed_repos(memory_repos)
        async with lifespan_redis():
            yield


app = FastAPI(
    title="course-marketplace",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last added runs first: RequestContext -> Metrics -> CORS -> route.
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(catalog_router)
app.include_router(marketing_router)
app.include_router(enrollments_router)
app.include_router(account_router)

logger.info(
    "course-marketplace started  env=%s log_level=%s port=%d docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
)
