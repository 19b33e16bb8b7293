"""
taskcore HTTP server — FastAPI application factory.

Run:
    uvicorn --factory taskcore.web_apis.server:create_app --port 8000

Or:
    taskcore serve
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from taskcore import __version__
from taskcore.db.task_store import TaskStore
from taskcore.engine.clock import Clock, utc_now
from taskcore.engine.config import TaskCoreConfig, get_config
from taskcore.engine.errors import TaskValidationError
from taskcore.engine.logging import (
    init_logging,
    log,
    log_system_event,
    log_web_api_request,
    shutdown_logging,
)
from taskcore.processes.create_task import TaskCreationService
from taskcore.rules.validate_task import RuleSet, task_rules
from taskcore.web_apis import create_task
from taskcore.web_apis.responses import error_response

logger = logging.getLogger("taskcore.web_apis.server")


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    total_tasks: int


def create_app(
    config: Optional[TaskCoreConfig] = None,
    store: Optional[TaskStore] = None,
    rules: RuleSet = task_rules,
    clock: Clock = utc_now,
) -> FastAPI:
    """
    Build the application. Each app owns its own store, so two apps never
    share tasks or identifiers.
    """
    config = config or get_config()
    if store is None:
        store = TaskStore(clock=clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.logging.enabled:
            queue_cfg = config.logging.async_queue
            init_logging(
                log_dir=config.logging.directory,
                flush_interval_ms=queue_cfg.flush_interval_ms,
                flush_batch_size=queue_cfg.flush_batch_size,
                max_queue_size=queue_cfg.max_queue_size,
            )
        log(log_system_event("startup", details={"environment": config.environment}))
        logger.info("taskcore %s started (%s)", __version__, config.environment)
        yield
        log(log_system_event("shutdown", details={"total_tasks": len(store)}))
        if config.logging.enabled:
            shutdown_logging()

    app = FastAPI(
        title="taskcore",
        description="Task creation with shared client/server validation",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.started_at = datetime.now(timezone.utc)
    app.state.task_service = TaskCreationService(
        store=store,
        rules=rules,
        zone=config.zone,
        clock=clock,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        ctx = getattr(request.state, "execution", None)
        log(log_web_api_request(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
            execution_id=ctx.execution_id if ctx else None,
            user_id=ctx.user_id if ctx else None,
        ))
        return response

    @app.exception_handler(TaskValidationError)
    async def validation_error_handler(request: Request, exc: TaskValidationError):
        return JSONResponse(
            status_code=400,
            content=error_response(
                exc.message,
                exc.code,
                details=exc.validation_errors,
                field=exc.field,
                rule=exc.rule,
            ),
        )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        uptime = (datetime.now(timezone.utc) - app.state.started_at).total_seconds()
        return HealthResponse(
            status="healthy",
            version=__version__,
            uptime_seconds=round(uptime, 2),
            total_tasks=len(store),
        )

    app.include_router(create_task.router)
    return app
