"""
Web API — POST /api/v1/internal/task.

Request body (wire names): titulo, descricao, data_vencimento, prioridade.
201 → {"success": true, "data": <task>}; 400 → error envelope with
VALIDATION_ERROR or INVALID_DUE_DATE.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from taskcore.engine.context import (
    DEFAULT_LANGUAGE,
    ExecutionContext,
    resolve_translation,
    set_execution_context,
)
from taskcore.engine.errors import TaskValidationError
from taskcore.processes.create_task import TaskCreationService
from taskcore.translation_sets.labels import RULE_MESSAGES
from taskcore.web_apis.responses import success_response

SUPPORTED_LANGUAGES = ("pt", "en")

router = APIRouter(prefix="/api/v1/internal", tags=["task"])


def _preferred_language(request: Request) -> str:
    header = request.headers.get("accept-language", "")
    first = header.split(",")[0].strip()
    primary = first.split(";")[0].split("-")[0].lower()
    return primary if primary in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


async def current_owner(request: Request) -> ExecutionContext:
    """
    Resolve the acting owner.

    Authentication is out of scope, so this returns the configured placeholder
    owner. Swap it through ``app.dependency_overrides[current_owner]``.
    """
    config = request.app.state.config
    ctx = ExecutionContext(
        user_id=config.tasks.default_owner_id,
        username="placeholder",
        preferred_language=_preferred_language(request),
    )
    set_execution_context(ctx)
    request.state.execution = ctx
    return ctx


@router.post("/task", status_code=201)
async def create_task(
    request: Request,
    ctx: ExecutionContext = Depends(current_owner),
) -> Dict[str, Any]:
    """Create a task. The server re-validates every field."""
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        message = resolve_translation(RULE_MESSAGES, "invalid_body", lang=ctx.preferred_language)
        raise TaskValidationError(
            message,
            rule="invalid_body",
            execution_id=ctx.execution_id,
            validation_errors=[{
                "field": None,
                "rule": "invalid_body",
                "category": "structural",
                "check": "type",
                "message": message,
            }],
        )

    service: TaskCreationService = request.app.state.task_service
    task = service.create(payload, owner_id=ctx.user_id, lang=ctx.preferred_language)
    return success_response(task.to_wire())


@router.get("/task/rules")
async def task_rules_artifact(request: Request) -> Dict[str, Any]:
    """The rule definition the server enforces, for form clients to compile."""
    service: TaskCreationService = request.app.state.task_service
    return service.rules.to_dict()
