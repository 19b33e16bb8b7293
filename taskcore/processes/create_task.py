"""Task creation process — validate → create, the single entry point for callers."""

from __future__ import annotations

import logging
import time
from datetime import date, timezone, tzinfo
from typing import Any, Mapping, Optional

from taskcore.db.task_store import TaskStore
from taskcore.engine.clock import Clock, today_in, utc_now
from taskcore.engine.context import get_execution_context
from taskcore.engine.errors import TaskValidationError
from taskcore.engine.logging import log, log_task_created, log_task_rejected
from taskcore.records.task import Task
from taskcore.rules.validate_task import RuleSet, task_rules

logger = logging.getLogger("taskcore.processes.create_task")


class TaskCreationService:
    """
    Authoritative create: every rule is re-run here regardless of what the
    client already checked, then exactly one store mutation happens.

    A rejected call performs no mutation and is never retried.
    """

    def __init__(
        self,
        store: TaskStore,
        rules: RuleSet = task_rules,
        zone: Optional[tzinfo] = None,
        clock: Clock = utc_now,
    ):
        self._store = store
        self._rules = rules
        self._zone = zone or timezone.utc
        self._clock = clock

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def today(self) -> date:
        return today_in(self._zone, self._clock)

    def create(
        self,
        fields: Mapping[str, Any],
        owner_id: int,
        lang: Optional[str] = None,
    ) -> Task:
        """
        Validate ``fields`` (wire names) and create the task for ``owner_id``.

        Raises:
            TaskValidationError / TaskBusinessRuleError: the input was rejected.
        """
        ctx = get_execution_context()
        execution_id = ctx.execution_id if ctx else None
        start = time.monotonic()

        try:
            draft = self._rules.validate(fields, self.today(), lang=lang)
        except TaskValidationError as e:
            e.execution_id = e.execution_id or execution_id
            logger.info("Task rejected: %s (%s on %s)", e.code, e.rule, e.field)
            log(log_task_rejected(
                code=e.code,
                field=e.field,
                rule=e.rule,
                owner_id=owner_id,
                execution_id=execution_id,
                violation_count=len(e.validation_errors),
            ))
            raise

        task = self._store.create(draft, owner_id)
        duration_ms = round((time.monotonic() - start) * 1000, 2)
        logger.info("Task %d created for owner %d", task.id, owner_id)
        log(log_task_created(
            task_id=task.id,
            owner_id=owner_id,
            priority=task.priority.value,
            execution_id=execution_id,
            has_due_date=task.due_date is not None,
            duration_ms=duration_ms,
        ))
        return task
