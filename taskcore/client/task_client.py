"""
Client side of task creation — advisory form validation and the HTTP
transport adapter.

The client runs the same rule definition as the server, but only to give
fast feedback. It never replaces the server check: the due-date rule is
evaluated against ``today - grace_days`` so clock or timezone skew can
never make the client reject a date the server would accept.

Usage:
    with TaskClient("http://localhost:8000") as client:
        task = client.create({"titulo": "Buy milk", "prioridade": "alta"})
"""

from __future__ import annotations

import logging
from datetime import date, timedelta, timezone, tzinfo
from typing import Any, Dict, Mapping, Optional

import httpx

from taskcore.engine.clock import Clock, today_in, utc_now
from taskcore.engine.errors import TaskTransportError, TaskValidationError, error_for_code
from taskcore.records.task import Task, TaskDraft
from taskcore.rules.validate_task import RuleSet, task_rules

logger = logging.getLogger("taskcore.client")

TASK_PATH = "/api/v1/internal/task"
RULES_PATH = "/api/v1/internal/task/rules"


class TaskFormValidator:
    """Advisory validator for a task form, run before any network call."""

    def __init__(
        self,
        rules: RuleSet = task_rules,
        grace_days: int = 1,
        zone: Optional[tzinfo] = None,
        clock: Clock = utc_now,
    ):
        if grace_days < 0:
            raise ValueError("grace_days cannot be negative")
        self.rules = rules
        self._grace_days = grace_days
        self._zone = zone or timezone.utc
        self._clock = clock

    def reference_day(self) -> date:
        """Earliest due date the form accepts."""
        return today_in(self._zone, self._clock) - timedelta(days=self._grace_days)

    def errors(self, values: Mapping[str, Any], lang: Optional[str] = None) -> Dict[str, str]:
        """``{field: message}`` for inline rendering; empty when the form is acceptable."""
        return self.rules.field_errors(values, self.reference_day(), lang=lang)

    def validate(self, values: Mapping[str, Any], lang: Optional[str] = None) -> TaskDraft:
        return self.rules.validate(values, self.reference_day(), lang=lang)


class TaskClient:
    """
    HTTP transport adapter for the task creation endpoint.

    Accepts either a ``base_url`` or a ready ``httpx.Client`` (which may be a
    FastAPI ``TestClient``).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        validator: Optional[TaskFormValidator] = None,
        language: Optional[str] = None,
        timeout: float = 10.0,
    ):
        if http_client is None:
            if base_url is None:
                raise ValueError("TaskClient needs a base_url or an http_client")
            http_client = httpx.Client(base_url=base_url, timeout=timeout)
            self._owns_client = True
        else:
            self._owns_client = False
        self._http = http_client
        self.validator = validator or TaskFormValidator()
        self._language = language

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> "TaskClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    # -- operations ---------------------------------------------------------

    def create(self, fields: Mapping[str, Any]) -> Task:
        """
        Validate locally, then submit.

        Raises:
            TaskValidationError / TaskBusinessRuleError: rejected locally (no
                request sent) or by the server (server's message).
            TaskTransportError: any other response or a network failure.
        """
        self.validator.validate(fields, lang=self._language)

        payload = {name: fields.get(name) for name in self.validator.rules.fields}
        response = self._request("POST", TASK_PATH, json=payload)
        body = self._json_body(response)

        if response.status_code == 201 and isinstance(body, dict) and "data" in body:
            return Task.from_wire(body["data"])

        if response.status_code == 400 and isinstance(body, dict):
            error = body.get("error") or {}
            if error.get("code"):
                raise self._rejection_from_envelope(error)

        raise TaskTransportError(
            f"Unexpected response from task API: HTTP {response.status_code}",
            status_code=response.status_code,
            response_body=body,
        )

    def fetch_rules(self) -> RuleSet:
        """Load the server's rule definition."""
        response = self._request("GET", RULES_PATH)
        if response.status_code != 200:
            raise TaskTransportError(
                f"Could not fetch task rules: HTTP {response.status_code}",
                status_code=response.status_code,
                response_body=self._json_body(response),
            )
        return RuleSet.from_dict(response.json())

    def sync_rules(self) -> None:
        """Replace the local rule definition with the server's."""
        self.validator.rules = self.fetch_rules()

    # -- helpers ------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {"Accept-Language": self._language} if self._language else None
        try:
            return self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Task API %s %s failed: %s", method, path, e)
            raise TaskTransportError(f"Task API unreachable: {e}") from e

    @staticmethod
    def _json_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _rejection_from_envelope(error: Dict[str, Any]) -> TaskValidationError:
        error_cls = error_for_code(error.get("code"))
        return error_cls(
            error.get("message", ""),
            field=error.get("field"),
            rule=error.get("rule"),
            validation_errors=error.get("details") or [],
        )
