"""
taskcore Error Hierarchy — Structured exceptions shared by server and client.

Every error serializes to JSON so it can be written to the event log or
returned inside an HTTP error envelope.

Hierarchy:
    TaskCoreError
    ├── TaskValidationError        — Input rejected by the rule set (VALIDATION_ERROR)
    │   └── TaskBusinessRuleError  — Well-formed input violating a domain rule (INVALID_DUE_DATE)
    ├── TaskTransportError         — Unexpected HTTP response at the transport adapter
    └── TaskConfigError            — Invalid taskcore.yaml
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_DUE_DATE = "INVALID_DUE_DATE"


class TaskCoreError(Exception):
    """
    Base error for all taskcore failures.
    All context is kept serializable to JSON.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.execution_id: Optional[str] = context.get("execution_id")
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a JSON-compatible dict for logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "execution_id": self.execution_id,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k not in ("execution_id", "validation_errors")
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.execution_id:
            parts.append(f"execution_id={self.execution_id}")
        return " | ".join(parts)


class TaskValidationError(TaskCoreError):
    """
    Candidate task rejected by the rule set.

    ``field`` and ``rule`` identify the first violated rule; the message is
    that rule's human-readable reason. ``validation_errors`` holds every
    violation found, in rule order.
    """

    code: str = VALIDATION_ERROR

    def __init__(self, message: str, **context: Any):
        self.field: Optional[str] = context.get("field")
        self.rule: Optional[str] = context.get("rule")
        self.validation_errors: List[Dict[str, Any]] = list(
            context.get("validation_errors") or []
        )
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["code"] = self.code
        d["field"] = self.field
        d["rule"] = self.rule
        d["validation_errors"] = self.validation_errors
        return d

    def to_envelope(self) -> Dict[str, Any]:
        """Error body returned to HTTP callers."""
        return {
            "message": self.message,
            "code": self.code,
            "field": self.field,
            "rule": self.rule,
            "details": self.validation_errors,
        }


class TaskBusinessRuleError(TaskValidationError):
    """
    Input was well formed but violated a time-sensitive domain rule
    (due date earlier than today). Resubmitting with a fresh date fixes it.
    """

    code: str = INVALID_DUE_DATE


class TaskTransportError(TaskCoreError):
    """The server answered with something other than a success or a rejection."""

    def __init__(self, message: str, **context: Any):
        self.status_code: Optional[int] = context.get("status_code")
        self.response_body: Optional[Any] = context.get("response_body")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["status_code"] = self.status_code
        return d


class TaskConfigError(TaskCoreError):
    """Configuration error — invalid taskcore.yaml."""
    pass


def error_for_code(code: Optional[str]) -> type:
    """Map an envelope code back to its exception class."""
    if code == INVALID_DUE_DATE:
        return TaskBusinessRuleError
    return TaskValidationError
