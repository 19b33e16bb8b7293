"""Task validation rules."""

from taskcore.rules.validate_task import (  # noqa: F401
    TASK_RULES,
    RuleDefinition,
    RuleSet,
    RuleSetDefinition,
    RuleViolation,
    task_rules,
    validate_task,
)

__all__ = [
    "TASK_RULES",
    "RuleDefinition",
    "RuleSet",
    "RuleSetDefinition",
    "RuleViolation",
    "task_rules",
    "validate_task",
]
