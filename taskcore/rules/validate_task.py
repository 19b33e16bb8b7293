"""
Validation rule — decide whether a candidate task is acceptable.

The rule set is data, not code: an ordered list of RuleDefinition entries
interpreted by RuleSet. The server and every client run the same
definition; clients that are not Python load it from the JSON artifact
produced by ``RuleSet.to_json()`` (served at GET /api/v1/internal/task/rules).

Rules are evaluated in order and the first violation decides the reported
reason:

    1. titulo            text, required, not blank, 3..100 chars
    2. descricao         text, optional, <= 500 chars, blank -> absent
    3. data_vencimento   YYYY-MM-DD calendar date, optional
    4. data_vencimento   not earlier than today (day granularity)
    5. prioridade        one of alta / média / baixa, exact match
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from taskcore.engine.context import resolve_translation
from taskcore.engine.errors import TaskBusinessRuleError, TaskValidationError
from taskcore.records.task import Priority, TaskDraft
from taskcore.translation_sets.labels import RULE_MESSAGES

STRUCTURAL = "structural"
FORMAT = "format"
BUSINESS = "business"

RULESET_VERSION = 1

RuleKind = Literal["text", "date_format", "date_not_before", "choice"]


class RuleDefinition(BaseModel):
    """One declarative rule: which field, how to check it, what to say."""

    model_config = ConfigDict(frozen=True)

    code: str
    field: str
    kind: RuleKind
    category: Literal["structural", "format", "business"]
    params: Dict[str, Any] = Field(default_factory=dict)
    # check name -> translation key
    messages: Dict[str, str] = Field(default_factory=dict)


class RuleSetDefinition(BaseModel):
    """The shareable artifact: ordered rules plus their translations."""

    version: int = RULESET_VERSION
    rules: List[RuleDefinition]
    messages: Dict[str, Dict[str, str]] = Field(default_factory=dict)


TASK_RULES = RuleSetDefinition(
    rules=[
        RuleDefinition(
            code="invalid_title",
            field="titulo",
            kind="text",
            category=STRUCTURAL,
            params={
                "required": True,
                "max_length": 100,
                "blank": "reject",
                "min_trimmed": 3,
                "trim": True,
            },
            messages={
                "required": "title_required",
                "type": "title_type",
                "max_length": "title_max_length",
                "blank": "title_blank",
                "min_trimmed": "title_min_length",
            },
        ),
        RuleDefinition(
            code="invalid_description",
            field="descricao",
            kind="text",
            category=STRUCTURAL,
            params={"required": False, "max_length": 500, "blank": "absent"},
            messages={
                "type": "description_type",
                "max_length": "description_max_length",
            },
        ),
        RuleDefinition(
            code="invalid_due_date_format",
            field="data_vencimento",
            kind="date_format",
            category=FORMAT,
            params={"pattern": r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"},
            messages={"type": "due_date_type", "format": "due_date_format"},
        ),
        RuleDefinition(
            code="due_date_in_past",
            field="data_vencimento",
            kind="date_not_before",
            category=BUSINESS,
            params={"reference": "today"},
            messages={"before": "due_date_past"},
        ),
        RuleDefinition(
            code="invalid_priority",
            field="prioridade",
            kind="choice",
            category=STRUCTURAL,
            params={"required": True, "choices": [p.value for p in Priority]},
            messages={
                "required": "priority_choice",
                "choice": "priority_choice",
            },
        ),
    ],
    messages=RULE_MESSAGES,
)


@dataclass(frozen=True)
class RuleViolation:
    """A single failed check, attributable to one field."""

    field: str
    rule: str
    category: str
    check: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "field": self.field,
            "rule": self.rule,
            "category": self.category,
            "check": self.check,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Rule interpreters — one per kind. Each returns (normalized_value, failed_check).
# ---------------------------------------------------------------------------

def _check_text(params: Mapping[str, Any], value: Any) -> Tuple[Any, Optional[str]]:
    if value is None:
        return None, ("required" if params.get("required") else None)
    if not isinstance(value, str):
        return None, "type"

    max_length = params.get("max_length")
    if max_length is not None and len(value) > max_length:
        return None, "max_length"

    stripped = value.strip()
    if not stripped:
        if params.get("blank") == "absent":
            return None, None
        return None, "blank"

    min_trimmed = params.get("min_trimmed")
    if min_trimmed is not None and len(stripped) < min_trimmed:
        return None, "min_trimmed"

    return (stripped if params.get("trim") else value), None


def _check_date_format(params: Mapping[str, Any], value: Any) -> Tuple[Any, Optional[str]]:
    if value is None:
        return None, None
    if not isinstance(value, str):
        return None, "type"
    if not value.strip():
        return None, None
    if not re.fullmatch(params["pattern"], value):
        return None, "format"
    try:
        return date.fromisoformat(value), None
    except ValueError:
        return None, "format"


def _check_date_not_before(
    params: Mapping[str, Any], value: Any, today: date
) -> Tuple[Any, Optional[str]]:
    if value is None:
        return None, None
    if value < today:
        return value, "before"
    return value, None


def _check_choice(params: Mapping[str, Any], value: Any) -> Tuple[Any, Optional[str]]:
    if value is None:
        return None, ("required" if params.get("required") else None)
    if not isinstance(value, str) or value not in params["choices"]:
        return None, "choice"
    return value, None


_RAW_CHECKERS: Dict[str, Callable[[Mapping[str, Any], Any], Tuple[Any, Optional[str]]]] = {
    "text": _check_text,
    "date_format": _check_date_format,
    "choice": _check_choice,
}


class RuleSet:
    """
    Interpreter for a RuleSetDefinition.

    ``check()`` evaluates every rule and returns the normalized values plus
    all violations; ``validate()`` returns a TaskDraft or raises for the
    first violation.
    """

    def __init__(self, definition: RuleSetDefinition = TASK_RULES):
        self._definition = definition

    @property
    def definition(self) -> RuleSetDefinition:
        return self._definition

    @property
    def fields(self) -> List[str]:
        seen: List[str] = []
        for rule in self._definition.rules:
            if rule.field not in seen:
                seen.append(rule.field)
        return seen

    # -- evaluation ---------------------------------------------------------

    def check(
        self,
        candidate: Mapping[str, Any],
        today: date,
        lang: Optional[str] = None,
    ) -> Tuple[Dict[str, Any], List[RuleViolation]]:
        """
        Run every rule in order against ``candidate``.

        A field that already failed a rule is not checked by later rules, so a
        malformed due date never also reports a business-rule violation.
        """
        normalized: Dict[str, Any] = {}
        violations: List[RuleViolation] = []
        failed_fields: set = set()

        for rule in self._definition.rules:
            if rule.field in failed_fields:
                continue

            if rule.kind == "date_not_before":
                value, failed = _check_date_not_before(
                    rule.params, normalized.get(rule.field), today
                )
            else:
                value, failed = _RAW_CHECKERS[rule.kind](rule.params, candidate.get(rule.field))

            if failed is None:
                normalized[rule.field] = value
                continue

            failed_fields.add(rule.field)
            normalized.pop(rule.field, None)
            violations.append(
                RuleViolation(
                    field=rule.field,
                    rule=rule.code,
                    category=rule.category,
                    check=failed,
                    message=self._message(rule, failed, lang),
                )
            )

        return normalized, violations

    def validate(
        self,
        candidate: Mapping[str, Any],
        today: date,
        lang: Optional[str] = None,
    ) -> TaskDraft:
        """
        Accept ``candidate`` and return the normalized draft, or raise.

        Raises:
            TaskBusinessRuleError: First violation is a business rule (INVALID_DUE_DATE).
            TaskValidationError: First violation is structural or format (VALIDATION_ERROR).
        """
        normalized, violations = self.check(candidate, today, lang=lang)
        if violations:
            raise build_rejection(violations)
        return TaskDraft(
            title=normalized["titulo"],
            description=normalized.get("descricao"),
            due_date=normalized.get("data_vencimento"),
            priority=Priority(normalized["prioridade"]),
        )

    def field_errors(
        self,
        candidate: Mapping[str, Any],
        today: date,
        lang: Optional[str] = None,
    ) -> Dict[str, str]:
        """Map each offending field to its message, for inline form rendering."""
        _, violations = self.check(candidate, today, lang=lang)
        return {v.field: v.message for v in violations}

    # -- messages -----------------------------------------------------------

    def _message(self, rule: RuleDefinition, failed: str, lang: Optional[str]) -> str:
        key = rule.messages.get(failed, failed)
        params = dict(rule.params)
        if "choices" in params:
            params["choices"] = self._join_choices(params["choices"], lang)
        return resolve_translation(self._definition.messages, key, lang=lang, **params)

    def _join_choices(self, choices: Sequence[str], lang: Optional[str]) -> str:
        if len(choices) < 2:
            return "".join(choices)
        conjunction = resolve_translation(self._definition.messages, "or", lang=lang)
        return f"{', '.join(choices[:-1])} {conjunction} {choices[-1]}"

    # -- artifact -----------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return self._definition.model_dump(mode="json")

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self._definition.model_dump_json(indent=indent)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleSet":
        return cls(RuleSetDefinition.model_validate(data))

    @classmethod
    def from_json(cls, raw: str) -> "RuleSet":
        return cls(RuleSetDefinition.model_validate_json(raw))


def build_rejection(violations: Sequence[RuleViolation]) -> TaskValidationError:
    """Build the exception for a non-empty violation list; the first one decides."""
    first = violations[0]
    error_cls = TaskBusinessRuleError if first.category == BUSINESS else TaskValidationError
    return error_cls(
        first.message,
        field=first.field,
        rule=first.rule,
        validation_errors=[v.to_dict() for v in violations],
    )


task_rules = RuleSet(TASK_RULES)


def validate_task(candidate: Mapping[str, Any], today: date, lang: Optional[str] = None) -> TaskDraft:
    """Validate ``candidate`` with the shared task rule set."""
    return task_rules.validate(candidate, today, lang=lang)
