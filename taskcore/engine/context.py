"""
taskcore Execution Context — per-request state carried in a ContextVar.

The web layer sets one ExecutionContext per request; the creation service
and the rule-message resolver read it.

Usage:
    from taskcore.engine.context import (
        ExecutionContext,
        set_execution_context,
        get_execution_context,
    )
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

DEFAULT_LANGUAGE = "pt"

current_execution_context: ContextVar[Optional["ExecutionContext"]] = ContextVar(
    "execution_context", default=None
)


@dataclass
class ExecutionContext:
    """
    Per-request execution context.

    Populated by the owner provider (a placeholder until authentication
    exists) and carried through the request lifecycle.
    """

    user_id: int
    username: str = "anonymous"
    execution_id: str = field(default_factory=lambda: f"exec_{uuid.uuid4().hex[:12]}")
    preferred_language: str = DEFAULT_LANGUAGE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging."""
        return {
            "user_id": self.user_id,
            "username": self.username,
            "execution_id": self.execution_id,
            "preferred_language": self.preferred_language,
        }


def set_execution_context(ctx: ExecutionContext) -> None:
    current_execution_context.set(ctx)


def get_execution_context() -> Optional[ExecutionContext]:
    """Get the current execution context. Returns None if not set."""
    return current_execution_context.get()


def clear_execution_context() -> None:
    current_execution_context.set(None)


def get_preferred_language() -> str:
    """
    Get the current user's preferred language.

    Falls back to Portuguese, the language of the wire format.
    """
    ctx = get_execution_context()
    if ctx and ctx.preferred_language:
        return ctx.preferred_language
    return DEFAULT_LANGUAGE


def resolve_translation(
    translations_data: Dict[str, Dict[str, str]],
    key: str,
    lang: Optional[str] = None,
    **format_params: Any,
) -> str:
    """
    Resolve a translation key with full fallback chain.

    Fallback chain:
    1. Explicit ``lang`` param, else the context's preferred_language
    2. DEFAULT_LANGUAGE
    3. Key name as-is (if key completely missing from the set)

    Args:
        translations_data: Full translation dict {key: {lang: text}}
        key: Translation key to resolve
        lang: Override language
        **format_params: Named params for string formatting

    Returns:
        Resolved translated string.
    """
    if lang is None:
        lang = get_preferred_language()

    key_translations = translations_data.get(key)
    if not key_translations:
        return key

    text = key_translations.get(lang)
    if text is None:
        text = key_translations.get(DEFAULT_LANGUAGE)
    if text is None:
        return key

    if format_params:
        try:
            text = text.format(**format_params)
        except (KeyError, IndexError, ValueError):
            pass  # Return unformatted if params don't match

    return text
