"""Response envelopes shared by every endpoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def success_response(data: Any) -> Dict[str, Any]:
    return {
        "success": True,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def error_response(
    message: str,
    code: str,
    details: Optional[List[Dict[str, Any]]] = None,
    **extra: Any,
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"message": message, "code": code}
    error.update(extra)
    if details is not None:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
