"""Task record — the authoritative entity and the normalized creation input."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Priority(str, Enum):
    """Closed priority set. Values are the wire representation."""

    HIGH = "alta"
    MEDIUM = "média"
    LOW = "baixa"


class TaskStatus(str, Enum):
    PENDING = "pendente"
    COMPLETED = "concluída"


class TaskDraft(BaseModel):
    """
    Input accepted by the rule set: trimmed title, description normalized to
    None when blank, parsed due date, validated priority.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Priority


class Task(BaseModel):
    """
    A created task. Only the task store builds these.

    Field names are Python-side; aliases are the wire names used by the
    HTTP API (``id_tarefa``, ``titulo`` ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(alias="id_tarefa", ge=1)
    owner_id: int = Field(alias="id_usuario")
    title: str = Field(alias="titulo", min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, alias="descricao", max_length=500)
    due_date: Optional[date] = Field(default=None, alias="data_vencimento")
    priority: Priority = Field(alias="prioridade")
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    created_at: datetime = Field(alias="data_criacao")
    completed_at: Optional[datetime] = Field(default=None, alias="data_conclusao")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with wire field names and JSON-native values."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Task":
        return cls.model_validate(data)
