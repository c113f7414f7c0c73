"""
String → enum parsing for task fields.

Accepts the wire value (``in-progress``) or the member name
(``IN_PROGRESS`` / ``InProgress``), case-insensitively.
"""

from __future__ import annotations

from enum import Enum
from typing import Type, TypeVar

from database.models import TaskPriority, TaskStatus
from utils.errors import ValidationError

E = TypeVar("E", bound=Enum)


def _spellings(member: Enum) -> tuple[str, ...]:
    name = member.name.lower()
    return (str(member.value).lower(), name, name.replace("_", ""))


def parse_choice(enum_cls: Type[E], raw: object, field: str) -> E:
    """Map ``raw`` onto a member of ``enum_cls`` or raise ``ValidationError``."""
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str) and raw.strip():
        wanted = raw.strip().lower()
        for member in enum_cls:
            if wanted in _spellings(member):
                return member
    raise ValidationError(
        f"Invalid {field} value: {raw}",
        details={"field": field, "allowed": [m.value for m in enum_cls]},
    )


def parse_status(raw: object) -> TaskStatus:
    return parse_choice(TaskStatus, raw, "status")


def parse_priority(raw: object) -> TaskPriority:
    return parse_choice(TaskPriority, raw, "priority")
