"""Base model for payloads carried as a positional ``fields`` array."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class PositionalModel(BaseModel):
    """A frozen model whose declared fields map 1:1 onto wire positions.

    Field declaration order *is* the wire order.  Subclasses only declare
    ``str``, ``int`` or ``IntEnum`` fields so the decoder can validate each
    position by its annotation.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def positional_fields(cls) -> list[tuple[str, Any]]:
        """Return ``(name, annotation)`` pairs in wire order."""
        return [(name, info.annotation) for name, info in cls.model_fields.items()]

    def wire_fields(self) -> list[Any]:
        """Return the positional values for re-encoding."""
        values: list[Any] = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            values.append(int(value) if isinstance(value, IntEnum) else value)
        return values
