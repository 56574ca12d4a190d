"""Uniform tool response shape."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True, slots=True)
class ToolResponse:
    """One text block plus an error flag, as returned by every tool."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResponse":
        return cls(text=text, is_error=False)

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(text=message, is_error=True)

    @property
    def content(self) -> List[Dict[str, str]]:
        return [{"type": "text", "text": self.text}]

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}
