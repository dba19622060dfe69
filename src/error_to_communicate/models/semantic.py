"""Data models for the semantic report tree.

A report is described as nested tuples ``(tag, content, *rest)`` before it
is turned into text. ``tag`` is a member of :class:`Tag`, ``content`` is
literal text, another node, or a list of nodes. A plain ``list`` is a bare
sequence whose renders are concatenated.

Example:
    (Tag.SUMMARY, [
        (Tag.COLUMNS,
            (Tag.CLASSNAME, "ValueError"),
            (Tag.EXPLANATION, "invalid literal")),
    ])
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .backtrace import BacktraceLocation, ContextRange


class Tag(StrEnum):
    """Closed vocabulary of semantic tags."""

    SUMMARY = "summary"
    HEURISTIC = "heuristic"
    BACKTRACE = "backtrace"
    COLUMNS = "columns"
    CLASSNAME = "classname"
    MESSAGE = "message"
    EXPLANATION = "explanation"
    CONTEXT = "context"
    DETAILS = "details"
    CODE = "code"
    SEPARATOR = "separator"
    NULL = "null"


class Emphasis(StrEnum):
    """Which part of a code window draws the eye."""

    CODE = "code"
    PATH = "path"


@dataclass(frozen=True)
class CodeWindowRequest:
    """Attributes of a ``code`` node: which source lines to show and how."""

    location: BacktraceLocation
    context: ContextRange
    highlight: str | None = None  # Defaults to location.label
    message: str | None = None
    mark: bool = True
    emphasis: Emphasis = Emphasis.CODE

    @classmethod
    def coerce(cls, content: "CodeWindowRequest | Mapping[str, Any]") -> "CodeWindowRequest":
        """Accept either a request or a mapping of its attributes."""
        if isinstance(content, cls):
            return content
        attributes = dict(content)
        attributes["context"] = ContextRange(*attributes["context"])
        if "emphasis" in attributes:
            attributes["emphasis"] = Emphasis(attributes["emphasis"])
        return cls(**attributes)

    @property
    def highlight_token(self) -> str:
        """Text to highlight on the location's line."""
        return self.location.label if self.highlight is None else self.highlight


# Semantic trees are plain nested data; see module docstring.
SemanticNode = Any
