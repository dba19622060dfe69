"""Base class for heuristics.

A heuristic recognises one failure shape (``applies_to``) and presents it
as a semantic tree. It never extracts anything itself: every field it
shows is already on the ExceptionInfo it was built from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

from error_to_communicate.core.project import Project
from error_to_communicate.models.backtrace import BacktraceLocation, ContextRange
from error_to_communicate.models.exception_info import ExceptionInfo
from error_to_communicate.models.semantic import (
    CodeWindowRequest,
    Emphasis,
    SemanticNode,
    Tag,
)

AROUND = ContextRange(-5, 5)
SINGLE_LINE = ContextRange(0, 0)


class Heuristic(ABC):
    """A pattern-matcher plus presenter for one kind of failure.

    Subclasses implement ``applies_to`` and usually ``helpful_info``.

    Attributes:
        name: Key used to select the heuristic from configuration
        einfo: The parsed exception
        project: Project used to tell the user's frames from library frames
    """

    name: ClassVar[str]

    def __init__(self, einfo: ExceptionInfo, project: Project | None = None) -> None:
        self.einfo = einfo
        self.project = project if project is not None else Project(Path.cwd())

    @classmethod
    @abstractmethod
    def applies_to(cls, einfo: ExceptionInfo) -> bool:
        """Check whether this heuristic explains ``einfo``. Cheap and total."""

    @property
    def classname(self) -> str:
        return self.einfo.classname

    @property
    def backtrace(self) -> tuple[BacktraceLocation, ...]:
        return self.einfo.backtrace

    @property
    def explanation(self) -> str:
        return self.einfo.explanation

    def semantic_explanation(self) -> SemanticNode:
        """Explanation column of the summary; subclasses add details."""
        return self.explanation

    def header(self) -> SemanticNode:
        return (
            Tag.COLUMNS,
            (Tag.CLASSNAME, self.classname),
            (Tag.EXPLANATION, self.semantic_explanation()),
        )

    def helpful_info(self) -> list[SemanticNode]:
        """Code windows pointing at the frames that explain the failure."""
        return []

    def semantic_summary(self) -> SemanticNode:
        return (Tag.SUMMARY, [self.header()])

    def semantic_info(self) -> SemanticNode:
        info = self.helpful_info()
        if not info:
            return (Tag.NULL,)
        return (Tag.HEURISTIC, info)

    def semantic_backtrace(self) -> SemanticNode:
        """One single-line window per frame, highlighting the callee."""
        frames: list[SemanticNode] = []
        for index, location in enumerate(self.backtrace):
            callee = self.backtrace[index - 1].label if index > 0 else ""
            emphasis = Emphasis.CODE if self.project.owns(location.path) else Emphasis.PATH
            frames.append(
                self.code(location, SINGLE_LINE, highlight=callee, emphasis=emphasis)
            )
        return (Tag.BACKTRACE, frames)

    def code(
        self,
        location: BacktraceLocation,
        context: ContextRange,
        **options: Any,
    ) -> SemanticNode:
        """Build a ``code`` node for ``location``."""
        return (Tag.CODE, CodeWindowRequest(location=location, context=context, **options))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.einfo.classname!r})"
