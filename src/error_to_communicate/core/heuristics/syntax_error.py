"""Heuristic for source that failed to parse."""

from __future__ import annotations

from error_to_communicate.core.heuristics.base import AROUND, Heuristic
from error_to_communicate.models.exception_info import ExceptionInfo, SyntaxErrorInfo
from error_to_communicate.models.semantic import Emphasis, SemanticNode, Tag


class SyntaxErrorHeuristic(Heuristic):
    """Shows the offending line first, then the frame that loaded the file.

    The offending line is not part of the backtrace: the parser never got
    far enough to run it.
    """

    name = "syntax_error"
    einfo: SyntaxErrorInfo

    @classmethod
    def applies_to(cls, einfo: ExceptionInfo) -> bool:
        return isinstance(einfo, SyntaxErrorInfo)

    @property
    def reason(self) -> str:
        return self.einfo.reason

    def semantic_explanation(self) -> SemanticNode:
        if not self.reason:
            return self.explanation
        return [self.explanation, " ", (Tag.DETAILS, f"({self.reason})")]

    def helpful_info(self) -> list[SemanticNode]:
        info: list[SemanticNode] = []
        if self.einfo.error_location is not None:
            info.append(
                self.code(
                    self.einfo.error_location,
                    AROUND,
                    highlight="",
                    message=self.reason or None,
                )
            )
        if self.backtrace:
            info.append(self.code(self.backtrace[0], AROUND, emphasis=Emphasis.PATH))
        return info
