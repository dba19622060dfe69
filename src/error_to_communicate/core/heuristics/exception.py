"""Catchall heuristic; must be last in any heuristics list."""

from __future__ import annotations

from error_to_communicate.core.heuristics.base import AROUND, Heuristic
from error_to_communicate.models.exception_info import ExceptionInfo
from error_to_communicate.models.semantic import SemanticNode


class ExceptionHeuristic(Heuristic):
    name = "exception"

    @classmethod
    def applies_to(cls, einfo: ExceptionInfo) -> bool:
        return True

    def helpful_info(self) -> list[SemanticNode]:
        if not self.backtrace:
            return []
        return [self.code(self.backtrace[0], AROUND)]
