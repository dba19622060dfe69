"""Heuristic for modules and files that could not be loaded."""

from __future__ import annotations

from error_to_communicate.core.heuristics.base import AROUND, Heuristic
from error_to_communicate.models.exception_info import ExceptionInfo, LoadErrorInfo
from error_to_communicate.models.semantic import SemanticNode


class LoadErrorHeuristic(Heuristic):
    """Points at the import (or require) that failed."""

    name = "load_error"
    einfo: LoadErrorInfo

    @classmethod
    def applies_to(cls, einfo: ExceptionInfo) -> bool:
        return isinstance(einfo, LoadErrorInfo)

    @property
    def missing_name(self) -> str:
        return self.einfo.missing_name

    def helpful_info(self) -> list[SemanticNode]:
        if not self.backtrace:
            return []
        return [
            self.code(
                self.backtrace[0],
                AROUND,
                highlight=self.missing_name,
                message=f"Couldn't find {self.missing_name}",
            )
        ]
