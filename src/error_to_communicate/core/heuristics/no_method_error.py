"""Heuristic for calls to methods that do not exist."""

from __future__ import annotations

from error_to_communicate.core.heuristics.base import AROUND, Heuristic
from error_to_communicate.models.exception_info import ExceptionInfo, NoMethodErrorInfo
from error_to_communicate.models.semantic import SemanticNode


class NoMethodErrorHeuristic(Heuristic):
    name = "no_method_error"
    einfo: NoMethodErrorInfo

    @classmethod
    def applies_to(cls, einfo: ExceptionInfo) -> bool:
        return isinstance(einfo, NoMethodErrorInfo)

    @property
    def undefined_method_name(self) -> str:
        return self.einfo.undefined_method_name

    def helpful_info(self) -> list[SemanticNode]:
        if not self.backtrace:
            return []
        return [
            self.code(
                self.backtrace[0],
                AROUND,
                highlight=self.undefined_method_name,
                message=f"{self.undefined_method_name} is undefined",
            )
        ]
