"""Heuristic for calls with the wrong number of arguments."""

from __future__ import annotations

from error_to_communicate.core.heuristics.base import AROUND, Heuristic
from error_to_communicate.models.backtrace import ContextRange
from error_to_communicate.models.exception_info import ExceptionInfo, WrongNumberOfArgumentsInfo
from error_to_communicate.models.semantic import SemanticNode, Tag

DEFINITION = ContextRange(0, 5)


class WrongNumberOfArgumentsHeuristic(Heuristic):
    """Shows where the method is defined and where it was called.

    When the interpreter raises inside the definition (``backtrace[0]``),
    the caller is ``backtrace[1]``. CPython raises at the call site
    instead, so only that frame is shown.
    """

    name = "wrong_number_of_arguments"
    einfo: WrongNumberOfArgumentsInfo

    @classmethod
    def applies_to(cls, einfo: ExceptionInfo) -> bool:
        return isinstance(einfo, WrongNumberOfArgumentsInfo)

    @property
    def num_expected(self) -> int:
        return self.einfo.num_expected

    @property
    def num_received(self) -> int:
        return self.einfo.num_received

    def semantic_explanation(self) -> SemanticNode:
        return [
            self.explanation,
            " ",
            (Tag.DETAILS, f"(expected {self.num_expected}, sent {self.num_received})"),
        ]

    def helpful_info(self) -> list[SemanticNode]:
        if not self.backtrace:
            return []

        if not self.einfo.raised_at_definition:
            return [
                self.code(
                    self.backtrace[0],
                    AROUND,
                    highlight=self.einfo.callee_name or None,
                    message=f"EXPECTED {self.num_expected}, SENT {self.num_received}",
                )
            ]

        definition = self.backtrace[0]
        info = [
            self.code(
                definition,
                DEFINITION,
                highlight=definition.label,
                message=f"EXPECTED {self.num_expected}",
            )
        ]
        if len(self.backtrace) > 1:
            info.append(
                self.code(
                    self.backtrace[1],
                    AROUND,
                    highlight=definition.label,
                    message=f"SENT {self.num_received}",
                )
            )
        return info
