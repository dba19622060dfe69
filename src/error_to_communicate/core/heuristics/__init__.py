"""Heuristic catalog.

Heuristics are tried in order and the first match wins, so the catchall
ExceptionHeuristic goes last.
"""

from error_to_communicate.core.heuristics.base import Heuristic
from error_to_communicate.core.heuristics.exception import ExceptionHeuristic
from error_to_communicate.core.heuristics.load_error import LoadErrorHeuristic
from error_to_communicate.core.heuristics.no_method_error import NoMethodErrorHeuristic
from error_to_communicate.core.heuristics.syntax_error import SyntaxErrorHeuristic
from error_to_communicate.core.heuristics.wrong_number_of_arguments import (
    WrongNumberOfArgumentsHeuristic,
)

# Copy before modifying
DEFAULT_HEURISTICS: tuple[type[Heuristic], ...] = (
    WrongNumberOfArgumentsHeuristic,
    NoMethodErrorHeuristic,
    LoadErrorHeuristic,
    SyntaxErrorHeuristic,
    ExceptionHeuristic,
)

HEURISTICS_BY_NAME: dict[str, type[Heuristic]] = {
    heuristic.name: heuristic for heuristic in DEFAULT_HEURISTICS
}

CATCHALL = ExceptionHeuristic

__all__ = [
    "CATCHALL",
    "DEFAULT_HEURISTICS",
    "HEURISTICS_BY_NAME",
    "ExceptionHeuristic",
    "Heuristic",
    "LoadErrorHeuristic",
    "NoMethodErrorHeuristic",
    "SyntaxErrorHeuristic",
    "WrongNumberOfArgumentsHeuristic",
]
