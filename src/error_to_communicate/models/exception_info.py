"""Data models describing a raised exception."""

from dataclasses import dataclass, field
from typing import Any

from .backtrace import BacktraceLocation


@dataclass(frozen=True)
class ExceptionSource:
    """Raw facts read off an exception at the extraction boundary.

    Nothing past this point touches the exception object itself; it is
    carried along only so it can be displayed.
    """

    exception: Any = field(repr=False)
    classname: str
    message: str
    raw_backtrace: tuple[Any, ...]  # Strings or traceback.FrameSummary, innermost first


@dataclass(frozen=True)
class ExceptionInfo:
    """A parsed exception, ready for classification."""

    exception: Any = field(repr=False)  # Display-only handle, never mutated
    classname: str
    explanation: str
    backtrace: tuple[BacktraceLocation, ...]


@dataclass(frozen=True)
class WrongNumberOfArgumentsInfo(ExceptionInfo):
    """A call passed a different number of arguments than the callee takes."""

    num_expected: int
    num_received: int
    # False when the interpreter raises at the call site rather than
    # inside the called definition (CPython does this).
    raised_at_definition: bool = True
    callee_name: str = ""  # Known only when raised at the call site


@dataclass(frozen=True)
class NoMethodErrorInfo(ExceptionInfo):
    """A method or attribute was looked up on an object that lacks it."""

    undefined_method_name: str


@dataclass(frozen=True)
class LoadErrorInfo(ExceptionInfo):
    """A module or file could not be loaded."""

    missing_name: str


@dataclass(frozen=True)
class SyntaxErrorInfo(ExceptionInfo):
    """Source failed to parse; the error location is not a backtrace frame."""

    error_location: BacktraceLocation | None
    reason: str
