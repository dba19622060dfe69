"""Extraction of structured exception information.

This module is the only place that introspects exception objects. It
reads the class name, message and raw backtrace off an exception (the
ExceptionSource), then runs an ordered registry of variant parsers that
recognise known message shapes:
- wrong number of arguments (arity mismatch)
- undefined method / missing attribute
- failed module or file loads
- syntax errors
Anything unrecognised becomes a plain ExceptionInfo.
"""

from __future__ import annotations

import re
import traceback
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from types import TracebackType
from typing import Any, ClassVar

import structlog

from error_to_communicate.core.backtrace_parser import BacktraceParser
from error_to_communicate.models.backtrace import BacktraceLocation
from error_to_communicate.models.exception_info import (
    ExceptionInfo,
    ExceptionSource,
    LoadErrorInfo,
    NoMethodErrorInfo,
    SyntaxErrorInfo,
    WrongNumberOfArgumentsInfo,
)
from error_to_communicate.utils.errors import UnparseableExceptionError
from error_to_communicate.utils.logging import LogEventNames

log = structlog.get_logger()


class VariantParser(ABC):
    """Recognises one message shape and builds the matching ExceptionInfo."""

    @abstractmethod
    def parse(
        self,
        source: ExceptionSource,
        backtrace: tuple[BacktraceLocation, ...],
    ) -> ExceptionInfo | None:
        """Return an ExceptionInfo, or None if the source has another shape."""


class WrongNumberOfArgumentsParser(VariantParser):
    """Arity mismatches.

    The two ``(received for expected)`` / ``given ... expected`` shapes are
    raised inside the called definition; CPython's ``takes N positional
    arguments but M were given`` is raised at the call site.
    """

    DEFINITION_PATTERNS: ClassVar[tuple[re.Pattern[str], ...]] = (
        re.compile(r"^wrong number of arguments.*?\((\d+) for (\d+)\)$"),
        re.compile(r"^method '.*?': given (\d+).*? expected (\d+)$"),
    )
    CALL_SITE_PATTERN = re.compile(
        r"^(?:[\w<>]+\.)*([\w<>]+)\(\) takes (?:from \d+ to )?(\d+) positional arguments?"
        r" but (\d+) (?:was|were) given$"
    )

    def parse(
        self,
        source: ExceptionSource,
        backtrace: tuple[BacktraceLocation, ...],
    ) -> ExceptionInfo | None:
        extracted = self.extract_counts(source.message)
        if extracted is None:
            return None
        num_received, num_expected, callee_name = extracted
        return WrongNumberOfArgumentsInfo(
            exception=source.exception,
            classname=source.classname,
            explanation="Wrong number of arguments",
            backtrace=backtrace,
            num_expected=num_expected,
            num_received=num_received,
            raised_at_definition=callee_name is None,
            callee_name=callee_name or "",
        )

    @classmethod
    def extract_counts(cls, message: str) -> tuple[int, int, str | None] | None:
        """Extract (received, expected, callee name) from a message.

        The callee name is None for the shapes raised inside the definition.
        """
        for pattern in cls.DEFINITION_PATTERNS:
            match = pattern.match(message)
            if match:
                return int(match.group(1), 10), int(match.group(2), 10), None

        match = cls.CALL_SITE_PATTERN.match(message)
        if match:
            return int(match.group(3), 10), int(match.group(2), 10), match.group(1)

        return None


class NoMethodErrorParser(VariantParser):
    """Lookups of methods or attributes an object does not have."""

    PATTERNS: ClassVar[dict[str, re.Pattern[str]]] = {
        "NoMethodError": re.compile(r"undefined method [`']([^'`]+)'"),
        "AttributeError": re.compile(r"has no attribute '([^']+)'"),
    }

    def parse(
        self,
        source: ExceptionSource,
        backtrace: tuple[BacktraceLocation, ...],
    ) -> ExceptionInfo | None:
        pattern = self.PATTERNS.get(source.classname)
        match = pattern.search(source.message) if pattern else None
        if not match:
            return None
        return NoMethodErrorInfo(
            exception=source.exception,
            classname=source.classname,
            explanation=source.message,
            backtrace=backtrace,
            undefined_method_name=match.group(1),
        )


class LoadErrorParser(VariantParser):
    """Modules or files that could not be found."""

    PATTERNS: ClassVar[dict[str, tuple[re.Pattern[str], ...]]] = {
        "LoadError": (re.compile(r"cannot load such file -- (.+)$"),),
        "ModuleNotFoundError": (re.compile(r"^No module named '([^']+)'"),),
        "ImportError": (
            re.compile(r"^No module named '([^']+)'"),
            re.compile(r"^cannot import name '([^']+)'"),
        ),
    }

    def parse(
        self,
        source: ExceptionSource,
        backtrace: tuple[BacktraceLocation, ...],
    ) -> ExceptionInfo | None:
        for pattern in self.PATTERNS.get(source.classname, ()):
            match = pattern.search(source.message)
            if match:
                missing_name = match.group(1)
                return LoadErrorInfo(
                    exception=source.exception,
                    classname=source.classname,
                    explanation=f"Couldn't find {missing_name}",
                    backtrace=backtrace,
                    missing_name=missing_name,
                )
        return None


class SyntaxErrorParser(VariantParser):
    """Source that failed to parse.

    CPython's SyntaxError carries ``filename``/``lineno``/``msg``; other
    reporters put ``path:line: reason`` in the message.
    """

    CLASSNAMES = frozenset({"SyntaxError", "IndentationError", "TabError"})
    MESSAGE_PATTERN = re.compile(r"^(.+?):(\d+): (.*)", re.DOTALL)

    def __init__(self, backtrace_parser: BacktraceParser | None = None) -> None:
        self._backtrace_parser = backtrace_parser or BacktraceParser()

    def parse(
        self,
        source: ExceptionSource,
        backtrace: tuple[BacktraceLocation, ...],
    ) -> ExceptionInfo | None:
        if source.classname not in self.CLASSNAMES:
            return None

        exception = source.exception
        filename = getattr(exception, "filename", None)
        lineno = getattr(exception, "lineno", None)
        if isinstance(filename, str) and isinstance(lineno, int):
            location = self._backtrace_parser.parse_entry(f"{filename}:{lineno}")
            reason = str(getattr(exception, "msg", None) or source.message)
        else:
            match = self.MESSAGE_PATTERN.match(source.message)
            if not match:
                return None
            location = self._backtrace_parser.parse_entry(f"{match.group(1)}:{match.group(2)}")
            reason = match.group(3).splitlines()[0] if match.group(3) else ""

        return SyntaxErrorInfo(
            exception=exception,
            classname=source.classname,
            explanation="Syntax error",
            backtrace=backtrace,
            error_location=location,
            reason=reason,
        )


def _default_variant_parsers() -> list[VariantParser]:
    return [
        WrongNumberOfArgumentsParser(),
        NoMethodErrorParser(),
        LoadErrorParser(),
        SyntaxErrorParser(),
    ]


class ExceptionParser:
    """Registry of variant parsers, tried in order.

    Responsibilities:
    - Decide whether an object can be described at all (``parseable``)
    - Read class name, message and backtrace off the object
    - Pick the first variant parser that recognises the message

    Example:
        parser = ExceptionParser()
        if parser.parseable(exc):
            info = parser.parse(exc)
            print(info.classname, info.explanation)
    """

    def __init__(
        self,
        variant_parsers: Sequence[VariantParser] | None = None,
        backtrace_parser: BacktraceParser | None = None,
    ) -> None:
        """Initialize the ExceptionParser.

        Args:
            variant_parsers: Parsers tried in order; defaults to all known shapes
            backtrace_parser: Parser for raw backtrace entries
        """
        self.variant_parsers = (
            list(variant_parsers) if variant_parsers is not None else _default_variant_parsers()
        )
        self._backtrace_parser = backtrace_parser or BacktraceParser()

    def parseable(self, exception: Any, tb: TracebackType | None = None) -> bool:
        """Check whether ``exception`` can be parsed. Never raises.

        Args:
            exception: An exception, or an object exposing ``message`` and ``backtrace``
            tb: Traceback to use instead of ``exception.__traceback__``

        Returns:
            True if ``parse`` will succeed
        """
        try:
            self.source_for(exception, tb)
        except Exception as e:
            log.debug(
                LogEventNames.EXCEPTION_NOT_PARSEABLE,
                error=str(e),
                object_type=type(exception).__name__,
            )
            return False
        return True

    def parse(self, exception: Any, tb: TracebackType | None = None) -> ExceptionInfo:
        """Parse an exception into an ExceptionInfo.

        Args:
            exception: An exception for which ``parseable`` returned True
            tb: Traceback to use instead of ``exception.__traceback__``

        Returns:
            The most specific ExceptionInfo variant that matches

        Raises:
            UnparseableExceptionError: If ``exception`` is not parseable
        """
        if not self.parseable(exception, tb):
            raise UnparseableExceptionError(f"Cannot parse {exception!r} as an exception")

        source = self.source_for(exception, tb)
        backtrace = self._backtrace_parser.parse(source.raw_backtrace)

        for variant_parser in self.variant_parsers:
            info = variant_parser.parse(source, backtrace)
            if info is not None:
                return info

        return ExceptionInfo(
            exception=source.exception,
            classname=source.classname,
            explanation=source.message,
            backtrace=backtrace,
        )

    def source_for(self, exception: Any, tb: TracebackType | None = None) -> ExceptionSource:
        """Read the raw facts off an exception.

        Args:
            exception: The exception or exception-like object
            tb: Traceback to use instead of ``exception.__traceback__``

        Returns:
            ExceptionSource with the raw backtrace innermost first

        Raises:
            UnparseableExceptionError: If the object lacks a message or backtrace
        """
        if isinstance(exception, BaseException):
            tb = tb if tb is not None else exception.__traceback__
            # extract_tb lists the outermost frame first
            frames = traceback.extract_tb(tb) if tb is not None else []
            return ExceptionSource(
                exception=exception,
                classname=type(exception).__name__,
                message=str(exception),
                raw_backtrace=tuple(reversed(frames)),
            )

        message = _read_attribute(exception, "message")
        raw_backtrace = _read_attribute(exception, "backtrace", "raw_backtrace")
        if not isinstance(message, str):
            raise UnparseableExceptionError(f"Message of {exception!r} is not a string")
        if raw_backtrace is None:
            raw_backtrace = ()
        if isinstance(raw_backtrace, str) or not isinstance(raw_backtrace, Iterable):
            raise UnparseableExceptionError(f"Backtrace of {exception!r} is not a sequence")

        classname = _read_attribute(exception, "class_name", "classname", default=None)
        return ExceptionSource(
            exception=exception,
            classname=classname if isinstance(classname, str) else type(exception).__name__,
            message=message,
            raw_backtrace=tuple(raw_backtrace),
        )


_MISSING = object()


def _read_attribute(obj: Any, *names: str, default: Any = _MISSING) -> Any:
    """Read the first present attribute of ``names``, calling it if it is a method."""
    for name in names:
        value = getattr(obj, name, _MISSING)
        if value is _MISSING:
            continue
        return value() if callable(value) else value
    if default is _MISSING:
        raise UnparseableExceptionError(f"{obj!r} has no {' or '.join(names)}")
    return default
