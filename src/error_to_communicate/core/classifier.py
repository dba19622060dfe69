"""Classification of exceptions into heuristics.

This module implements the Classifier class that decides whether an
exception should be reported and which heuristic explains it:
- unparseable objects and blacklisted exceptions are rejected
- heuristics are tried in order, the first match wins
- the chosen heuristic is rendered through the configured entry point

Rejections are reported as booleans; asking for a heuristic on a rejected
exception is a programming error.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any

import structlog

from error_to_communicate.core.exception_parser import ExceptionParser
from error_to_communicate.core.heuristics import DEFAULT_HEURISTICS, HEURISTICS_BY_NAME, Heuristic
from error_to_communicate.core.project import Project
from error_to_communicate.core.renderer import format_terminal
from error_to_communicate.core.theme import Theme
from error_to_communicate.models.exception_info import ExceptionInfo
from error_to_communicate.utils.errors import ConfigurationError, NotAcceptedError
from error_to_communicate.utils.logging import LogEventNames

if TYPE_CHECKING:
    from error_to_communicate.config.schema import ReporterConfig

log = structlog.get_logger()

Blacklist = Callable[[ExceptionInfo], bool]
FormatWith = Callable[..., str]


def blacklist_classnames(classnames: Iterable[str]) -> Blacklist:
    """Build a blacklist rejecting exceptions whose class name is listed."""
    rejected = frozenset(classnames)

    def blacklist(einfo: ExceptionInfo) -> bool:
        return einfo.classname in rejected

    return blacklist


DEFAULT_BLACKLIST: Blacklist = blacklist_classnames(["SystemExit"])


class Classifier:
    """Holds the heuristics and decides which one explains an exception.

    ``heuristics`` is a plain list so callers can extend it. Mutating a
    classifier shared between threads is the caller's responsibility to
    serialize.

    Example:
        classifier = Classifier()
        if classifier.accept(exc):
            heuristic = classifier.heuristic_for(exc)
            print(classifier.format(heuristic, Path.cwd()))
    """

    def __init__(
        self,
        heuristics: Iterable[type[Heuristic]] | None = None,
        blacklist: Blacklist | None = None,
        theme: Any = None,
        format_with: FormatWith | None = None,
        project: Project | None = None,
        parser: ExceptionParser | None = None,
        project_root: Path | str | None = None,
    ) -> None:
        """Initialize the Classifier.

        Args:
            heuristics: Heuristic classes, tried in order (default: all, catchall last)
            blacklist: Predicate over ExceptionInfo; True rejects (default: SystemExit)
            theme: Theme handed to the render entry point
            format_with: Render entry point called with heuristic, theme and cwd
            project: Project context handed to heuristics (default: built per report)
            parser: Exception parser
            project_root: Root of the project built per report (default: cwd)
        """
        self.heuristics: list[type[Heuristic]] = list(
            heuristics if heuristics is not None else DEFAULT_HEURISTICS
        )
        self.blacklist = blacklist if blacklist is not None else DEFAULT_BLACKLIST
        self.theme = theme if theme is not None else Theme()
        self.format_with = format_with if format_with is not None else format_terminal
        self.project = project
        self.project_root = project_root
        self.loaded_files: list[Path] = []
        self.parser = parser if parser is not None else ExceptionParser()

    @classmethod
    def from_config(cls, config: ReporterConfig) -> Classifier:
        """Build a classifier from validated configuration.

        Raises:
            ConfigurationError: If a heuristic name is unknown
        """
        heuristics: list[type[Heuristic]] = []
        for name in config.heuristics:
            if name not in HEURISTICS_BY_NAME:
                raise ConfigurationError(f"Unknown heuristic: {name}")
            heuristics.append(HEURISTICS_BY_NAME[name])

        return cls(
            heuristics=heuristics,
            blacklist=blacklist_classnames(config.blacklist),
            theme=Theme(
                color=config.theme.color,
                separator_width=config.theme.separator_width,
            ),
            project_root=config.project_root,
        )

    def accept(self, exception: Any, tb: TracebackType | None = None) -> bool:
        """Check whether ``exception`` should be reported. Never raises.

        Args:
            exception: The exception to check
            tb: Traceback to use instead of ``exception.__traceback__``

        Returns:
            False if unparseable, blacklisted, or no heuristic matches
        """
        if not self.parser.parseable(exception, tb):
            return False
        einfo = self.parser.parse(exception, tb)
        if self.blacklist(einfo):
            log.debug(LogEventNames.EXCEPTION_BLACKLISTED, classname=einfo.classname)
            return False
        if self._find_heuristic(einfo) is None:
            log.warning(LogEventNames.NO_HEURISTIC_MATCHED, classname=einfo.classname)
            return False
        return True

    def heuristic_for(self, exception: Any, tb: TracebackType | None = None) -> Heuristic:
        """Build the first heuristic that explains ``exception``.

        Args:
            exception: An exception for which ``accept`` returns True
            tb: Traceback to use instead of ``exception.__traceback__``

        Returns:
            Heuristic instance

        Raises:
            NotAcceptedError: If ``accept`` would return False
        """
        if not self.accept(exception, tb):
            raise NotAcceptedError(
                f"Asked for a heuristic on an object we don't accept: {exception!r}"
            )
        einfo = self.parser.parse(exception, tb)
        heuristic = self._find_heuristic(einfo)
        if heuristic is None:
            # accept() found one; only a list mutated in between gets here
            raise ConfigurationError(f"No heuristic matches {einfo.classname}")
        log.debug(
            LogEventNames.HEURISTIC_SELECTED, heuristic=heuristic.name, classname=einfo.classname
        )
        return heuristic(einfo, self.current_project())

    def format(self, heuristic: Heuristic, cwd: Path | str) -> str:
        """Render ``heuristic`` through the configured entry point."""
        normalized_cwd = Path(os.path.normpath(os.path.abspath(cwd)))
        return self.format_with(heuristic=heuristic, theme=self.theme, cwd=normalized_cwd)

    def current_project(self) -> Project:
        """Project handed to heuristics.

        Unless one was given, it is rebuilt from the modules loaded right now,
        so code imported after this classifier was created is recognised.
        """
        if self.project is not None:
            return self.project
        return Project.from_environment(self.project_root, extra_files=self.loaded_files)

    def add_loaded_file(self, path: Path | str) -> None:
        """Count ``path`` as project code even if no module was imported from it."""
        self.loaded_files.append(Path(path))

    def _find_heuristic(self, einfo: ExceptionInfo) -> type[Heuristic] | None:
        for heuristic in self.heuristics:
            if heuristic.applies_to(einfo):
                return heuristic
        return None


_default: Classifier | None = None


def default_classifier() -> Classifier:
    """Get or create the process-wide default classifier."""
    global _default
    if _default is None:
        _default = Classifier()
    return _default
