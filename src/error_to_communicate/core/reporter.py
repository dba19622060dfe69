"""Pipeline driver: classify an exception, render it, write the report.

This module wires the Classifier to an output stream and manages the
``sys.excepthook`` integration:
- Reporter.render() returns the report text, or None if rejected
- Reporter.report() writes it and says whether it did
- install()/uninstall() route uncaught exceptions through a Reporter
"""

from __future__ import annotations

import sys
from pathlib import Path
from types import TracebackType
from typing import Any, TextIO

import structlog

from error_to_communicate.core.classifier import Classifier, default_classifier
from error_to_communicate.utils.logging import LogEventNames, configure_logging

log = structlog.get_logger()


class Reporter:
    """Renders accepted exceptions to a stream.

    Example:
        reporter = Reporter()
        try:
            main()
        except Exception as e:
            if not reporter.report(e):
                raise
    """

    def __init__(
        self,
        classifier: Classifier | None = None,
        cwd: Path | str | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize the Reporter.

        Args:
            classifier: Classifier to use (default: the process-wide default)
            cwd: Directory paths are shown relative to (default: current directory)
            stream: Where reports are written (default: sys.stderr at write time)
        """
        self.classifier = classifier if classifier is not None else default_classifier()
        self._cwd = Path(cwd) if cwd is not None else None
        self._stream = stream

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def render(self, exception: Any, tb: TracebackType | None = None) -> str | None:
        """Render ``exception``, or return None if the classifier rejects it."""
        if not self.classifier.accept(exception, tb):
            log.debug(LogEventNames.EXCEPTION_PASSED_THROUGH, object_type=type(exception).__name__)
            return None
        heuristic = self.classifier.heuristic_for(exception, tb)
        return self.classifier.format(heuristic, self.cwd)

    def report(self, exception: Any, tb: TracebackType | None = None) -> bool:
        """Write the report for ``exception`` to the stream.

        Returns:
            True if a report was written, False if the exception was rejected
        """
        text = self.render(exception, tb)
        if text is None:
            return False
        self.stream.write(text)
        self.stream.flush()
        log.info(LogEventNames.EXCEPTION_REPORTED, classname=type(exception).__name__)
        return True


_previous_hook: Any = None
_installed_hook: Any = None


def install(reporter: Reporter | None = None) -> Reporter:
    """Route uncaught exceptions through ``reporter``.

    KeyboardInterrupt and rejected exceptions go to the previous hook, as
    do exceptions whose report could not be rendered.

    Args:
        reporter: Reporter to use (default: a Reporter on the default classifier)

    Returns:
        The installed reporter
    """
    global _previous_hook, _installed_hook
    if not structlog.is_configured():
        # Keep library debug logs off the host program's stdout
        configure_logging()
    reporter = reporter if reporter is not None else Reporter()

    if _installed_hook is not None and sys.excepthook is _installed_hook:
        uninstall()

    previous = sys.excepthook

    def hook(
        exc_type: type[BaseException],
        exc_value: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            previous(exc_type, exc_value, tb)
            return
        try:
            reported = reporter.report(exc_value, tb)
        except Exception as e:
            log.error(LogEventNames.REPORT_FAILED, error=str(e), error_type=type(e).__name__)
            reported = False
        if not reported:
            previous(exc_type, exc_value, tb)

    _previous_hook = previous
    _installed_hook = hook
    sys.excepthook = hook
    log.debug(LogEventNames.HOOK_INSTALLED)
    return reporter


def uninstall() -> None:
    """Restore the hook that was active before install()."""
    global _previous_hook, _installed_hook
    if _installed_hook is not None and sys.excepthook is _installed_hook:
        sys.excepthook = _previous_hook
        log.debug(LogEventNames.HOOK_UNINSTALLED)
    _previous_hook = None
    _installed_hook = None
