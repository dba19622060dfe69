"""Parser for backtrace entries.

This module implements the BacktraceParser class that turns the raw
entries of a stack trace into BacktraceLocation values. It supports:
- ``path:42:in 'label'`` entries (quote or backtick opening the label)
- ``path:42`` entries without a label
- CPython ``File "path", line 42, in label`` lines
- traceback.FrameSummary objects

A malformed entry is skipped; it never fails the whole trace.
"""

from __future__ import annotations

import re
import traceback
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from error_to_communicate.models.backtrace import BacktraceLocation
from error_to_communicate.utils.logging import LogEventNames

log = structlog.get_logger()


class BacktraceParser:
    """Parser for stack trace entries.

    Example:
        parser = BacktraceParser()
        locations = parser.parse(["/app/lib/a.py:12:in 'load'"])
        print(locations[0].linenum)  # 12
    """

    LABELLED_PATTERN = re.compile(r"^(.+?):(\d+):in [`'](.*)'$")
    UNLABELLED_PATTERN = re.compile(r"^(.+?):(\d+)$")
    PYTHON_FRAME_PATTERN = re.compile(r'^\s*File "([^"]+)", line (\d+)(?:, in (.+))?$')

    def parse(self, raw_backtrace: Iterable[Any]) -> tuple[BacktraceLocation, ...]:
        """Parse every well-formed entry, preserving order.

        Args:
            raw_backtrace: Entries, innermost frame first

        Returns:
            Tuple of locations; malformed entries are dropped
        """
        locations: list[BacktraceLocation] = []
        for entry in raw_backtrace:
            location = self.parse_entry(entry)
            if location is None:
                log.debug(LogEventNames.BACKTRACE_ENTRY_SKIPPED, entry=repr(entry))
                continue
            locations.append(location)
        return tuple(locations)

    def parse_entry(self, entry: Any) -> BacktraceLocation | None:
        """Parse a single entry.

        Args:
            entry: A backtrace string or a traceback.FrameSummary

        Returns:
            BacktraceLocation, or None if the entry is malformed
        """
        if isinstance(entry, traceback.FrameSummary):
            return self._build(entry.filename, entry.lineno, entry.name)

        if not isinstance(entry, str):
            return None

        # traceback.format_tb() entries carry the source line after the frame line
        lines = entry.splitlines()
        if not lines:
            return None
        entry = lines[0]
        for pattern in (self.LABELLED_PATTERN, self.PYTHON_FRAME_PATTERN):
            match = pattern.match(entry)
            if match:
                return self._build(match.group(1), match.group(2), match.group(3) or "")

        match = self.UNLABELLED_PATTERN.match(entry)
        if match:
            return self._build(match.group(1), match.group(2), "")

        return None

    def _build(self, path: str, linenum: Any, label: str) -> BacktraceLocation | None:
        try:
            number = int(linenum)
        except (TypeError, ValueError):
            return None
        if number < 1 or not path:
            return None
        return BacktraceLocation(path=Path(path), linenum=number, label=label)
