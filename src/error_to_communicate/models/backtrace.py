"""Data models for backtrace locations."""

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple


VENDOR_DIRECTORIES = frozenset({"site-packages", "dist-packages"})


def is_vendored(path: Path) -> bool:
    """Check if ``path`` lies inside an installed third-party package."""
    return not VENDOR_DIRECTORIES.isdisjoint(path.parts)


@dataclass(frozen=True)
class BacktraceLocation:
    """A single frame of a backtrace, innermost frame first."""

    path: Path
    linenum: int  # 1-based
    label: str  # Enclosing function name, used as a highlight token

    @property
    def line_index(self) -> int:
        """0-based index of the line within its file."""
        return self.linenum - 1

    def __str__(self) -> str:
        return f"{self.path}:{self.linenum}:in '{self.label}'"


class ContextRange(NamedTuple):
    """Inclusive, signed offset range relative to a location's line.

    ``ContextRange(-5, 5)`` covers five lines above and below the line,
    ``ContextRange(0, 0)`` covers the line alone.
    """

    begin: int
    end: int
