"""Line and escape-sequence helpers shared by the theme and code windows."""

import re

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+$")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping line endings.

    Unlike ``str.splitlines`` this leaves form feeds and other separators
    inside their line, so indexes match the line numbers an interpreter
    reports.
    """
    return LINE_PATTERN.findall(text)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_PATTERN.sub("", text)
