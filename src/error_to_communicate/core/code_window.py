"""Source code windows for backtrace locations.

This module implements the CodeWindow class that renders the lines
around a backtrace location:
- a path header (directory relative to cwd, file name, line number)
- the source lines with shared indentation removed and syntax coloured
- line numbers, with an arrow marking the location's line
- an inline message and a highlighted token on that line

A missing or unreadable file renders a placeholder instead of failing.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import structlog

from error_to_communicate.models.semantic import CodeWindowRequest, Emphasis
from error_to_communicate.utils.logging import LogEventNames
from error_to_communicate.utils.text import split_lines

log = structlog.get_logger()

MISSING_CODE = "Can't find code\n"
PATH_EMPHASIS_INDENT = "      "


class CodeWindow:
    """Renders CodeWindowRequests to text.

    Example:
        window = CodeWindow(theme=Theme(), cwd=Path.cwd())
        text = window.render(CodeWindowRequest(location, ContextRange(-5, 5)))
    """

    INDENTATION_PATTERN = re.compile(r"^[ \r\t]*")

    def __init__(self, theme: Any, cwd: Path | str) -> None:
        """Initialize the CodeWindow.

        Args:
            theme: Theme supplying the decorations
            cwd: Directory that header paths are shown relative to
        """
        self.theme = theme
        self.cwd = Path(os.path.normpath(os.path.abspath(cwd)))

    def render(self, request: CodeWindowRequest) -> str:
        """Render the path header followed by the code window.

        Args:
            request: Location, context range and decoration options

        Returns:
            Text block ending in a newline
        """
        theme = self.theme
        location = request.location
        path = location.path
        line_index = location.line_index
        start_index = max(0, line_index + request.context.begin)
        end_index = max(0, line_index + request.context.end)
        message_offset = line_index - start_index
        highlight = request.highlight_token
        mark_linenum = location.linenum if request.mark else -1

        path_line = "".join(
            [
                theme.color_path(f"{self.path_to_dir(path)}/"),
                theme.color_filename(path.name),
                ":",
                theme.color_linenum(location.linenum),
            ]
        )

        source_lines = self.read_lines(self.cwd / path, start_index, end_index)
        if source_lines is None:
            code = MISSING_CODE
        else:
            code = "".join(source_lines)
            if code and not code.endswith("\n"):
                code += "\n"
            code = self.remove_indentation(code)
            code = theme.syntax_highlight(code)
            code = self.prefix_linenos_to(code, start_index + 1, mark_linenum)
            if request.message:
                code = self.add_message_to(code, message_offset, theme.screaming_red(request.message))
            code = theme.highlight_text(code, message_offset, highlight)

        if request.emphasis == Emphasis.PATH:
            path_line = theme.underline(path_line)
            code = theme.indent(code, PATH_EMPHASIS_INDENT)
            code = theme.desaturate(code)
            if source_lines is not None:
                # Desaturating strips the highlight along with everything else
                code = theme.highlight_text(code, message_offset, highlight)

        return path_line + "\n" + code

    def read_lines(self, path: Path, start_index: int, end_index: int) -> list[str] | None:
        """Read lines ``start_index..end_index`` inclusive (0-based).

        Ranges running past the end of the file yield the lines that exist.

        Returns:
            The lines with their newlines, or None if the file cannot be read
        """
        if not path.is_file():
            log.debug(LogEventNames.SOURCE_FILE_MISSING, path=str(path))
            return None
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except (OSError, UnicodeError) as e:
            log.debug(LogEventNames.SOURCE_FILE_UNREADABLE, path=str(path), error=str(e))
            return None
        return split_lines(content)[start_index : end_index + 1]

    def path_to_dir(self, path: Path) -> Path:
        """Directory of ``path`` relative to cwd, or absolute if it is elsewhere."""
        absolute = Path(os.path.normpath(self.cwd / path))
        try:
            return absolute.parent.relative_to(self.cwd)
        except ValueError:
            return absolute.parent

    def remove_indentation(self, code: str) -> str:
        """Strip the shortest leading whitespace found on any line from every line."""
        lines = split_lines(code)
        if not lines:
            return code
        indentation = min(
            (self.INDENTATION_PATTERN.match(line).group(0) for line in lines),  # type: ignore[union-attr]
            key=len,
        )
        if not indentation:
            return code
        return "".join(
            line[len(indentation) :] if line.startswith(indentation) else line for line in lines
        )

    def prefix_linenos_to(self, code: str, start_linenum: int, mark_linenum: int) -> str:
        """Prefix each line with its number, marking ``mark_linenum`` with an arrow."""
        lines = split_lines(code)
        max_linenum = start_linenum + len(lines) - 1
        # One for the colon, three for the arrow and its space
        linenum_width = len(str(max_linenum)) + 4
        numbered: list[str] = []
        for num, line in enumerate(lines, start=start_linenum):
            if num == mark_linenum:
                formatted_num = self.theme.mark_linenum(f"-> {num}:".ljust(linenum_width))
            else:
                formatted_num = f"   {num}:".ljust(linenum_width)
            numbered.append(self.theme.color_linenum(formatted_num) + " " + line)
        return "".join(numbered)

    def add_message_to(self, code: str, offset: int, message: str) -> str:
        """Append ``message`` to line ``offset``; lines past the end are left alone."""
        lines = split_lines(code)
        if 0 <= offset < len(lines):
            lines[offset] = lines[offset].rstrip("\r\n") + " " + message + "\n"
        return "".join(lines)
