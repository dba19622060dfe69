"""Terminal theme: string decorations keyed by semantic role.

Every method is a pure ``text -> text`` transform (``columns`` takes a
sequence of texts). The renderer never looks inside them, so a theme can
be swapped for any object offering the same methods.
"""

from __future__ import annotations

from collections.abc import Sequence

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import PythonLexer

from error_to_communicate.utils.text import split_lines, strip_ansi

RESET = "\x1b[0m"
GREY = "\x1b[90m"


class Theme:
    """Default ANSI theme.

    Args:
        color: Emit escape sequences; with False every decoration is a no-op
        separator_width: Width of the horizontal rule between report sections
    """

    def __init__(self, color: bool = True, separator_width: int = 70) -> None:
        self.color = color
        self.separator_width = separator_width

    def _paint(self, code: str, text: object) -> str:
        if not self.color:
            return str(text)
        return f"\x1b[{code}m{text}{RESET}"

    # Raw colours

    def white(self, text: object = "") -> str:
        return self._paint("37", text)

    def bri_red(self, text: object = "") -> str:
        return self._paint("91", text)

    def dim_red(self, text: object = "") -> str:
        return self._paint("31", text)

    def none(self, text: object = "") -> str:
        return self._paint("0", text)

    # Semantic roles

    def classname(self, text: str) -> str:
        return self._paint("1;37", text)

    def message(self, text: str) -> str:
        return self.bri_red(text)

    def explanation(self, text: str) -> str:
        return self.bri_red(text)

    def context(self, text: str) -> str:
        return self.white(text)

    def details(self, text: str) -> str:
        return self.dim_red(text)

    def separator_line(self) -> str:
        return self.white("=" * self.separator_width) + "\n"

    def columns(self, columns: Sequence[str]) -> str:
        return " | ".join(columns) + "\n"

    # Code windows

    def color_path(self, text: str) -> str:
        return self._paint("36", text)

    def color_filename(self, text: str) -> str:
        return self._paint("1;36", text)

    def color_linenum(self, text: object) -> str:
        return self._paint("34", text)

    def mark_linenum(self, text: str) -> str:
        return self._paint("1;91", text)

    def screaming_red(self, text: str) -> str:
        return self._paint("1;37;41", text)

    def syntax_highlight(self, code: str) -> str:
        """Colour Python source, keeping the line structure intact."""
        if not self.color or not code:
            return code
        lexer = PythonLexer(stripnl=False, ensurenl=False)
        return highlight(code, lexer, TerminalFormatter())

    def highlight_text(self, code: str, index: int, text: str | None) -> str:
        """Invert every occurrence of ``text`` on line ``index`` of ``code``."""
        if not text:
            return code
        lines = split_lines(code)
        if 0 <= index < len(lines):
            inverted = self._paint("7", text)
            if self.color and lines[index].startswith(GREY):
                # Re-open the grey of a desaturated line after the reset
                inverted += GREY
            lines[index] = lines[index].replace(text, inverted)
        return "".join(lines)

    def underline(self, text: str) -> str:
        if not self.color:
            return text
        # Re-open the underline after every inner reset
        return self._paint("4", text.replace(RESET, RESET + "\x1b[4m"))

    def indent(self, text: str, prefix: str) -> str:
        return "".join(prefix + line for line in split_lines(text))

    def desaturate(self, text: str) -> str:
        """Strip all colour and grey the text out."""
        plain = strip_ansi(text)
        if not self.color:
            return plain
        lines = []
        for line in split_lines(plain):
            body = line.rstrip("\n")
            lines.append(GREY + body + RESET + line[len(body) :])
        return "".join(lines)
