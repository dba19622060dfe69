"""Interpreter for semantic report trees.

A heuristic describes *what* to say as a tree of ``(tag, content, *rest)``
tuples (see error_to_communicate.models.semantic). The TerminalRenderer
decides *how* it looks by delegating every decoration to the theme and
every ``code`` node to a CodeWindow.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from error_to_communicate.core.code_window import CodeWindow
from error_to_communicate.models.semantic import CodeWindowRequest, SemanticNode, Tag
from error_to_communicate.utils.errors import UnknownTagError

if TYPE_CHECKING:
    from error_to_communicate.core.heuristics.base import Heuristic

NO_BACKTRACE = "No backtrace available"


class TerminalRenderer:
    """Renders semantic trees to terminal text.

    Example:
        renderer = TerminalRenderer(theme=Theme(), cwd=Path.cwd())
        text = renderer.format((Tag.MESSAGE, "hello"))
    """

    # Tags whose content is decorated by the theme method of the same name
    TEXT_ROLES: ClassVar[dict[str, str]] = {
        Tag.CLASSNAME.value: "classname",
        Tag.MESSAGE.value: "message",
        Tag.EXPLANATION.value: "explanation",
        Tag.CONTEXT.value: "context",
        Tag.DETAILS.value: "details",
    }

    def __init__(self, theme: Any, cwd: Path | str) -> None:
        """Initialize the TerminalRenderer.

        Args:
            theme: Theme supplying the decorations
            cwd: Directory that code window paths are shown relative to
        """
        self.theme = theme
        self.cwd = Path(cwd)
        self.format_code = CodeWindow(theme=theme, cwd=cwd)

    def render(self, heuristic: Heuristic) -> str:
        """Render a heuristic's summary, helpful info and backtrace."""
        return self.format(
            [
                heuristic.semantic_summary(),
                heuristic.semantic_info(),
                heuristic.semantic_backtrace(),
            ]
        )

    def format(self, node: SemanticNode) -> str:
        """Render a semantic node.

        Args:
            node: A ``(tag, content, *rest)`` tuple, a list of nodes, or literal text

        Returns:
            The rendered text

        Raises:
            UnknownTagError: If a tag is outside the closed vocabulary
        """
        if isinstance(node, list):
            return "".join(self.format(child) for child in node)
        if not isinstance(node, tuple):
            return "" if node is None else str(node)
        if not node:
            return ""

        tag, *rest = node
        if isinstance(tag, (tuple, list)):
            return "".join(self.format(child) for child in node)
        content = rest[0] if rest else None

        if tag in (Tag.SUMMARY, Tag.HEURISTIC):
            return self.format((Tag.SEPARATOR,)) + self.format(content)
        if tag == Tag.BACKTRACE:
            if not content:
                content = (Tag.MESSAGE, NO_BACKTRACE)
            return self.format((Tag.SEPARATOR,)) + self.format(content)
        if tag == Tag.SEPARATOR:
            return self.theme.separator_line()
        if tag == Tag.COLUMNS:
            return self.theme.columns([self.format(column) for column in rest])
        if tag == Tag.CODE:
            return self.format_code.render(CodeWindowRequest.coerce(content))
        if tag == Tag.NULL:
            return ""
        role = self.TEXT_ROLES.get(str(tag))
        if role is not None:
            return getattr(self.theme, role)(self.format(content))
        raise UnknownTagError(tag)


def format_terminal(*, heuristic: Heuristic, theme: Any, cwd: Path | str) -> str:
    """Default render entry point used by the Classifier."""
    return TerminalRenderer(theme=theme, cwd=cwd).render(heuristic)
