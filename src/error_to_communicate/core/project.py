"""Project context used to decide which frames belong to the user's code."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from pathlib import Path

from error_to_communicate.models.backtrace import is_vendored


class Project:
    """The project being debugged.

    Attributes:
        root: Directory holding the project's own code
        loaded_files: Source files the interpreter has loaded; empty means unknown
    """

    def __init__(self, root: Path | str, loaded_files: Iterable[Path | str] = ()) -> None:
        self.root = Path(root).resolve()
        self.loaded_files = frozenset(Path(p).resolve() for p in loaded_files)

    @classmethod
    def from_environment(
        cls,
        root: Path | str | None = None,
        extra_files: Iterable[Path | str] = (),
    ) -> Project:
        """Build a project from the running interpreter.

        Args:
            root: Project root (defaults to the current directory)
            extra_files: Files to count as loaded besides imported modules,
                such as a script run with runpy

        Returns:
            Project whose loaded files are the modules currently imported
        """
        loaded: list[Path | str] = list(extra_files)
        for module in list(sys.modules.values()):
            module_file = getattr(module, "__file__", None)
            if isinstance(module_file, str):
                loaded.append(module_file)
        return cls(root if root is not None else Path.cwd(), loaded)

    def contains(self, path: Path | str) -> bool:
        """Check if ``path`` lives under the project root."""
        try:
            Path(path).resolve().relative_to(self.root)
        except (ValueError, OSError):
            return False
        return True

    def owns(self, path: Path | str) -> bool:
        """Check if ``path`` is the project's own, loaded, non-vendored code."""
        resolved = Path(path).resolve()
        if not self.contains(resolved):
            return False
        if is_vendored(resolved):
            return False
        return not self.loaded_files or resolved in self.loaded_files

    def __repr__(self) -> str:
        return f"Project(root={str(self.root)!r}, loaded_files={len(self.loaded_files)})"
