"""Shared test fixtures for error-to-communicate."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pytest
import structlog

from error_to_communicate.core.project import Project
from error_to_communicate.core.theme import Theme

SAMPLE_SOURCE = "".join(f"line{n}\n" for n in range(1, 21))


@dataclass
class FakeException:
    """Exception-like object exposing ``message`` and ``backtrace``."""

    message: str
    backtrace: list[str] = field(default_factory=list)
    class_name: str | None = None


class RecordingLogger:
    """Stand-in for a module logger that keeps every call."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict]] = []

    def __getattr__(self, level: str):
        def record(event: str, **kwargs) -> None:
            self.events.append((level, event, kwargs))

        return record


class TaggingTheme(Theme):
    """Theme that wraps each decoration in a visible marker."""

    def __init__(self) -> None:
        super().__init__(color=False, separator_width=10)

    def classname(self, text: str) -> str:
        return f"<classname>{text}</classname>"

    def message(self, text: str) -> str:
        return f"<message>{text}</message>"

    def explanation(self, text: str) -> str:
        return f"<explanation>{text}</explanation>"

    def context(self, text: str) -> str:
        return f"<context>{text}</context>"

    def details(self, text: str) -> str:
        return f"<details>{text}</details>"


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def record_logs(monkeypatch: pytest.MonkeyPatch):
    """Replace a module's ``log`` and return the list its calls land in."""

    def record(module) -> list[tuple[str, str, dict]]:
        logger = RecordingLogger()
        monkeypatch.setattr(module, "log", logger)
        return logger.events

    return record


@pytest.fixture
def plain_theme() -> Theme:
    """Theme without colours, so rendered text can be compared exactly."""
    return Theme(color=False)


@pytest.fixture
def tagging_theme() -> TaggingTheme:
    """Theme that marks every semantic decoration."""
    return TaggingTheme()


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """A 20 line source file whose lines read line1..line20."""
    path = tmp_path / "sample.py"
    path.write_text(SAMPLE_SOURCE)
    return path


@pytest.fixture
def project(tmp_path: Path) -> Project:
    """A project rooted at the test's temporary directory."""
    return Project(tmp_path)


@pytest.fixture
def fake_exception():
    """Factory for FakeException objects."""
    return FakeException
