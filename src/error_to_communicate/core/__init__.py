"""Core classification and rendering components.

This module exports the main classes:
- Classifier: Picks the heuristic that explains an exception
- ExceptionParser: Extracts structured information from exceptions
- BacktraceParser: Parses stack trace entries into locations
- CodeWindow: Renders source lines around a location
- TerminalRenderer: Interprets semantic report trees
- Reporter: Classifies, renders and writes reports
"""

from error_to_communicate.core.backtrace_parser import BacktraceParser
from error_to_communicate.core.classifier import Classifier, default_classifier
from error_to_communicate.core.code_window import CodeWindow
from error_to_communicate.core.exception_parser import ExceptionParser
from error_to_communicate.core.project import Project
from error_to_communicate.core.renderer import TerminalRenderer, format_terminal
from error_to_communicate.core.reporter import Reporter, install, uninstall
from error_to_communicate.core.theme import Theme

__all__ = [
    "BacktraceParser",
    "Classifier",
    "CodeWindow",
    "ExceptionParser",
    "Project",
    "Reporter",
    "TerminalRenderer",
    "Theme",
    "default_classifier",
    "format_terminal",
    "install",
    "uninstall",
]
