"""Explain raised exceptions with annotated source code."""

from error_to_communicate.core import (
    Classifier,
    Project,
    Reporter,
    Theme,
    default_classifier,
    install,
    uninstall,
)

__all__ = [
    "Classifier",
    "Project",
    "Reporter",
    "Theme",
    "default_classifier",
    "install",
    "uninstall",
]
