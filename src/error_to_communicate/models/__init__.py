"""Data models and transfer objects."""

from .backtrace import BacktraceLocation, ContextRange
from .exception_info import (
    ExceptionInfo,
    ExceptionSource,
    LoadErrorInfo,
    NoMethodErrorInfo,
    SyntaxErrorInfo,
    WrongNumberOfArgumentsInfo,
)
from .semantic import CodeWindowRequest, Emphasis, SemanticNode, Tag

__all__ = [
    # Backtrace models
    "BacktraceLocation",
    "ContextRange",
    # Exception models
    "ExceptionSource",
    "ExceptionInfo",
    "WrongNumberOfArgumentsInfo",
    "NoMethodErrorInfo",
    "LoadErrorInfo",
    "SyntaxErrorInfo",
    # Semantic tree models
    "Tag",
    "Emphasis",
    "CodeWindowRequest",
    "SemanticNode",
]
