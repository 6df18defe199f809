"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    LogLevel,
    MockConsole,
    RichConsole,
    Style,
)
from .prompt import ConfirmProtocol, ScriptedConfirm, StaticConfirm, TyperConfirm

__all__ = [
    "ConfirmProtocol",
    "ConsoleProtocol",
    "LogLevel",
    "MockConsole",
    "RichConsole",
    "ScriptedConfirm",
    "StaticConfirm",
    "Style",
    "TyperConfirm",
]
