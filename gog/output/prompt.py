"""Yes/no confirmation providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

__all__ = ["ConfirmProtocol", "ScriptedConfirm", "StaticConfirm", "TyperConfirm"]


class ConfirmProtocol(Protocol):
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; True means continue."""
        ...


class TyperConfirm:
    """Interactive prompt on the terminal. Anything but yes aborts."""

    def confirm(self, message: str) -> bool:
        import typer

        return typer.confirm(message, default=False)


@dataclass(frozen=True, slots=True)
class StaticConfirm:
    """Always gives the same answer (used for --yes)."""

    answer: bool = True

    def confirm(self, message: str) -> bool:
        del message
        return self.answer


def _no_answers() -> list[bool]:
    return []


@dataclass
class ScriptedConfirm:
    """Replays prepared answers and records the questions asked."""

    answers: list[bool] = field(default_factory=_no_answers)
    asked: list[str] = field(default_factory=list)

    def confirm(self, message: str) -> bool:
        self.asked.append(message)
        if not self.answers:
            return False
        return self.answers.pop(0)
