"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gog.core.errors import ErrorCode
from gog.errors import (
    AggregationError,
    BranchDeleteError,
    Cancelled,
    ChangeHistoryEmpty,
    CollisionError,
    ExternalProcessError,
    FeatureNotFound,
    FormatError,
    GogError,
    InvalidState,
    NotARepository,
    PersistenceError,
)
from gog.output.console import Style

if TYPE_CHECKING:
    from gog.output.console import ConsoleProtocol

__all__ = ["error_exit_code", "print_error"]


def print_error(error: GogError, console: ConsoleProtocol) -> None:
    """Print the high-level message, then git's own diagnostic or a hint."""
    match error:
        case Cancelled():
            console.info(error.message)
        case ExternalProcessError() | BranchDeleteError() | AggregationError():
            console.error(error.message)
            if error.hint:
                console.print(f"git: {error.hint}", Style.DIM)
        case _:
            console.error(error.message)
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)


def error_exit_code(error: GogError) -> int:
    """Get exit code for a workflow error."""
    match error:
        case Cancelled():
            return int(ErrorCode.OK)
        case FormatError() | CollisionError() | InvalidState() | FeatureNotFound() | ChangeHistoryEmpty():
            return int(ErrorCode.USER_ERROR)
        case NotARepository():
            return int(ErrorCode.ENV_ERROR)
        case ExternalProcessError() | AggregationError() | BranchDeleteError():
            return int(ErrorCode.GIT_ERROR)
        case PersistenceError():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.USER_ERROR)
