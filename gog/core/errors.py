"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for gog commands.

    - 0: Success (also used when the operator cancels at a prompt)
    - 1: User error (bad identifier, missing bump level, wrong branch)
    - 2: Environment error (not a git repository, unreadable config)
    - 3: Git error (an external git command failed)
    - 5: I/O error (metadata or changelog could not be written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
