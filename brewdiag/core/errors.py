"""Process exit codes.

Every CLI command maps its outcome to one of these values so scripts can tell
a broken environment apart from a bad invocation.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success (warnings alone do not fail a run)
    - 1: User error (bad arguments, unreadable config, unknown check name)
    - 2: Environment error (a fatal check reported a problem)
    - 3: Internal error (the check registry is misconfigured)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    INTERNAL_ERROR = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
