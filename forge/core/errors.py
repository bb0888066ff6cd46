"""Error codes for CLI exit status.

Every command maps its failure to one of these codes so that CI scripts
driving `forge` can tell a bad flag from a broken engine build.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unknown brand, invalid value, aborted prompt)
    - 2: Environment error (no project found, git missing)
    - 3: Build error (mach exited non-zero)
    - 5: I/O error (template or manifest unreadable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5
