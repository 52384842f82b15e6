"""Exit codes for the grepo CLI.

A command ends in one of three ways: every repo succeeded, some repos
failed while the rest were reported, or the operation itself failed before
any repo was inspected. Each maps to a distinct code below.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CLI contract.

    - 0: Success
    - 1: User error (unknown repo, duplicate watch, missing base dir setting)
    - 2: Environment error (base directory missing on disk)
    - 3: Partial failure (report produced, some repos errored)
    - 5: I/O error (config could not be written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    PARTIAL_FAILURE = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
