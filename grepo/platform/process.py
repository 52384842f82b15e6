"""Run external commands, returning their output as a Result.

Usage:
    match run(["git", "rev-parse", "HEAD"], cwd=repo_path, timeout=30):
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from grepo.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# Return code used when the process never produced one.
NO_EXIT_CODE = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that failed, could not start, or ran out of time.

    Attributes:
        command: argv as executed
        returncode: Exit status, NO_EXIT_CODE if there was none
        stdout: Whatever was captured before the failure
        stderr: Captured stderr, or why the command could not run
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3]) + (" ..." if len(self.command) > 3 else "")
        return f"{shown} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run cmd in cwd; Ok(stdout) on exit status 0, Err(ProcessError) otherwise.

    Output is decoded as UTF-8 with replacement, so odd bytes in a commit
    message never raise.
    """
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(ProcessError(argv, NO_EXIT_CODE, partial, f"timed out after {timeout}s"))
    except OSError as e:
        # Missing executable, missing cwd, permission denied.
        return Err(ProcessError(argv, NO_EXIT_CODE, "", str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(argv, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
