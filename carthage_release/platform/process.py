"""External process execution with Result-based error handling.

The archiver is the only external program this tool runs. ``ProcessRunner``
is the seam tests use to replace it.

Usage:
    result = run(["zip", "-r", "out.zip", "Foo.framework"], cwd=staging)
    match result:
        case Ok(stdout):
            console.print(stdout)
        case Err(error):
            console.error(error.stderr)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from carthage_release.core.result import Err, Ok, Result

__all__ = ["ProcessError", "ProcessRunner", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code (-1 if the process could not be started).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"

    @property
    def output(self) -> str:
        """Combined diagnostics, stderr first."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)


class ProcessRunner(Protocol):
    def __call__(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]: ...


def run(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
    """Execute a command, waiting for it to exit.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.

    Returns:
        Ok(stdout) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)
