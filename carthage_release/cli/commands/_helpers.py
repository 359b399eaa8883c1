"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from carthage_release.core.errors import PackagerError, exit_code_for
from carthage_release.output.console import Style

if TYPE_CHECKING:
    from carthage_release.output.console import ConsoleProtocol


def exit_with_error(error: PackagerError, console: ConsoleProtocol) -> NoReturn:
    """Print ``error`` (and its hint) and exit with its exit code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(exit_code_for(error)))
