from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from carthage_release.core.config import CONFIG_FILE_NAME, ReleaseDefaults, load_release_defaults
from carthage_release.core.errors import ErrorCode
from carthage_release.core.result import Err
from carthage_release.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    defaults: ReleaseDefaults
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Load defaults from ``--config`` or ``./carthage-release.toml`` if present."""
    console = RichConsole()

    path = config_path
    if path is None:
        candidate = Path.cwd() / CONFIG_FILE_NAME
        path = candidate if candidate.is_file() else None

    defaults = ReleaseDefaults()
    if path is not None:
        result = load_release_defaults(path)
        if isinstance(result, Err):
            console.error(result.error.message)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        defaults = result.value

    return CLIContext(defaults=defaults, console=console)
