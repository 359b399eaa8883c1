from __future__ import annotations

from pathlib import Path

import typer

from carthage_release.cli.commands._helpers import exit_with_error
from carthage_release.cli.context import build_context
from carthage_release.core.config import manifest_source_from_value
from carthage_release.core.result import Err
from carthage_release.output.console import Style
from carthage_release.services.manifest import load_manifest
from carthage_release.tools.http import RealHttpClient


def show(
    previous_manifest: str | None = typer.Option(
        None, "--previous-manifest", "-p", help="Manifest file path or URL"
    ),
    strict_file: bool = typer.Option(
        False, "--strict-file", help="Treat the reference as a file that must exist"
    ),
    config: Path | None = typer.Option(None, "--config", help="Defaults file"),
    timeout: float = typer.Option(30.0, "--timeout", help="HTTP timeout in seconds"),
) -> None:
    """List the releases in a manifest, newest first."""
    ctx = build_context(config)

    reference = previous_manifest or ctx.defaults.previous_manifest
    raw: object = Path(reference) if reference is not None and strict_file else reference
    source = manifest_source_from_value(raw)
    if isinstance(source, Err):
        exit_with_error(source.error, ctx.console)

    manifest = load_manifest(source.value, RealHttpClient(timeout=timeout))
    if isinstance(manifest, Err):
        exit_with_error(manifest.error, ctx.console)

    if not manifest.value:
        ctx.console.print("(no releases)", Style.DIM)
        return

    width = max(len(version) for version in manifest.value)
    for version, url in manifest.value.items():
        ctx.console.print(f"{version.ljust(width)}  {url}")
