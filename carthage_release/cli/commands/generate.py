from __future__ import annotations

from pathlib import Path

import typer

from carthage_release.cli.commands._helpers import exit_with_error
from carthage_release.cli.context import build_context
from carthage_release.core.config import ReleaseConfig
from carthage_release.core.errors import ConfigurationError
from carthage_release.core.result import Err
from carthage_release.platform.process import run
from carthage_release.services.release import ReleasePackager
from carthage_release.tools.http import RealHttpClient


def generate(
    version_string: str | None = typer.Option(
        None, "--version-string", "-v", help="Version identifier of this release (e.g. 1.2.0)"
    ),
    previous_manifest: str | None = typer.Option(
        None,
        "--previous-manifest",
        "-p",
        help="Current manifest: a file path, or a URL to fetch when no such file exists",
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", "-u", help="URL the archive will be uploaded under"
    ),
    framework: list[Path] | None = typer.Option(
        None, "--framework", "-f", help="Framework directory to package (repeatable)"
    ),
    archive_name: str | None = typer.Option(
        None, "--archive-name", help="Archive file name (default: <version>.zip)"
    ),
    manifest_name: str | None = typer.Option(
        None, "--manifest-name", help="Manifest file name (default: releases.json)"
    ),
    out_dir: Path | None = typer.Option(
        None, "--out-dir", help="Output directory (default: build/carthage)"
    ),
    staging_dir: Path | None = typer.Option(
        None, "--staging-dir", help="Scratch directory, wiped on each run"
    ),
    overwrite: bool | None = typer.Option(
        None,
        "--overwrite/--no-overwrite",
        help="Replace an existing entry for this version (not recommended)",
    ),
    strict_file: bool = typer.Option(
        False,
        "--strict-file",
        help="Treat --previous-manifest as a file that must exist (never fetch)",
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Defaults file (default: ./carthage-release.toml if present)"
    ),
    timeout: float = typer.Option(30.0, "--timeout", help="HTTP timeout in seconds"),
) -> None:
    """Package frameworks into a versioned zip and update the release manifest."""
    ctx = build_context(config)
    defaults = ctx.defaults

    reference = previous_manifest if previous_manifest is not None else defaults.previous_manifest
    source: object = reference
    if reference is not None and strict_file:
        source = Path(reference)

    frameworks = framework or list(defaults.frameworks) or None
    if overwrite is None:
        overwrite = bool(defaults.overwrite)

    created = ReleaseConfig.create(
        version=version_string,
        previous_manifest=source,
        base_url=base_url if base_url is not None else defaults.base_url,
        frameworks=frameworks,
        archive_name=archive_name,
        manifest_name=manifest_name if manifest_name is not None else defaults.manifest_name,
        output_dir=out_dir if out_dir is not None else defaults.out_dir,
        staging_dir=staging_dir if staging_dir is not None else defaults.staging_dir,
        overwrite=overwrite,
    )
    if isinstance(created, Err):
        exit_with_error(_with_option_hint(created.error), ctx.console)

    packager = ReleasePackager(
        created.value,
        http=RealHttpClient(timeout=timeout),
        runner=run,
        console=ctx.console,
    )
    outcome = packager.run()
    if isinstance(outcome, Err):
        exit_with_error(outcome.error, ctx.console)


_OPTION_FOR_FIELD = {
    "version": "--version-string",
    "previous_manifest": "--previous-manifest",
    "base_url": "--base-url",
    "frameworks": "--framework",
    "archive_name": "--archive-name",
    "manifest_name": "--manifest-name",
}


def _with_option_hint(error: ConfigurationError) -> ConfigurationError:
    option = _OPTION_FOR_FIELD.get(error.field)
    if option is None or error.hint:
        return error
    return ConfigurationError(field=error.field, message=error.message, hint=f"Pass {option}")
