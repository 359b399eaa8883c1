"""Release packaging pipeline.

Validate -> load previous manifest -> merge -> build archive -> write manifest.
The first failing stage stops the run; earlier side effects are left in place.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from carthage_release.core.config import ReleaseConfig, validate_config
from carthage_release.core.errors import PackagerError, ReleaseFailed
from carthage_release.core.result import Err, Ok, Result
from carthage_release.output.console import ConsoleProtocol, RichConsole
from carthage_release.platform.process import ProcessRunner, run
from carthage_release.services.archive import build_archive
from carthage_release.services.manifest import (
    Manifest,
    download_url,
    load_manifest,
    merge_manifest,
    write_manifest,
)
from carthage_release.tools.http import HttpClient, RealHttpClient

__all__ = ["ReleaseOutcome", "ReleasePackager", "generate_release"]


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    version: str
    url: str
    archive_path: Path
    manifest_path: Path
    manifest: Manifest


class ReleasePackager:
    """Packages one release described by a ``ReleaseConfig``."""

    def __init__(
        self,
        config: ReleaseConfig,
        *,
        http: HttpClient | None = None,
        runner: ProcessRunner = run,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self.config = config
        self._http = http if http is not None else RealHttpClient()
        self._runner = runner
        self._console: ConsoleProtocol = console if console is not None else RichConsole()

    def run(self) -> Result[ReleaseOutcome, PackagerError]:
        config = self.config

        checked = validate_config(config)
        if isinstance(checked, Err):
            return checked

        previous = load_manifest(config.previous_manifest, self._http)
        if isinstance(previous, Err):
            return previous
        self._console.info(
            f"Loaded {len(previous.value)} previous release(s) from "
            f"{config.previous_manifest.describe()}"
        )

        url = download_url(config.base_url, config.archive_name)
        merged = merge_manifest(previous.value, config.version, url, overwrite=config.overwrite)
        if isinstance(merged, Err):
            return merged

        archive = build_archive(
            config.frameworks,
            staging_dir=config.staging_dir,
            output_path=config.archive_path,
            console=self._console,
            runner=self._runner,
        )
        if isinstance(archive, Err):
            return archive

        manifest_path = write_manifest(merged.value, config.manifest_path)

        self._console.success(f"{config.version} -> {url}")
        self._console.success(str(archive.value))
        self._console.success(str(manifest_path))

        return Ok(
            ReleaseOutcome(
                version=config.version,
                url=url,
                archive_path=archive.value,
                manifest_path=manifest_path,
                manifest=merged.value,
            )
        )


def generate_release(
    *,
    version: str | None,
    previous_manifest: object,
    base_url: str | None,
    frameworks: Sequence[Path | str] | None,
    archive_name: str | None = None,
    manifest_name: str | None = None,
    output_dir: Path | None = None,
    staging_dir: Path | None = None,
    build_dir: Path | None = None,
    overwrite: bool = False,
    http: HttpClient | None = None,
    runner: ProcessRunner = run,
    console: ConsoleProtocol | None = None,
) -> ReleaseOutcome:
    """Build a config and run the pipeline, raising on failure.

    Raises:
        ReleaseFailed: Any stage failed; ``.error`` holds the details.
    """
    config = ReleaseConfig.create(
        version=version,
        previous_manifest=previous_manifest,
        base_url=base_url,
        frameworks=frameworks,
        archive_name=archive_name,
        manifest_name=manifest_name,
        output_dir=output_dir,
        staging_dir=staging_dir,
        build_dir=build_dir,
        overwrite=overwrite,
    )
    if isinstance(config, Err):
        raise ReleaseFailed(config.error)

    outcome = ReleasePackager(config.value, http=http, runner=runner, console=console).run()
    if isinstance(outcome, Err):
        raise ReleaseFailed(outcome.error)
    return outcome.value
