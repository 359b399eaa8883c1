"""Framework archive construction.

Frameworks are copied into a clean staging directory and zipped there by the
external ``zip`` tool, so the archive holds one top-level entry per framework
(named by its base name) and symlinks inside framework bundles survive.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from carthage_release.core.errors import ArchiveError
from carthage_release.core.result import Err, Ok, Result
from carthage_release.output.console import ConsoleProtocol, Style
from carthage_release.platform.files import copy_file, copy_into, reset_dir
from carthage_release.platform.process import ProcessRunner, run

__all__ = ["TEMP_ARCHIVE_NAME", "zip_command", "stage_frameworks", "build_archive"]

TEMP_ARCHIVE_NAME = "carthageZip.zip"


def zip_command(archive_name: str, entries: Sequence[str]) -> list[str]:
    """``zip`` invocation: recursive, no extra attributes, store symlinks, quiet."""
    return ["zip", "-r", "-X", "-y", "-q", archive_name, *entries]


def stage_frameworks(
    frameworks: Sequence[Path],
    staging_dir: Path,
    console: ConsoleProtocol,
) -> list[str]:
    """Copy frameworks into a freshly emptied ``staging_dir``.

    Later frameworks overwrite files of earlier ones with the same relative
    path; each such collision is reported as a warning.

    Returns:
        Top-level entry names in the staging directory, in framework order.
    """
    reset_dir(staging_dir)

    entries: list[str] = []
    for framework in frameworks:
        replaced = copy_into(framework, staging_dir)
        for rel in replaced:
            console.warning(f"{rel} from '{framework}' overwrote a file staged earlier")
        if framework.name not in entries:
            entries.append(framework.name)
    return entries


def build_archive(
    frameworks: Sequence[Path],
    *,
    staging_dir: Path,
    output_path: Path,
    console: ConsoleProtocol,
    runner: ProcessRunner = run,
) -> Result[Path, ArchiveError]:
    """Zip ``frameworks`` into ``output_path``.

    Args:
        frameworks: Directories to package, in order.
        staging_dir: Scratch directory (wiped first).
        output_path: Final archive location; replaced if present.
        console: Progress output.
        runner: Process collaborator that runs the archiver.

    Returns:
        Ok(output_path), or Err(ArchiveError) with the archiver's diagnostics.
    """
    entries = stage_frameworks(frameworks, staging_dir, console)

    console.header("Zipping frameworks:")
    for entry in entries:
        console.print(f"  {entry}", Style.DIM)

    result = runner(zip_command(TEMP_ARCHIVE_NAME, entries), staging_dir)
    if isinstance(result, Err):
        return Err(ArchiveError(returncode=result.error.returncode, output=result.error.output))
    if result.value.strip():
        console.print(result.value.rstrip(), Style.DIM)

    temp_archive = staging_dir / TEMP_ARCHIVE_NAME
    if not temp_archive.is_file():
        return Err(ArchiveError(returncode=0, output=f"archive not produced: {temp_archive}"))

    console.print("Zipping completed", Style.SUCCESS)
    copy_file(temp_archive, output_path)
    return Ok(output_path)
