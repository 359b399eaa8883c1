from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

import pytest

from carthage_release.core.result import Err, Ok, Result
from carthage_release.platform.process import ProcessError


class FakeZip:
    """Stands in for the ``zip`` tool: builds the archive with zipfile.

    Records every invocation; ``fail_with`` makes the next call fail.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self.fail_with: ProcessError | None = None

    def __call__(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        self.calls.append((cmd, cwd))
        if self.fail_with is not None:
            return Err(self.fail_with)

        archive_name = cmd[5]
        entries = cmd[6:]
        with ZipFile(cwd / archive_name, "w", compression=ZIP_DEFLATED) as zf:
            for entry in entries:
                root = cwd / entry
                if root.is_file():
                    zf.write(root, arcname=entry)
                    continue
                zf.write(root, arcname=entry + "/")
                for dirpath, dirnames, filenames in os.walk(root):
                    here = Path(dirpath)
                    for name in sorted(dirnames):
                        zf.write(here / name, arcname=(here / name).relative_to(cwd).as_posix() + "/")
                    for name in sorted(filenames):
                        zf.write(here / name, arcname=(here / name).relative_to(cwd).as_posix())
        return Ok("")


@pytest.fixture
def fake_zip() -> FakeZip:
    return FakeZip()


@pytest.fixture
def make_framework(tmp_path: Path) -> Callable[..., Path]:
    """Create ``<tmp>/src/<name>`` populated with ``files`` (relative path -> content)."""

    def _make(name: str, files: dict[str, str], parent: str = "src") -> Path:
        root = tmp_path / parent / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make
