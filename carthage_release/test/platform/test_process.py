"""Tests for carthage_release.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from carthage_release.core.result import Err, Ok
from carthage_release.platform.process import ProcessError, run


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(command=("zip", "-r"), returncode=12, stdout="", stderr="")
        assert str(error) == "zip -r failed (exit 12)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("zip", "-r", "-X", "-q", "out.zip", "Foo.framework"),
            returncode=1,
            stdout="",
            stderr="",
        )
        assert str(error) == "zip -r -X ... failed (exit 1)"

    def test_output_combines_streams(self) -> None:
        error = ProcessError(("zip",), 1, stdout="adding: a\n", stderr="zip warning: b\n")
        assert error.output == "zip warning: b\nadding: a"

    def test_output_empty(self) -> None:
        assert ProcessError(("zip",), 1, "", "  ").output == ""

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(12)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == 12
        assert "bad" in result.error.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("x")

        result = run([sys.executable, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "marker.txt" in result.value
