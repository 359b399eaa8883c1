"""Tests for carthage_release.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from carthage_release.core.config import (
    InlineHandle,
    LocalPath,
    ReleaseConfig,
    ReleaseDefaults,
    RemoteUrl,
    load_release_defaults,
    manifest_source_from_value,
    validate_config,
)
from carthage_release.core.errors import ConfigurationError
from carthage_release.core.result import Err, Ok


@pytest.fixture
def framework(tmp_path: Path) -> Path:
    path = tmp_path / "Foo.framework"
    path.mkdir()
    return path


def _create(framework: Path, **overrides: object) -> Ok[ReleaseConfig] | Err[ConfigurationError]:
    kwargs: dict[str, object] = {
        "version": "1.2.0",
        "previous_manifest": "https://cdn.example.com/releases.json",
        "base_url": "https://cdn.example.com/releases",
        "frameworks": [framework],
    }
    kwargs.update(overrides)
    return ReleaseConfig.create(**kwargs)  # type: ignore[arg-type]


class TestManifestSourceFromValue:
    def test_path_is_local_file(self, tmp_path: Path) -> None:
        result = manifest_source_from_value(tmp_path / "releases.json")
        assert result == Ok(LocalPath(tmp_path / "releases.json"))

    def test_string_is_remote_reference(self) -> None:
        result = manifest_source_from_value("  https://cdn.example.com/releases.json ")
        assert result == Ok(RemoteUrl("https://cdn.example.com/releases.json"))

    def test_variant_is_kept(self) -> None:
        handle = InlineHandle("{}")
        assert manifest_source_from_value(handle) == Ok(handle)

    def test_none_is_unset(self) -> None:
        result = manifest_source_from_value(None)
        assert isinstance(result, Err)
        assert result.error.field == "previous_manifest"
        assert "Must set" in result.error.message

    def test_blank_string(self) -> None:
        result = manifest_source_from_value("   ")
        assert isinstance(result, Err)
        assert "blank" in result.error.message

    def test_wrong_type_names_type(self) -> None:
        result = manifest_source_from_value(42)
        assert isinstance(result, Err)
        assert "int" in result.error.message


class TestReleaseConfigCreate:
    def test_defaults(self, framework: Path) -> None:
        result = _create(framework)

        assert isinstance(result, Ok)
        config = result.value
        assert config.archive_name == "1.2.0.zip"
        assert config.manifest_name == "releases.json"
        assert config.output_dir == Path("build") / "carthage"
        assert config.staging_dir == Path("build") / "tmp" / "carthage"
        assert config.overwrite is False
        assert config.archive_path == Path("build") / "carthage" / "1.2.0.zip"
        assert config.manifest_path == Path("build") / "carthage" / "releases.json"

    def test_explicit_archive_name_wins(self, framework: Path) -> None:
        result = _create(framework, archive_name="Foo-1.2.0.zip")
        assert isinstance(result, Ok)
        assert result.value.archive_name == "Foo-1.2.0.zip"

    def test_build_dir_moves_output_and_staging(self, framework: Path, tmp_path: Path) -> None:
        result = _create(framework, build_dir=tmp_path / "out")
        assert isinstance(result, Ok)
        assert result.value.output_dir == tmp_path / "out" / "carthage"
        assert result.value.staging_dir == tmp_path / "out" / "tmp" / "carthage"

    def test_base_url_is_trimmed(self, framework: Path) -> None:
        result = _create(framework, base_url="  https://cdn.example.com/releases/  ")
        assert isinstance(result, Ok)
        assert result.value.base_url == "https://cdn.example.com/releases/"

    def test_frameworks_accept_strings(self, framework: Path) -> None:
        result = _create(framework, frameworks=[str(framework)])
        assert isinstance(result, Ok)
        assert result.value.frameworks == (framework,)

    @pytest.mark.parametrize("field", ["version", "base_url", "frameworks", "previous_manifest"])
    def test_unset_field(self, framework: Path, field: str) -> None:
        result = _create(framework, **{field: None})
        assert isinstance(result, Err)
        assert result.error.field == field

    def test_blank_version(self, framework: Path) -> None:
        result = _create(framework, version="  ")
        assert isinstance(result, Err)
        assert result.error.field == "version"
        assert "non-blank" in result.error.message

    def test_blank_base_url(self, framework: Path) -> None:
        result = _create(framework, base_url=" ")
        assert isinstance(result, Err)
        assert result.error.field == "base_url"

    def test_empty_frameworks(self, framework: Path) -> None:
        result = _create(framework, frameworks=[])
        assert isinstance(result, Err)
        assert result.error.field == "frameworks"
        assert "non-empty" in result.error.message

    def test_missing_framework(self, framework: Path, tmp_path: Path) -> None:
        missing = tmp_path / "Missing.framework"
        result = _create(framework, frameworks=[framework, missing])
        assert isinstance(result, Err)
        assert result.error.field == "frameworks"
        assert "Missing.framework" in result.error.message
        assert "does not exist" in result.error.message

    def test_blank_manifest_name(self, framework: Path) -> None:
        result = _create(framework, manifest_name="")
        assert isinstance(result, Err)
        assert result.error.field == "manifest_name"


class TestValidateConfig:
    def test_framework_deleted_after_create(self, framework: Path) -> None:
        result = _create(framework)
        assert isinstance(result, Ok)

        framework.rmdir()

        checked = validate_config(result.value)
        assert isinstance(checked, Err)
        assert checked.error.field == "frameworks"

    def test_valid(self, framework: Path) -> None:
        result = _create(framework)
        assert isinstance(result, Ok)
        assert validate_config(result.value) == Ok(None)


class TestLoadReleaseDefaults:
    def test_full_table(self, tmp_path: Path) -> None:
        path = tmp_path / "carthage-release.toml"
        path.write_text(
            "\n".join(
                [
                    "[release]",
                    'base_url = "https://cdn.example.com/releases"',
                    'previous_manifest = "releases.json"',
                    'frameworks = ["build/Foo.framework", "build/Foo.framework.dSYM"]',
                    'manifest_name = "Foo.json"',
                    'out_dir = "dist"',
                    "overwrite = true",
                ]
            ),
            encoding="utf-8",
        )

        result = load_release_defaults(path)

        assert isinstance(result, Ok)
        defaults = result.value
        assert defaults.base_url == "https://cdn.example.com/releases"
        assert defaults.previous_manifest == str(tmp_path / "releases.json")
        assert defaults.frameworks == (
            tmp_path / "build" / "Foo.framework",
            tmp_path / "build" / "Foo.framework.dSYM",
        )
        assert defaults.manifest_name == "Foo.json"
        assert defaults.out_dir == tmp_path / "dist"
        assert defaults.staging_dir is None
        assert defaults.overwrite is True

    def test_url_reference_is_not_resolved(self, tmp_path: Path) -> None:
        path = tmp_path / "carthage-release.toml"
        path.write_text(
            '[release]\nprevious_manifest = "https://cdn.example.com/releases.json"\n',
            encoding="utf-8",
        )
        result = load_release_defaults(path)
        assert isinstance(result, Ok)
        assert result.value.previous_manifest == "https://cdn.example.com/releases.json"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "carthage-release.toml"
        path.write_text("", encoding="utf-8")
        assert load_release_defaults(path) == Ok(ReleaseDefaults())

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_release_defaults(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "carthage-release.toml"
        path.write_text("[release\n", encoding="utf-8")
        result = load_release_defaults(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
