"""Release parameters and the optional ``carthage-release.toml`` defaults file.

``ReleaseConfig.create`` is the only way to build a config: it takes raw,
possibly-unset values (``None``), derives the archive name, and validates
everything before any I/O happens.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "LocalPath",
    "InlineHandle",
    "RemoteUrl",
    "ManifestSource",
    "manifest_source_from_value",
    "ReleaseConfig",
    "ReleaseDefaults",
    "validate_config",
    "load_release_defaults",
    "DEFAULT_MANIFEST_NAME",
    "DEFAULT_BUILD_DIR",
    "CONFIG_FILE_NAME",
]

DEFAULT_MANIFEST_NAME = "releases.json"
DEFAULT_BUILD_DIR = Path("build")
CONFIG_FILE_NAME = "carthage-release.toml"


# -----------------------------------------------------------------------------
# Previous manifest source
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LocalPath:
    """An explicit manifest file. It must exist, even if empty."""

    path: Path

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class InlineHandle:
    """Manifest content already held in memory."""

    text: str
    label: str = "<inline>"

    def describe(self) -> str:
        return self.label


@dataclass(frozen=True, slots=True)
class RemoteUrl:
    """A reference read as a local file when one exists there, else fetched as a URL."""

    reference: str

    def describe(self) -> str:
        return self.reference


ManifestSource = LocalPath | InlineHandle | RemoteUrl


def manifest_source_from_value(value: object) -> Result[ManifestSource, ConfigurationError]:
    """Resolve a raw caller value into a ManifestSource.

    ``Path`` means an explicit file, ``str`` means a path-or-URL reference.
    """
    match value:
        case LocalPath() | InlineHandle() | RemoteUrl():
            return Ok(value)
        case Path():
            return Ok(LocalPath(value))
        case str() if value.strip():
            return Ok(RemoteUrl(value.strip()))
        case str():
            return Err(
                ConfigurationError(
                    field="previous_manifest",
                    message="'previous_manifest' must not be blank",
                    hint="Pass a file path, or a URL to the previously generated manifest",
                )
            )
        case None:
            return Err(
                ConfigurationError(
                    field="previous_manifest",
                    message="Must set 'previous_manifest' before generating a release",
                    hint="Pass a file path, or a URL to the previously generated manifest",
                )
            )
        case _:
            return Err(
                ConfigurationError(
                    field="previous_manifest",
                    message=(
                        "Invalid argument given for 'previous_manifest'. Must be a file, a path "
                        "to a file, or a URL pointing to the previously generated manifest. "
                        f"Currently it's a {type(value).__name__}"
                    ),
                )
            )


# -----------------------------------------------------------------------------
# Release parameters
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Validated inputs for one release run.

    Attributes:
        version: Version identifier of this release.
        previous_manifest: Where the current manifest comes from.
        base_url: Where the archive will be uploaded (without the file name).
        frameworks: Directories packaged into the archive, in order.
        archive_name: Output archive file name.
        manifest_name: Output manifest file name.
        output_dir: Directory receiving the archive and the manifest.
        staging_dir: Scratch directory, wiped on every run.
        overwrite: Allow replacing an existing version entry.
    """

    version: str
    previous_manifest: ManifestSource
    base_url: str
    frameworks: tuple[Path, ...]
    archive_name: str
    manifest_name: str = DEFAULT_MANIFEST_NAME
    output_dir: Path = DEFAULT_BUILD_DIR / "carthage"
    staging_dir: Path = DEFAULT_BUILD_DIR / "tmp" / "carthage"
    overwrite: bool = False

    @property
    def archive_path(self) -> Path:
        return self.output_dir / self.archive_name

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / self.manifest_name

    @classmethod
    def create(
        cls,
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
    ) -> Result[ReleaseConfig, ConfigurationError]:
        """Build and validate a config from raw values.

        ``None`` means "unset". The archive name defaults to ``<version>.zip``
        and the output/staging directories live under ``build_dir``.
        """
        if version is None:
            return Err(_unset("version"))
        if base_url is None:
            return Err(_unset("base_url"))
        if frameworks is None:
            return Err(_unset("frameworks"))

        source = manifest_source_from_value(previous_manifest)
        if isinstance(source, Err):
            return source

        build_root = build_dir if build_dir is not None else DEFAULT_BUILD_DIR
        config = cls(
            version=version,
            previous_manifest=source.value,
            base_url=base_url.strip(),
            frameworks=tuple(Path(f) for f in frameworks),
            archive_name=archive_name if archive_name is not None else f"{version}.zip",
            manifest_name=manifest_name if manifest_name is not None else DEFAULT_MANIFEST_NAME,
            output_dir=output_dir if output_dir is not None else build_root / "carthage",
            staging_dir=(
                staging_dir if staging_dir is not None else build_root / "tmp" / "carthage"
            ),
            overwrite=overwrite,
        )

        checked = validate_config(config)
        if isinstance(checked, Err):
            return checked
        return Ok(config)


def _unset(name: str) -> ConfigurationError:
    return ConfigurationError(
        field=name,
        message=f"Must set '{name}' before generating a release",
    )


def _blank(name: str, value: str) -> ConfigurationError:
    return ConfigurationError(
        field=name,
        message=(
            f"Must set '{name}' to a non-blank string before generating a release. "
            f"The current value is '{value}', which is invalid."
        ),
    )


def validate_config(config: ReleaseConfig) -> Result[None, ConfigurationError]:
    """Check a config without touching anything but ``exists()``."""
    if not config.version.strip():
        return Err(_blank("version", config.version))

    match config.previous_manifest:
        case RemoteUrl(reference=reference) if not reference.strip():
            return Err(_blank("previous_manifest", reference))
        case _:
            pass

    if not config.base_url.strip():
        return Err(_blank("base_url", config.base_url))

    if not config.frameworks:
        return Err(
            ConfigurationError(
                field="frameworks",
                message="Must set 'frameworks' to a non-empty list before generating a release",
            )
        )

    for framework in config.frameworks:
        if not framework.exists():
            return Err(
                ConfigurationError(
                    field="frameworks",
                    message=f"The framework at the file path '{framework.absolute()}' does not exist",
                )
            )

    if not config.archive_name.strip():
        return Err(_blank("archive_name", config.archive_name))
    if not config.manifest_name.strip():
        return Err(_blank("manifest_name", config.manifest_name))

    return Ok(None)


# -----------------------------------------------------------------------------
# carthage-release.toml
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReleaseDefaults:
    """Values from the ``[release]`` table; all optional.

    Relative paths are already resolved against the config file's directory.
    """

    base_url: str | None = None
    previous_manifest: str | None = None
    frameworks: tuple[Path, ...] = ()
    manifest_name: str | None = None
    out_dir: Path | None = None
    staging_dir: Path | None = None
    overwrite: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, base_dir: Path) -> ReleaseDefaults:
        release: StrDict = get_table(data, "release") or {}

        def _path(key: str) -> Path | None:
            value = get_str(release, key)
            return base_dir / value if value else None

        return cls(
            base_url=get_str(release, "base_url"),
            previous_manifest=_previous_manifest(release, base_dir),
            frameworks=tuple(base_dir / f for f in get_str_list(release, "frameworks") or []),
            manifest_name=get_str(release, "manifest_name"),
            out_dir=_path("out_dir"),
            staging_dir=_path("staging_dir"),
            overwrite=get_bool(release, "overwrite"),
        )


def _previous_manifest(release: Mapping[str, object], base_dir: Path) -> str | None:
    value = get_str(release, "previous_manifest")
    if value is None or "://" in value:
        return value
    return str(base_dir / value)


def load_release_defaults(path: Path) -> Result[ReleaseDefaults, ConfigurationError]:
    """Load ``carthage-release.toml``.

    Returns:
        Ok(ReleaseDefaults) on success, Err(ConfigurationError) on failure
    """
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigurationError(field="config", message=f"Config file not found: {path}"))
    except PermissionError:
        return Err(ConfigurationError(field="config", message=f"Permission denied reading: {path}"))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigurationError(field="config", message=f"Invalid TOML syntax in {path}: {e}"))
    except UnicodeDecodeError as e:
        return Err(ConfigurationError(field="config", message=f"Error reading {path}: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigurationError(field="config", message="Config root must be a TOML table"))
    return Ok(ReleaseDefaults.from_dict(data, base_dir=path.parent))
