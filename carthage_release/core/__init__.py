"""Core types: results, errors, and release parameters."""

from .config import (
    InlineHandle,
    LocalPath,
    ManifestSource,
    ReleaseConfig,
    ReleaseDefaults,
    RemoteUrl,
    load_release_defaults,
    manifest_source_from_value,
    validate_config,
)
from .errors import (
    ArchiveError,
    ConfigurationError,
    DuplicateVersionError,
    ErrorCode,
    FetchError,
    NotFoundError,
    PackagerError,
    ParseError,
    ReleaseFailed,
    exit_code_for,
)
from .result import Err, Ok, Result

__all__ = [
    # config
    "InlineHandle",
    "LocalPath",
    "ManifestSource",
    "ReleaseConfig",
    "ReleaseDefaults",
    "RemoteUrl",
    "load_release_defaults",
    "manifest_source_from_value",
    "validate_config",
    # errors
    "ArchiveError",
    "ConfigurationError",
    "DuplicateVersionError",
    "ErrorCode",
    "FetchError",
    "NotFoundError",
    "PackagerError",
    "ParseError",
    "ReleaseFailed",
    "exit_code_for",
    # result
    "Err",
    "Ok",
    "Result",
]
