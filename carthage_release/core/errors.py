"""Error taxonomy and exit codes.

Failures are plain frozen dataclasses carried in ``Err``. Each one knows its
own ``message`` and optional ``hint`` so the CLI can render any of them the
same way, and ``exit_code_for`` maps them to stable process exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

__all__ = [
    "ErrorCode",
    "ConfigurationError",
    "NotFoundError",
    "FetchError",
    "ParseError",
    "DuplicateVersionError",
    "ArchiveError",
    "PackagerError",
    "ReleaseFailed",
    "exit_code_for",
]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad parameters, malformed manifest, version collision)
    - 3: Build error (archiving failed)
    - 4: Network error (previous manifest could not be fetched)
    - 5: I/O error (previous manifest file missing)
    """

    OK = 0
    USER_ERROR = 1
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """A parameter is missing or invalid."""

    field: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class NotFoundError:
    """An explicit previous-manifest file does not exist."""

    path: Path

    @property
    def message(self) -> str:
        return f"Previous release manifest not found at '{self.path}'"

    @property
    def hint(self) -> str:
        return "If this is your first release, create an empty file at that path"


@dataclass(frozen=True, slots=True)
class FetchError:
    """The previous manifest could not be downloaded.

    Attributes:
        url: The URL that was requested.
        status: HTTP status code (0 for transport errors or an empty body).
        reason: What went wrong.
    """

    url: str
    status: int
    reason: str

    @property
    def message(self) -> str:
        if self.status:
            return f"Bad response code '{self.status}' from '{self.url}': {self.reason}"
        return f"Could not fetch '{self.url}': {self.reason}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class ParseError:
    """Manifest content is not a flat JSON object of strings."""

    source: str
    detail: str

    @property
    def message(self) -> str:
        return f"Invalid release manifest from '{self.source}': {self.detail}"

    @property
    def hint(self) -> str:
        return 'Expected a JSON object such as {"1.0.0": "https://.../1.0.0.zip"}'


@dataclass(frozen=True, slots=True)
class DuplicateVersionError:
    """The version is already in the manifest and overwrite is off."""

    version: str

    @property
    def message(self) -> str:
        return f"Release called '{self.version}' already exists"

    @property
    def hint(self) -> str:
        return "Change the version string, or allow overwrite (not recommended)"


@dataclass(frozen=True, slots=True)
class ArchiveError:
    """The external archiver failed or produced nothing."""

    returncode: int
    output: str

    @property
    def message(self) -> str:
        if self.output.strip():
            return f"Zipping failed (exit {self.returncode}):\n{self.output.rstrip()}"
        return f"Zipping failed (exit {self.returncode})"

    @property
    def hint(self) -> str | None:
        if self.returncode == -1:
            return "Is the 'zip' command installed and on PATH?"
        return None


PackagerError = (
    ConfigurationError
    | NotFoundError
    | FetchError
    | ParseError
    | DuplicateVersionError
    | ArchiveError
)


class ReleaseFailed(Exception):
    """Raised by the convenience API when a pipeline stage fails."""

    def __init__(self, error: PackagerError) -> None:
        super().__init__(error.message)
        self.error = error


def exit_code_for(error: PackagerError) -> ErrorCode:
    """Get the exit code for a packager error."""
    match error:
        case ConfigurationError() | ParseError() | DuplicateVersionError():
            return ErrorCode.USER_ERROR
        case NotFoundError():
            return ErrorCode.IO_ERROR
        case FetchError():
            return ErrorCode.NETWORK_ERROR
        case ArchiveError():
            return ErrorCode.BUILD_ERROR
