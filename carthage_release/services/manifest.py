"""Release manifest: load, merge, write.

The manifest is a flat JSON object mapping version identifiers to archive
download URLs, newest first:

    {
      "1.2.0": "https://cdn.example.com/releases/1.2.0.zip",
      "1.1.0": "https://cdn.example.com/releases/1.1.0.zip"
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from carthage_release.core.config import InlineHandle, LocalPath, ManifestSource, RemoteUrl
from carthage_release.core.errors import DuplicateVersionError, FetchError, NotFoundError, ParseError
from carthage_release.core.result import Err, Ok, Result
from carthage_release.core.structured import as_str_dict, first_non_str_value
from carthage_release.platform.files import write_text
from carthage_release.tools.http import HttpClient

__all__ = [
    "Manifest",
    "read_manifest_source",
    "parse_manifest",
    "load_manifest",
    "download_url",
    "merge_manifest",
    "render_manifest",
    "write_manifest",
]

Manifest = dict[str, str]


def read_manifest_source(
    source: ManifestSource, http: HttpClient
) -> Result[str, NotFoundError | FetchError | ParseError]:
    """Resolve a manifest source to its raw text.

    A local file that cannot be read or is not UTF-8 fails with ``ParseError``.
    """
    match source:
        case LocalPath(path=path):
            if not path.is_file():
                return Err(NotFoundError(path=path.absolute()))
            return _read_file(path, source.describe())
        case InlineHandle(text=text):
            return Ok(text)
        case RemoteUrl(reference=reference):
            local = Path(reference)
            if local.is_file():
                return _read_file(local, source.describe())
            return _fetch(reference, http)


def _read_file(path: Path, label: str) -> Result[str, ParseError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        return Err(ParseError(source=label, detail=f"not valid UTF-8: {e}"))
    except OSError as e:
        return Err(ParseError(source=label, detail=f"could not read file: {e}"))


def _fetch(url: str, http: HttpClient) -> Result[str, FetchError]:
    response = http.get(url)
    if isinstance(response, Err):
        return response
    if response.value.body is None:
        return Err(
            FetchError(url=url, status=0, reason="No contents returned for request body")
        )
    return Ok(response.value.body)


def parse_manifest(text: str | None, *, source: str = "<manifest>") -> Result[Manifest, ParseError]:
    """Parse manifest JSON. Blank content is an empty manifest."""
    if text is None or not text.strip():
        return Ok({})

    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ParseError(source=source, detail=f"JSON parse error: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(
            ParseError(source=source, detail=f"expected a JSON object, got {type(data_obj).__name__}")
        )

    bad_key = first_non_str_value(data)
    if bad_key is not None:
        return Err(ParseError(source=source, detail=f"value for '{bad_key}' is not a string"))

    return Ok({key: str(value) for key, value in data.items()})


def load_manifest(
    source: ManifestSource, http: HttpClient
) -> Result[Manifest, NotFoundError | FetchError | ParseError]:
    """Read and parse the previous manifest."""
    text = read_manifest_source(source, http)
    if isinstance(text, Err):
        return text
    return parse_manifest(text.value, source=source.describe())


def download_url(base_url: str, archive_name: str) -> str:
    """Join base URL and archive name with exactly one separator."""
    separator = "" if base_url.endswith("/") else "/"
    return f"{base_url}{separator}{archive_name}"


def merge_manifest(
    previous: Manifest,
    version: str,
    url: str,
    *,
    overwrite: bool = False,
) -> Result[Manifest, DuplicateVersionError]:
    """Return a new manifest with ``version`` first, then ``previous`` in order.

    An existing entry for ``version`` is dropped from its old position when
    ``overwrite`` is set.
    """
    if version in previous and not overwrite:
        return Err(DuplicateVersionError(version=version))

    merged: Manifest = {version: url}
    for key, value in previous.items():
        if key != version:
            merged[key] = value
    return Ok(merged)


def render_manifest(manifest: Manifest) -> str:
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def write_manifest(manifest: Manifest, path: Path) -> Path:
    """Overwrite ``path`` with the pretty-printed manifest."""
    write_text(path, render_manifest(manifest))
    return path
