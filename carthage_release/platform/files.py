"""Filesystem helpers for staging and output."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

__all__ = ["reset_dir", "copy_into", "copy_file", "write_text"]


def reset_dir(path: Path) -> None:
    """Delete ``path`` (file or tree) if present and recreate it empty."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    path.mkdir(parents=True)


def copy_into(source: Path, dest_root: Path) -> list[str]:
    """Copy ``source`` to ``dest_root/<source.name>``, recursively.

    Existing files are overwritten. A symlinked ``source`` directory is followed;
    symlinks inside it are copied as links so framework bundles
    (``Versions/Current``) keep their layout.

    Returns:
        Paths relative to ``dest_root`` that already existed and were replaced.
    """
    target = dest_root / source.name
    replaced: list[str] = []

    if not source.is_dir():
        if target.exists() or target.is_symlink():
            replaced.append(source.name)
            _remove(target)
        shutil.copy2(source, target, follow_symlinks=False)
        return replaced

    if target.is_symlink() or (target.exists() and not target.is_dir()):
        replaced.append(source.name)
        _remove(target)
    target.mkdir(parents=True, exist_ok=True)

    root = source.resolve() if source.is_symlink() else source
    for dirpath, dirnames, filenames in os.walk(root):
        here = Path(dirpath)
        dirnames.sort()
        # os.walk lists symlinked directories in dirnames but never descends into them
        links = [d for d in dirnames if (here / d).is_symlink()]
        for name in [*links, *sorted(filenames)]:
            src = here / name
            rel = src.relative_to(root)
            dst = target / rel
            if dst.exists() or dst.is_symlink():
                replaced.append((Path(source.name) / rel).as_posix())
                _remove(dst)
            shutil.copy2(src, dst, follow_symlinks=False)
        for name in dirnames:
            if name in links:
                continue
            dst = target / (here / name).relative_to(root)
            if dst.is_symlink() or (dst.exists() and not dst.is_dir()):
                replaced.append((Path(source.name) / dst.relative_to(target)).as_posix())
                _remove(dst)
            dst.mkdir(exist_ok=True)

    return replaced


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def copy_file(source: Path, dest: Path) -> None:
    """Copy a file, creating parents and replacing whatever is at ``dest``."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    if dest.is_dir() and not dest.is_symlink():
        shutil.rmtree(dest)
    shutil.copyfile(source, dest)


def write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text in place (not atomic), creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding=encoding)
