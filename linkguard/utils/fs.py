"""Filesystem access used by route discovery and relative-path checks."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Sequence


def is_dir_exists(path: Path) -> bool:
    return path.is_dir()


async def is_file_exists(path: str | Path) -> bool:
    """Return True when ``path`` exists, without blocking the event loop."""
    return await asyncio.to_thread(Path(path).exists)


def prefer_src_dir(cwd: Path, name: str) -> Path:
    """Return ``cwd/src/<name>`` when present, otherwise ``cwd/<name>``."""
    candidate = cwd / "src" / name
    if is_dir_exists(candidate):
        return candidate
    return cwd / name


def glob_files(root: Path, stem: str, extensions: Sequence[str]) -> List[str]:
    """Return sorted posix paths under ``root`` named ``<stem>.<ext>``.

    ``stem`` may be ``*`` to accept any file name. A missing root yields an
    empty list. With no extensions every file whose name matches ``stem``
    counts.
    """
    if not root.is_dir():
        return []

    suffixes = {f".{ext.lstrip('.')}" for ext in extensions}
    found: List[str] = []
    for path in root.rglob(f"{stem}.*" if suffixes else stem):
        if not path.is_file():
            continue
        if suffixes and not _matches(path.name, stem, suffixes):
            continue
        found.append(path.relative_to(root).as_posix())
    return sorted(found)


def _matches(name: str, stem: str, suffixes: set[str]) -> bool:
    if stem == "*":
        return any(name.endswith(suffix) for suffix in suffixes)
    return any(name == f"{stem}{suffix}" for suffix in suffixes)


__all__ = ["glob_files", "is_dir_exists", "is_file_exists", "prefer_src_dir"]
