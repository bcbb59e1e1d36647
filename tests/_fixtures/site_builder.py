"""Helper utilities for constructing temporary site projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Iterable, Mapping

from linkguard.models import UrlSpace
from linkguard.scan import ScanOptions, scan_urls


class SiteBuilder:
    """Utility for writing page files into a throwaway project and scanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "site"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def touch(self, paths: Iterable[str]) -> None:
        """Create empty page files."""
        self.write({path: "" for path in paths})

    def scan(self, preset: str = "next", **options: Any) -> UrlSpace:
        """Return a fresh URL space for the project."""
        return scan_urls(ScanOptions(preset=preset, cwd=self.root, **options))

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["SiteBuilder"]
