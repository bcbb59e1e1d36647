"""Astro scanner: one route per file under ``src/pages``."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ...utils.fs import glob_files, prefer_src_dir
from .base import PresetScanner, RouteTemplate, legacy_page_route


class AstroScanner(PresetScanner):
    name = "astro"
    default_extensions = ("astro", "md", "mdx")

    def discover(self, cwd: Path, extensions: Sequence[str]) -> List[Optional[RouteTemplate]]:
        pages_dir = prefer_src_dir(cwd, "pages")
        return [self.route_from_page(file) for file in glob_files(pages_dir, "*", extensions)]

    def route_from_page(self, page: str) -> Optional[RouteTemplate]:
        return legacy_page_route(page)


__all__ = ["AstroScanner"]
