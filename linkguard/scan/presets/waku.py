"""Waku scanner: file routes where ``[...name]`` is an optional catch-all."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from ...utils.fs import glob_files, prefer_src_dir
from .base import PresetScanner, RouteTemplate, legacy_page_route


class WakuScanner(PresetScanner):
    name = "waku"
    default_extensions = ("tsx", "ts", "jsx", "js")

    def discover(self, cwd: Path, extensions: Sequence[str]) -> List[Optional[RouteTemplate]]:
        pages_dir = prefer_src_dir(cwd, "pages")
        return [self.route_from_page(file) for file in glob_files(pages_dir, "*", extensions)]

    def route_from_page(self, page: str) -> Optional[RouteTemplate]:
        if PurePosixPath(page.replace("\\", "/")).stem.startswith("_"):
            return None
        return [_widen_catch_all(segment) for segment in legacy_page_route(page)]


def _widen_catch_all(segment: str) -> str:
    if segment.startswith("[...") and segment.endswith("]"):
        return f"[{segment}]"
    return segment


__all__ = ["WakuScanner"]
