"""Next.js style scanner: ``app/**/page.*`` plus the legacy ``pages`` directory."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Sequence

from ...models import UrlMeta
from ...utils.fs import glob_files, prefer_src_dir
from ..options import ScanOptions
from .base import PresetScanner, RouteTemplate, legacy_page_route, split_route


class NextScanner(PresetScanner):
    name = "next"
    default_extensions = ("js", "jsx", "tsx", "md", "mdx")

    def prepare(self, options: ScanOptions) -> ScanOptions:
        # meta may be keyed by page file ("docs/page.tsx") instead of route
        meta: Dict[str, UrlMeta] = {}
        for key, value in options.meta.items():
            if key.endswith("page.tsx"):
                parent = PurePosixPath(key).parent.as_posix()
                meta["/" if parent == "." else parent] = value
            else:
                meta[key] = value
        return replace(options, meta=meta)

    def discover(self, cwd: Path, extensions: Sequence[str]) -> List[Optional[RouteTemplate]]:
        app_dir = prefer_src_dir(cwd, "app")
        pages_dir = prefer_src_dir(cwd, "pages")
        routes: List[Optional[RouteTemplate]] = [
            self.route_from_page(file) for file in glob_files(app_dir, "page", extensions)
        ]
        routes.extend(
            self._pages_route(file) for file in glob_files(pages_dir, "*", extensions)
        )
        return routes

    def route_from_page(self, page: str) -> Optional[RouteTemplate]:
        return split_route(str(PurePosixPath(page.replace("\\", "/")).parent))

    @staticmethod
    def _pages_route(page: str) -> Optional[RouteTemplate]:
        # _app, _document and _error are framework files, not pages
        if PurePosixPath(page).name.startswith("_"):
            return None
        return legacy_page_route(page)


__all__ = ["NextScanner"]
