"""TanStack Start scanner: flat, dot-separated route file names."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

from ...utils.fs import glob_files, prefer_src_dir
from .base import PresetScanner, RouteTemplate

_ESCAPED_DOT = "[.]"
_DOT_PLACEHOLDER = "\x00"
_SEPARATORS = re.compile(r"[/\\.]")


class TanStackStartScanner(PresetScanner):
    name = "tanstack-start"
    default_extensions = ("tsx", "ts", "jsx", "js")

    def discover(self, cwd: Path, extensions: Sequence[str]) -> List[Optional[RouteTemplate]]:
        routes_dir = prefer_src_dir(cwd, "routes")
        return [self.route_from_page(file) for file in glob_files(routes_dir, "*", extensions)]

    def route_from_page(self, page: str) -> Optional[RouteTemplate]:
        names = _SEPARATORS.split(page.replace(_ESCAPED_DOT, _DOT_PLACEHOLDER))
        names.pop()  # extension
        names = [name.replace(_DOT_PLACEHOLDER, ".") for name in names]

        if names and names[-1].startswith("_"):
            return None
        if names and names[-1] == "index":
            names.pop()

        segments: RouteTemplate = []
        for name in names:
            if not name:
                continue
            if name == "$":
                segments.append("[...splat]")
            elif name.startswith("$"):
                segments.append(f"[{name[1:]}]")
            else:
                segments.append(name)
        return segments


__all__ = ["TanStackStartScanner"]
