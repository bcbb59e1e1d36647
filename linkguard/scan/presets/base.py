"""Shared contract for framework route scanners."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence, Set, Tuple

from ...diagnostics import Diagnostics
from ...logging import get_logger
from ...models import UrlSpace
from ..options import ScanOptions
from ..populate import populate_into

RouteTemplate = List[str]


class PresetScanner(ABC):
    """Turns one framework's page layout into route templates and a URL space."""

    name: str = ""
    default_extensions: Tuple[str, ...] = ()

    def __init__(self) -> None:
        self.logger = get_logger(f"scan.{self.name}")

    def scan(self, options: ScanOptions, diagnostics: Optional[Diagnostics] = None) -> UrlSpace:
        """Build the URL space for ``options``."""
        options = self.prepare(options)
        space = UrlSpace()
        seen: Set[Tuple[str, ...]] = set()
        for template in self.templates(options):
            key = tuple(template)
            if key in seen:
                continue
            seen.add(key)
            populate_into(template, options, space, diagnostics)
        self.logger.debug(
            "Scanned %d templates into %d urls and %d fallbacks",
            len(seen),
            len(space.urls),
            len(space.fallback_urls),
        )
        return space

    def prepare(self, options: ScanOptions) -> ScanOptions:
        return options

    def templates(self, options: ScanOptions) -> List[RouteTemplate]:
        if options.pages is not None:
            routes = [self.route_from_page(page) for page in options.pages]
        else:
            extensions = (
                options.extensions if options.extensions is not None else self.default_extensions
            )
            routes = self.discover(options.resolved_cwd(), extensions)
        return [route for route in routes if route is not None]

    @abstractmethod
    def discover(self, cwd: Path, extensions: Sequence[str]) -> List[Optional[RouteTemplate]]:
        """Find page files under ``cwd`` and map them to route templates."""

    @abstractmethod
    def route_from_page(self, page: str) -> Optional[RouteTemplate]:
        """Map one page path to a route template, or ``None`` to skip it."""


def split_route(path: str) -> RouteTemplate:
    """Split a posix path into non-empty segments."""
    return [part for part in path.replace("\\", "/").split("/") if part and part != "."]


def legacy_page_route(page: str) -> RouteTemplate:
    """One route per file; ``index`` collapses into its directory."""
    pure = PurePosixPath(page.replace("\\", "/"))
    segments = split_route(str(pure.parent))
    if pure.stem != "index":
        segments.append(pure.stem)
    return segments


__all__ = ["PresetScanner", "RouteTemplate", "legacy_page_route", "split_route"]
