"""Route-space synthesis: framework layouts to known URLs."""

from __future__ import annotations

from typing import Optional

from ..diagnostics import Diagnostics
from ..models import UrlSpace
from .options import PopulateEntry, RouteConfigEntry, ScanOptions
from .populate import populate, populate_into
from .presets import PRESETS, get_preset


def scan_urls(
    options: Optional[ScanOptions] = None,
    *,
    diagnostics: Optional[Diagnostics] = None,
) -> UrlSpace:
    """Scan the configured preset and return the resulting URL space."""
    options = options or ScanOptions()
    scanner = get_preset(options.preset)
    return scanner.scan(options, diagnostics)


__all__ = [
    "PRESETS",
    "PopulateEntry",
    "RouteConfigEntry",
    "ScanOptions",
    "get_preset",
    "populate",
    "populate_into",
    "scan_urls",
]
