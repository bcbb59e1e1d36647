"""Framework presets for route scanning."""

from __future__ import annotations

from typing import Callable, Dict

from ...errors import RouteConfigError
from .astro import AstroScanner
from .base import PresetScanner
from .next import NextScanner
from .nuxt import NuxtScanner
from .react_router import ReactRouterScanner
from .tanstack_start import TanStackStartScanner
from .waku import WakuScanner

PRESETS: Dict[str, Callable[[], PresetScanner]] = {
    "next": NextScanner,
    "app-router": NextScanner,
    "astro": AstroScanner,
    "nuxt": NuxtScanner,
    "waku": WakuScanner,
    "tanstack-start": TanStackStartScanner,
    "react-router": ReactRouterScanner,
}


def get_preset(name: str) -> PresetScanner:
    """Return a scanner instance for ``name``."""
    factory = PRESETS.get(name.lower())
    if factory is None:
        known = ", ".join(sorted(PRESETS))
        raise RouteConfigError(f"Unknown preset '{name}'. Expected one of: {known}")
    return factory()


__all__ = [
    "AstroScanner",
    "NextScanner",
    "NuxtScanner",
    "PRESETS",
    "PresetScanner",
    "ReactRouterScanner",
    "TanStackStartScanner",
    "WakuScanner",
    "get_preset",
]
