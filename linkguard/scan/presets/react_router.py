"""React Router scanner: walks a declarative route-config tree."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ...errors import RouteConfigError
from ..options import RouteConfigEntry, ScanOptions
from .base import PresetScanner, RouteTemplate, split_route


class ReactRouterScanner(PresetScanner):
    """Routes come from ``ScanOptions.router_config`` instead of the filesystem.

    ``pages`` entries are bracket-notation templates such as ``blog/[slug]``.
    """

    name = "react-router"

    def templates(self, options: ScanOptions) -> List[RouteTemplate]:
        if options.pages is not None:
            return [self.route_from_page(page) for page in options.pages]
        if options.router_config is None:
            raise RouteConfigError("The react-router preset requires 'router_config'")
        templates: List[RouteTemplate] = []
        for entry in options.router_config:
            resolve_entry(entry, [], templates)
        return templates

    def discover(self, cwd: Path, extensions: Sequence[str]) -> List[Optional[RouteTemplate]]:
        return []

    def route_from_page(self, page: str) -> RouteTemplate:
        return split_route(page)


def resolve_entry(
    entry: RouteConfigEntry, parent: Sequence[str], out: List[RouteTemplate]
) -> None:
    """Append the templates declared by ``entry`` and its children to ``out``."""
    full_path = list(parent)
    if entry.path:
        full_path.extend(entry.path.split("/"))

    if entry.path or entry.index:
        out.extend(expand_combinations(full_path))

    for child in entry.children:
        resolve_entry(child, full_path, out)


def expand_combinations(path: Sequence[str]) -> List[RouteTemplate]:
    """Convert ``:param``/``*``/``name?`` segments, doubling on optionals."""
    combinations: List[RouteTemplate] = [[]]
    for raw in path:
        if not raw:
            continue
        optional = raw.endswith("?")
        name = raw[:-1] if optional else raw

        if name.startswith(":"):
            segment = f"[{name[1:]}]"
        elif name == "*":
            segment = "[[...splat]]"
        else:
            segment = name

        if optional:
            combinations.extend([[*combination, segment] for combination in combinations])
        else:
            for combination in combinations:
                combination.append(segment)
    return combinations


__all__ = ["ReactRouterScanner", "expand_combinations", "resolve_entry"]
