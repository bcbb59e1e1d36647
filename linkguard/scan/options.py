"""Option types accepted by the route scanners."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import RouteConfigError
from ..models import UrlMeta

DEFAULT_PRESET = "next"


@dataclass(frozen=True)
class SingleValue:
    """One string filling the template's only parameter."""

    value: str


@dataclass(frozen=True)
class SegmentsValue:
    """Path components joined with ``/``, typically for a catch-all."""

    values: Tuple[str, ...]


@dataclass(frozen=True)
class KeyedValue:
    """Parameter name to value, for templates with several parameters."""

    values: Dict[str, Union[str, Tuple[str, ...]]]


PopulateValue = Union[SingleValue, SegmentsValue, KeyedValue]


def coerce_value(raw: Any) -> Optional[PopulateValue]:
    """Turn plain str/list/dict data into a tagged populate value."""
    if raw is None:
        return None
    if isinstance(raw, (SingleValue, SegmentsValue, KeyedValue)):
        return raw
    if isinstance(raw, str):
        return SingleValue(raw)
    if isinstance(raw, Mapping):
        keyed: Dict[str, Union[str, Tuple[str, ...]]] = {}
        for name, item in raw.items():
            if isinstance(item, str):
                keyed[str(name)] = item
            elif isinstance(item, Sequence):
                keyed[str(name)] = tuple(str(part) for part in item)
            else:
                raise RouteConfigError(
                    f"populate value for parameter '{name}' must be a string or a list of strings"
                )
        return KeyedValue(keyed)
    if isinstance(raw, Sequence):
        return SegmentsValue(tuple(str(part) for part in raw))
    raise RouteConfigError(f"Unsupported populate value: {raw!r}")


@dataclass(frozen=True)
class PopulateEntry:
    """Concrete values for one expansion of a route template."""

    value: Optional[PopulateValue] = None
    hashes: Optional[Tuple[str, ...]] = None
    queries: Optional[Tuple[Dict[str, str], ...]] = None

    @classmethod
    def from_raw(cls, data: Mapping[str, Any] | "PopulateEntry") -> "PopulateEntry":
        if isinstance(data, PopulateEntry):
            return data
        hashes = data.get("hashes")
        queries = data.get("queries")
        return cls(
            value=coerce_value(data.get("value")),
            hashes=tuple(str(item) for item in hashes) if hashes is not None else None,
            queries=(
                tuple({str(k): str(v) for k, v in shape.items()} for shape in queries)
                if queries is not None
                else None
            ),
        )

    @property
    def meta(self) -> UrlMeta:
        return UrlMeta(
            hashes=frozenset(self.hashes) if self.hashes is not None else None,
            queries=self.queries,
        )

    def value_for(self, name: str) -> Optional[Union[str, Tuple[str, ...]]]:
        """Return the raw value supplied for parameter ``name``, if any."""
        if isinstance(self.value, SingleValue):
            return self.value.value
        if isinstance(self.value, SegmentsValue):
            return self.value.values
        if isinstance(self.value, KeyedValue):
            return self.value.values.get(name)
        return None


@dataclass
class RouteConfigEntry:
    """A node of a declarative route tree (React Router ``routes.ts`` shape)."""

    path: Optional[str] = None
    children: List["RouteConfigEntry"] = field(default_factory=list)
    index: bool = False
    file: Optional[str] = None

    @classmethod
    def from_raw(cls, data: Mapping[str, Any] | "RouteConfigEntry") -> "RouteConfigEntry":
        if isinstance(data, RouteConfigEntry):
            return data
        children = data.get("children") or []
        path = data.get("path")
        return cls(
            path=str(path) if path is not None else None,
            children=[cls.from_raw(child) for child in children],
            index=bool(data.get("index", False)),
            file=data.get("file"),
        )


@dataclass
class ScanOptions:
    """Inputs for :func:`linkguard.scan.scan_urls`.

    ``populate`` and ``meta`` accept plain mappings (as loaded from YAML) and
    are normalised on construction.
    """

    preset: str = DEFAULT_PRESET
    pages: Optional[List[str]] = None
    cwd: Optional[Path] = None
    populate: Dict[str, List[PopulateEntry]] = field(default_factory=dict)
    meta: Dict[str, UrlMeta] = field(default_factory=dict)
    extensions: Optional[List[str]] = None
    router_config: Optional[List[RouteConfigEntry]] = None

    def __post_init__(self) -> None:
        self.populate = {
            str(key): [PopulateEntry.from_raw(entry) for entry in entries]
            for key, entries in self.populate.items()
        }
        self.meta = {str(key): UrlMeta.from_raw(value) for key, value in self.meta.items()}
        if self.router_config is not None:
            self.router_config = [RouteConfigEntry.from_raw(entry) for entry in self.router_config]
        if self.cwd is not None:
            self.cwd = Path(self.cwd)

    def resolved_cwd(self) -> Path:
        return self.cwd if self.cwd is not None else Path.cwd()


__all__ = [
    "DEFAULT_PRESET",
    "KeyedValue",
    "PopulateEntry",
    "PopulateValue",
    "RouteConfigEntry",
    "ScanOptions",
    "SegmentsValue",
    "SingleValue",
    "coerce_value",
]
