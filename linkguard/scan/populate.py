"""Expansion of parameterised route templates into concrete or fallback URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from ..diagnostics import Diagnostics
from ..errors import RouteConfigError
from ..models import UrlMeta, UrlSpace
from .options import KeyedValue, PopulateEntry, ScanOptions
from .segments import ParsedRoute, SegmentKind, parse_segments

_PLACEHOLDER = "(.+)"
_DEFAULT_ENTRIES: Tuple[PopulateEntry, ...] = (PopulateEntry(),)


@dataclass(frozen=True)
class PopulatedUrl:
    """One URL produced from a template: exact string or anchored pattern."""

    url: Union[str, re.Pattern[str]]
    meta: UrlMeta

    @property
    def is_fallback(self) -> bool:
        return not isinstance(self.url, str)


def template_key(segments: Sequence[str]) -> str:
    """Key under which populate values and meta are registered for a template."""
    return "/".join(segments) if segments else "/"


def lookup_entries(
    segments: Sequence[str], populate: Mapping[str, Sequence[PopulateEntry]]
) -> Sequence[PopulateEntry]:
    """Find populate entries from the most specific key up to ``/``."""
    search = list(segments)
    while search:
        entries = populate.get("/".join(search))
        if entries is not None:
            return entries
        search.pop()
    entries = populate.get("/")
    return entries if entries is not None else _DEFAULT_ENTRIES


def populate(
    segments: Sequence[str],
    options: ScanOptions,
    diagnostics: Optional[Diagnostics] = None,
) -> List[PopulatedUrl]:
    """Expand ``segments`` into URLs using the populate values in ``options``."""
    parsed = parse_segments(segments)
    key = template_key(segments)
    _check_optional_position(parsed, key)

    if parsed.is_static:
        meta = options.meta.get(key, UrlMeta())
        return [PopulatedUrl(url="/" + "/".join(parsed.tokens), meta=meta)]

    out: List[PopulatedUrl] = []
    for entry in lookup_entries(segments, options.populate):
        out.extend(_expand(parsed, entry, key, diagnostics))
    return out


def populate_into(
    segments: Sequence[str],
    options: ScanOptions,
    space: UrlSpace,
    diagnostics: Optional[Diagnostics] = None,
) -> None:
    """Populate ``segments`` and register every produced URL in ``space``."""
    for item in populate(segments, options, diagnostics):
        space.add(item.url, item.meta)


def _check_optional_position(parsed: ParsedRoute, key: str) -> None:
    last = len(parsed.kinds) - 1
    for index, kind in enumerate(parsed.kinds):
        if kind is SegmentKind.OPTIONAL_CATCH_ALL and index != last:
            raise RouteConfigError(f"Invalid position of optional catch-all in {key}")


def _expand(
    parsed: ParsedRoute,
    entry: PopulateEntry,
    key: str,
    diagnostics: Optional[Diagnostics],
) -> List[PopulatedUrl]:
    param_indexes = parsed.param_indexes
    if len(param_indexes) > 1 and entry.value is not None and not isinstance(entry.value, KeyedValue):
        message = (
            f"path {key} requires multiple params, a keyed value for populate is expected."
        )
        if diagnostics is not None:
            diagnostics.warn("populate-ambiguous", message, subject=key)

    # (text, is_placeholder) per token
    filled: List[Tuple[str, bool]] = [(token, False) for token in parsed.tokens]
    collapsed_root = False
    missing: List[str] = []
    for index in param_indexes:
        rendered = _render(entry.value_for(parsed.tokens[index]))
        if rendered is not None:
            filled[index] = (rendered, False)
            continue
        if parsed.kinds[index] is SegmentKind.OPTIONAL_CATCH_ALL:
            collapsed_root = True
        filled[index] = (_PLACEHOLDER, True)
        missing.append(parsed.tokens[index])

    if len(param_indexes) > 1 and entry.value is not None and missing:
        if diagnostics is not None:
            diagnostics.warn(
                "populate-partial",
                f"path {key} has no populate value for {', '.join(missing)}, "
                "falling back to a pattern match.",
                subject=key,
            )

    meta = entry.meta
    out: List[PopulatedUrl] = []
    if collapsed_root:
        out.append(PopulatedUrl(url=_build(filled[:-1]), meta=meta))
    out.append(PopulatedUrl(url=_build(filled), meta=meta))
    return out


def _render(value: Optional[Union[str, Tuple[str, ...]]]) -> Optional[str]:
    # an empty string means "not supplied"; an empty sequence collapses the segment
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    return "/".join(value)


def _build(filled: Sequence[Tuple[str, bool]]) -> Union[str, re.Pattern[str]]:
    parts = [item for item in filled if item[0]]
    if not any(is_placeholder for _, is_placeholder in parts):
        return "/" + "/".join(text for text, _ in parts)
    rendered = [text if is_placeholder else re.escape(text) for text, is_placeholder in parts]
    return re.compile("^/" + "/".join(rendered) + "$")


__all__ = ["PopulatedUrl", "lookup_entries", "populate", "populate_into", "template_key"]
