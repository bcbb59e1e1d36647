"""Parsing of bracket-convention route segments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

_OPTIONAL_CATCH_ALL = re.compile(r"^\[\[\.\.\.(.+)\]\]$")
_CATCH_ALL = re.compile(r"^\[\.\.\.(.+)\]$")


class SegmentKind(str, Enum):
    LITERAL = "literal"
    REQUIRED = "required"
    OPTIONAL_CATCH_ALL = "optional-catch-all"


@dataclass(frozen=True)
class ParsedRoute:
    """Index-aligned route tokens and their kinds.

    For parameters the token is the parameter name; for literals it is the
    literal path component.
    """

    tokens: List[str]
    kinds: List[SegmentKind]

    @property
    def param_indexes(self) -> List[int]:
        return [index for index, kind in enumerate(self.kinds) if kind is not SegmentKind.LITERAL]

    @property
    def is_static(self) -> bool:
        return not self.param_indexes


def is_route_group(segment: str) -> bool:
    return segment.startswith("(") and segment.endswith(")")


def parse_segment(segment: str) -> tuple[str, SegmentKind]:
    """Classify a single non-group segment."""
    if segment.startswith("[") and segment.endswith("]"):
        match = _OPTIONAL_CATCH_ALL.match(segment)
        if match:
            return match.group(1), SegmentKind.OPTIONAL_CATCH_ALL
        match = _CATCH_ALL.match(segment)
        if match:
            return match.group(1), SegmentKind.REQUIRED
        return segment[1:-1], SegmentKind.REQUIRED
    return segment, SegmentKind.LITERAL


def parse_segments(segments: Sequence[str]) -> ParsedRoute:
    """Drop route groups and classify the remaining segments."""
    tokens: List[str] = []
    kinds: List[SegmentKind] = []
    for segment in segments:
        if is_route_group(segment):
            continue
        token, kind = parse_segment(segment)
        tokens.append(token)
        kinds.append(kind)
    return ParsedRoute(tokens=tokens, kinds=kinds)


__all__ = ["ParsedRoute", "SegmentKind", "is_route_group", "parse_segment", "parse_segments"]
