"""Core data models shared across linkguard components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class UrlMeta:
    """Constraints attached to a known URL.

    ``None`` means the aspect is unconstrained: any fragment or query passes.
    """

    hashes: Optional[FrozenSet[str]] = None
    queries: Optional[Tuple[Dict[str, str], ...]] = None

    @classmethod
    def from_raw(cls, data: Mapping[str, Any] | "UrlMeta" | None) -> "UrlMeta":
        """Build metadata from a plain mapping such as a YAML block."""
        if data is None:
            return cls()
        if isinstance(data, UrlMeta):
            return data
        hashes = data.get("hashes")
        queries = data.get("queries")
        return cls(
            hashes=frozenset(str(item) for item in hashes) if hashes is not None else None,
            queries=(
                tuple({str(k): str(v) for k, v in shape.items()} for shape in queries)
                if queries is not None
                else None
            ),
        )


@dataclass(frozen=True)
class FallbackUrl:
    """An anchored pattern standing in for a route with unresolved parameters."""

    pattern: re.Pattern[str]
    meta: UrlMeta


@dataclass
class UrlSpace:
    """Known-good pathnames plus ordered regex fallbacks."""

    urls: Dict[str, UrlMeta] = field(default_factory=dict)
    fallback_urls: List[FallbackUrl] = field(default_factory=list)

    def add(self, url: Union[str, re.Pattern[str]], meta: UrlMeta) -> None:
        if isinstance(url, str):
            self.urls[url] = meta
        else:
            self.fallback_urls.append(FallbackUrl(pattern=url, meta=meta))

    def lookup(self, pathname: str) -> Optional[UrlMeta]:
        """Return the metadata for ``pathname`` or ``None`` when it is unknown."""
        meta = self.urls.get(pathname)
        if meta is not None:
            return meta
        for fallback in self.fallback_urls:
            if fallback.pattern.match(pathname):
                return fallback.meta
        return None


@dataclass
class FileObject:
    """A loaded document ready for validation."""

    path: str
    content: str
    data: Optional[Dict[str, Any]] = None
    url: Optional[str] = None


class ErrorReason(str, Enum):
    NOT_FOUND = "not-found"
    INVALID_FRAGMENT = "invalid-fragment"
    INVALID_QUERY = "invalid-query"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidateError:
    """A broken link with its position in the source document."""

    url: str
    line: int
    column: int
    reason: Union[ErrorReason, Exception]


@dataclass
class ValidateResult:
    """All errors detected in one file."""

    file: str
    errors: List[ValidateError] = field(default_factory=list)

    @property
    def detected(self) -> List[Tuple[str, int, int, Union[ErrorReason, Exception]]]:
        """Legacy tuple view of ``errors``."""
        return [(error.url, error.line, error.column, error.reason) for error in self.errors]


__all__ = [
    "ErrorReason",
    "FallbackUrl",
    "FileObject",
    "UrlMeta",
    "UrlSpace",
    "ValidateError",
    "ValidateResult",
]
