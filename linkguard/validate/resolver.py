"""Href classification and resolution against a scanned URL space."""

from __future__ import annotations

import inspect
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Awaitable,
    Callable,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Union,
)
from urllib.parse import parse_qsl, urlencode

from ..errors import ResolutionError
from ..models import ErrorReason, UrlMeta
from ..utils.fs import is_file_exists
from ..utils.url import resolve_url

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from . import ValidateConfig

_HREF_PATTERN = re.compile(r"^([^?#]*)(\?[^#]*)?(#.*)?$", re.DOTALL)
_EXTERNAL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
_MARKDOWN_SUFFIXES = (".md", ".mdx")

PathToUrl = Callable[[str], Optional[str]]
Whitelist = Union[Sequence[str], Callable[[str], bool]]


class PathnameKind(str, Enum):
    URL = "url"
    RELATIVE_FILE_PATH = "relative-file-path"
    RELATIVE_URL = "relative-url"


DeterminatePathname = Callable[
    [str], Union[PathnameKind, str, Awaitable[Union[PathnameKind, str]]]
]


class ExternalChecker(Protocol):
    async def is_valid(self, url: str) -> bool:
        ...


@dataclass(frozen=True)
class ParsedHref:
    pathname: str
    query: Optional[str] = None
    fragment: Optional[str] = None


@dataclass(frozen=True)
class ResolutionContext:
    """Per-file inputs for resolving relative links."""

    base_url: Optional[str] = None
    base_dir: Optional[str] = None
    path_to_url: Optional[PathToUrl] = None


def parse_href(href: str) -> ParsedHref:
    """Split an href on the first ``?`` and the first ``#``."""
    match = _HREF_PATTERN.match(href)
    if not match:
        return ParsedHref(pathname=href)
    query = match.group(2)
    fragment = match.group(3)
    return ParsedHref(
        pathname=match.group(1),
        query=query[1:] if query is not None else None,
        fragment=fragment[1:] if fragment is not None else None,
    )


def default_determinate_pathname(pathname: str) -> PathnameKind:
    if not pathname.startswith("."):
        return PathnameKind.URL
    if pathname.endswith(_MARKDOWN_SUFFIXES):
        return PathnameKind.RELATIVE_FILE_PATH
    return PathnameKind.RELATIVE_URL


def canonical_query(query: str) -> str:
    """Key-sorted, url-encoded form of a raw query string."""
    return urlencode(sorted(parse_qsl(query, keep_blank_values=True)))


def canonical_shape(shape: Mapping[str, str]) -> str:
    """Key-sorted, url-encoded form of a declared query shape."""
    return urlencode(sorted((str(key), str(value)) for key, value in shape.items()))


def is_whitelisted(href: str, whitelist: Optional[Whitelist]) -> bool:
    if whitelist is None:
        return False
    if callable(whitelist):
        return bool(whitelist(href))
    return href in whitelist


class LinkResolver:
    """Decides whether one href is broken.

    ``detect`` returns ``None`` for a valid or ignored link and an
    :class:`ErrorReason` otherwise. Misconfiguration raises
    :class:`ResolutionError`.
    """

    def __init__(
        self,
        config: "ValidateConfig",
        external_checker: Optional[ExternalChecker] = None,
    ) -> None:
        self.config = config
        self.external_checker = external_checker
        self._determinate = config.determinate_pathname or default_determinate_pathname

    async def detect(self, href: str, resolution: ResolutionContext) -> Optional[ErrorReason]:
        config = self.config
        if href.startswith("mailto:"):
            return None

        if _EXTERNAL_PATTERN.match(href):
            if not config.check_external:
                return None
            if self.external_checker is None:
                raise ResolutionError("External URL checking is enabled without a checker")
            if await self.external_checker.is_valid(href):
                return None
            return ErrorReason.NOT_FOUND

        if is_whitelisted(href, config.whitelist):
            return None

        parsed = parse_href(href)
        pathname = parsed.pathname
        if not pathname or pathname == "./":
            return None

        kind = await self._kind(pathname)
        if kind is PathnameKind.RELATIVE_URL:
            if not config.check_relative_urls:
                return None
            if resolution.base_url is None:
                raise ResolutionError(
                    f"relative URL {pathname} detected, but 'base_url' option is missing."
                )
            pathname = resolve_url(resolution.base_url, pathname)

        elif kind is PathnameKind.RELATIVE_FILE_PATH:
            mode = config.check_relative_paths
            if not mode:
                return None
            file_path = os.path.normpath(os.path.join(resolution.base_dir or "", pathname))
            if mode == "exists":
                if await is_file_exists(file_path):
                    return None
                return ErrorReason.NOT_FOUND
            if mode == "as-url":
                if resolution.path_to_url is None:
                    raise ResolutionError(
                        "'check_relative_paths: as-url' is set, but 'path_to_url' option is missing."
                    )
                as_url = resolution.path_to_url(file_path)
                if not as_url:
                    return None
                pathname = as_url
            else:
                raise ResolutionError(f"Unknown check_relative_paths mode: {mode!r}")

        if not pathname.startswith("/"):
            pathname = f"/{pathname}"

        meta = config.scanned.lookup(pathname)
        if meta is None:
            return ErrorReason.NOT_FOUND
        return self._check_meta(meta, parsed)

    def _check_meta(self, meta: UrlMeta, parsed: ParsedHref) -> Optional[ErrorReason]:
        config = self.config
        if (
            parsed.fragment
            and not config.ignore_fragment
            and meta.hashes is not None
            and parsed.fragment not in meta.hashes
        ):
            return ErrorReason.INVALID_FRAGMENT

        if parsed.query and not config.ignore_query and meta.queries is not None:
            query = canonical_query(parsed.query)
            if not any(canonical_shape(shape) == query for shape in meta.queries):
                return ErrorReason.INVALID_QUERY
        return None

    async def _kind(self, pathname: str) -> PathnameKind:
        result = self._determinate(pathname)
        if inspect.isawaitable(result):
            result = await result
        return PathnameKind(result)


__all__ = [
    "DeterminatePathname",
    "ExternalChecker",
    "LinkResolver",
    "ParsedHref",
    "PathToUrl",
    "PathnameKind",
    "ResolutionContext",
    "Whitelist",
    "canonical_query",
    "canonical_shape",
    "default_determinate_pathname",
    "is_whitelisted",
    "parse_href",
]
