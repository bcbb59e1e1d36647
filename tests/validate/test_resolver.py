"""Tests for href classification and resolution."""

from __future__ import annotations

import asyncio
import re
from typing import Any, Optional

import pytest

from linkguard.errors import ResolutionError
from linkguard.models import ErrorReason, UrlMeta, UrlSpace
from linkguard.validate import ValidateConfig
from linkguard.validate.resolver import (
    LinkResolver,
    PathnameKind,
    ResolutionContext,
    canonical_query,
    default_determinate_pathname,
    parse_href,
)


class _StubChecker:
    def __init__(self, valid: bool) -> None:
        self.valid = valid
        self.calls: list[str] = []

    async def is_valid(self, url: str) -> bool:
        self.calls.append(url)
        return self.valid


def _space() -> UrlSpace:
    space = UrlSpace()
    space.add("/", UrlMeta())
    space.add("/docs", UrlMeta(hashes=frozenset({"intro"})))
    space.add(re.compile(r"^/blog/(.+)$"), UrlMeta())
    return space


def _detect(href: str, resolution: Optional[ResolutionContext] = None, **options: Any):  # type: ignore[no-untyped-def]
    checker = options.pop("checker", None)
    resolver = LinkResolver(ValidateConfig(scanned=_space(), **options), checker)
    return asyncio.run(resolver.detect(href, resolution or ResolutionContext()))


def test_parse_href_splits_on_first_question_mark_and_hash() -> None:
    parsed = parse_href("/docs?a=1#top?x#y")

    assert parsed.pathname == "/docs"
    assert parsed.query == "a=1"
    assert parsed.fragment == "top?x#y"


def test_parse_href_without_query_or_fragment() -> None:
    parsed = parse_href("guide")
    assert (parsed.pathname, parsed.query, parsed.fragment) == ("guide", None, None)


@pytest.mark.parametrize(
    ("pathname", "kind"),
    [
        ("/docs", PathnameKind.URL),
        ("docs", PathnameKind.URL),
        ("./guide.md", PathnameKind.RELATIVE_FILE_PATH),
        ("../guide.mdx", PathnameKind.RELATIVE_FILE_PATH),
        ("../guide", PathnameKind.RELATIVE_URL),
    ],
)
def test_default_pathname_classification(pathname: str, kind: PathnameKind) -> None:
    assert default_determinate_pathname(pathname) is kind


def test_canonical_query_ignores_parameter_order() -> None:
    assert canonical_query("b=2&a=1") == canonical_query("a=1&b=2") == "a=1&b=2"


def test_known_and_fallback_urls_pass() -> None:
    assert _detect("/") is None
    assert _detect("/docs#intro") is None
    assert _detect("/blog/anything") is None
    assert _detect("docs") is None


def test_unknown_url_and_fragment() -> None:
    assert _detect("/nope") is ErrorReason.NOT_FOUND
    assert _detect("/docs#other") is ErrorReason.INVALID_FRAGMENT


def test_mailto_and_empty_links_are_ignored() -> None:
    assert _detect("mailto:someone@example.com") is None
    assert _detect("") is None
    assert _detect("#section") is None
    assert _detect("./") is None


def test_external_links_require_opt_in() -> None:
    checker = _StubChecker(valid=False)

    assert _detect("https://example.com", checker=checker) is None
    assert checker.calls == []
    assert _detect("https://example.com", checker=checker, check_external=True) is (
        ErrorReason.NOT_FOUND
    )
    assert checker.calls == ["https://example.com"]


def test_external_check_without_checker_is_a_resolution_error() -> None:
    with pytest.raises(ResolutionError):
        _detect("https://example.com", check_external=True)


def test_relative_url_resolution_against_base_url() -> None:
    resolution = ResolutionContext(base_url="docs/guide")

    assert _detect("../../docs", resolution) is None
    assert _detect("../../../../docs", resolution) is None
    assert _detect("./missing", resolution) is ErrorReason.NOT_FOUND


def test_relative_file_path_as_url_requires_mapper() -> None:
    with pytest.raises(ResolutionError, match="path_to_url"):
        _detect("./guide.md", check_relative_paths="as-url")


def test_relative_file_path_as_url() -> None:
    resolution = ResolutionContext(
        base_dir="content",
        path_to_url=lambda path: "docs" if path.endswith("guide.md") else None,
    )

    assert _detect("./guide.md#intro", resolution, check_relative_paths="as-url") is None
    assert _detect("./unmapped.md", resolution, check_relative_paths="as-url") is None
    assert _detect("./guide.md#nope", resolution, check_relative_paths="as-url") is (
        ErrorReason.INVALID_FRAGMENT
    )


def test_empty_base_url_means_the_site_root() -> None:
    assert _detect("./docs", ResolutionContext(base_url="")) is None
