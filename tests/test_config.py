"""Tests for linkguard.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from linkguard.config import LinkGuardConfig, load_config
from linkguard.errors import ConfigError
from linkguard.models import UrlSpace
from linkguard.scan.options import KeyedValue, SegmentsValue


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, LinkGuardConfig)
    assert config.root == tmp_path.resolve()
    assert config.files == []
    assert config.scan.preset == "next"
    assert config.scan.pages is None
    assert config.validate.check_relative_urls is True
    assert config.validate.check_relative_paths is False
    assert config.validate.external_timeout == 10.0


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".linkguard.yml"
    config_file.write_text(
        """
files:
  - "content/**/*.md"
scan:
  preset: astro
  cwd: site
  extensions: [astro, md]
  populate:
    "blog/[slug]":
      - value: hello
        hashes: [intro]
    "projects/[lang]/[...slug]":
      - value:
          lang: en
          slug: [a, b]
  meta:
    about:
      hashes: [team]
validate:
  base_url: /docs
  ignore_query: yes
  check_external: true
  check_relative_paths: as-url
  check_relative_urls: false
  whitelist:
    - /private
  external_timeout: 2.5
  components:
    Card:
      attributes: [href]
    Link: [to]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.files == ["content/**/*.md"]
    assert config.scan.preset == "astro"
    assert config.scan.cwd == tmp_path.resolve() / "site"
    assert config.scan.extensions == ["astro", "md"]
    assert config.validate.base_url == "/docs"
    assert config.validate.ignore_query is True
    assert config.validate.check_external is True
    assert config.validate.check_relative_paths == "as-url"
    assert config.validate.check_relative_urls is False
    assert config.validate.whitelist == ["/private"]
    assert config.validate.external_timeout == 2.5
    assert config.validate.components == {"Card": ["href"], "Link": ["to"]}

    options = config.to_scan_options()
    assert options.cwd == tmp_path.resolve() / "site"
    blog = options.populate["blog/[slug]"][0]
    assert blog.value_for("slug") == "hello"
    assert blog.meta.hashes == frozenset({"intro"})
    project = options.populate["projects/[lang]/[...slug]"][0]
    assert project.value == KeyedValue({"lang": "en", "slug": ("a", "b")})
    assert options.meta["about"].hashes == frozenset({"team"})

    validate = config.to_validate_config(UrlSpace())
    assert validate.whitelist == ["/private"]
    assert validate.markdown.components == {"Card": ("href",), "Link": ("to",)}


def test_scan_cwd_defaults_to_config_directory(tmp_path: Path) -> None:
    (tmp_path / ".linkguard.yml").write_text("scan:\n  pages: [page.tsx]\n", encoding="utf-8")

    options = load_config(tmp_path).to_scan_options()

    assert options.cwd == tmp_path.resolve()
    assert options.pages == ["page.tsx"]


def test_list_populate_value(tmp_path: Path) -> None:
    (tmp_path / ".linkguard.yml").write_text(
        "scan:\n  populate:\n    'docs/[...slug]':\n      - value: [a, b]\n",
        encoding="utf-8",
    )

    options = load_config(tmp_path).to_scan_options()

    assert options.populate["docs/[...slug]"][0].value == SegmentsValue(("a", "b"))


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".linkguard.yml").write_text("scan: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".linkguard.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_relative_path_mode(tmp_path: Path) -> None:
    (tmp_path / ".linkguard.yml").write_text(
        "validate:\n  check_relative_paths: sometimes\n", encoding="utf-8"
    )

    with pytest.raises(ConfigError, match="check_relative_paths"):
        load_config(tmp_path)
