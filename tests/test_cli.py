"""CLI parser and end-to-end command tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from linkguard.cli import _build_parser, main
from tests._fixtures.site_builder import SiteBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "check"])
    assert args.verbose is True
    assert args.command == "check"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["check", "--verbose"])
    assert args.verbose is True


def test_cli_check_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "check",
            "docs/**/*.md",
            "--preset",
            "astro",
            "--check-relative-paths",
            "as-url",
            "--no-relative-urls",
            "--ignore-fragment",
        ]
    )
    assert args.patterns == ["docs/**/*.md"]
    assert args.preset == "astro"
    assert args.check_relative_paths == "as-url"
    assert args.no_relative_urls is True
    assert args.ignore_fragment is True
    assert args.ignore_query is False


def test_cli_rejects_unknown_preset() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["check", "--preset", "gatsby"])


def _site(site_builder: SiteBuilder) -> Path:
    site_builder.write(
        {
            "app/page.tsx": "export default function Page() {}\n",
            "app/docs/page.tsx": "export default function Page() {}\n",
            ".linkguard.yml": """
                files:
                  - "content/*.md"
            """,
        }
    )
    return site_builder.path()


def test_check_passes_on_valid_links(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _site(site_builder)
    site_builder.write({"content/index.md": "[home](/) [docs](/docs)\n"})
    monkeypatch.chdir(root)

    main(["check"])

    assert "0 errored file, 0 errors" in capsys.readouterr().out


def test_check_exits_with_report_on_broken_links(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _site(site_builder)
    site_builder.write({"content/index.md": "[docs](/docs) [missing](/missing)\n"})
    monkeypatch.chdir(root)

    with pytest.raises(SystemExit) as excinfo:
        main(["check", "content/index.md"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "Invalid URLs in content/index.md:" in err
    assert "/missing: not-found at line 1 column 15" in err


def test_check_without_documents_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["check"])

    assert excinfo.value.code == 1
    assert "No documents given" in capsys.readouterr().err


def test_check_reports_configuration_errors(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _site(site_builder)
    site_builder.write({"content/index.md": "[x](/x)\n"})
    monkeypatch.chdir(root)

    with pytest.raises(SystemExit) as excinfo:
        main(["check", "--preset", "react-router"])

    assert excinfo.value.code == 1
    assert "router_config" in capsys.readouterr().err


def test_check_writes_debug_log_file(
    site_builder: SiteBuilder, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    root = _site(site_builder)
    site_builder.write({"content/index.md": "[home](/)\n"})
    monkeypatch.chdir(root)
    log_file = tmp_path / "check.log"

    main(["check", "--log-file", str(log_file)])

    text = log_file.read_text(encoding="utf-8")
    assert "linkguard.cli: Checking 1 documents" in text
    assert "linkguard.scan.next: Scanned 2 templates into 2 urls and 0 fallbacks" in text
