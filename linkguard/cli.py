"""CLI entrypoints for linkguard commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import LinkGuardConfig, load_config
from .diagnostics import Diagnostics
from .errors import ConfigError, LinkGuardError
from .files import expand_patterns
from .logging import configure_logging, get_logger
from .report import count_errors, print_errors
from .scan import PRESETS, scan_urls
from .validate import validate_files_sync


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkguard",
        description="Validate links in Markdown/MDX content against a site's routes.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Scan routes and report broken links in the given documents.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "patterns",
        nargs="*",
        help="Glob patterns of documents to check (defaults to `files` in the config).",
    )
    check_parser.add_argument(
        "--config",
        default=".",
        help="Path to .linkguard.yml or its directory (defaults to current directory).",
    )
    check_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Framework convention used to discover routes.",
    )
    check_parser.add_argument("--cwd", help="Project root scanned for routes.")
    check_parser.add_argument("--base-url", help="Base URL for relative links.")
    check_parser.add_argument(
        "--check-external",
        action="store_true",
        help="Send HEAD requests to external http(s) links.",
    )
    check_parser.add_argument(
        "--check-relative-paths",
        choices=["exists", "as-url"],
        help="Validate relative file links such as ./guide.md.",
    )
    check_parser.add_argument(
        "--no-relative-urls",
        action="store_true",
        help="Skip relative URLs such as ../docs.",
    )
    check_parser.add_argument("--ignore-fragment", action="store_true", help="Skip #hash checks.")
    check_parser.add_argument("--ignore-query", action="store_true", help="Skip ?query checks.")
    check_parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write a full debug log of the run to this file.",
    )
    return parser


def _apply_overrides(config: LinkGuardConfig, args: argparse.Namespace) -> None:
    if args.preset:
        config.scan.preset = args.preset
    if args.cwd:
        config.scan.cwd = Path(args.cwd).expanduser().resolve()
    if args.base_url:
        config.validate.base_url = args.base_url
    if args.check_external:
        config.validate.check_external = True
    if args.check_relative_paths:
        config.validate.check_relative_paths = args.check_relative_paths
    if args.no_relative_urls:
        config.validate.check_relative_urls = False
    if args.ignore_fragment:
        config.validate.ignore_fragment = True
    if args.ignore_query:
        config.validate.ignore_query = True


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for linkguard commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), log_file=getattr(args, "log_file", None)
    )
    logger = get_logger("cli")

    if args.command == "check":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        _apply_overrides(config, args)

        patterns = args.patterns or config.files
        if not patterns:
            parser.exit(1, "No documents given. Pass glob patterns or set `files` in the config.\n")
        files = expand_patterns(patterns)
        logger.debug("Checking %d documents", len(files))

        diagnostics = Diagnostics()
        try:
            scanned = scan_urls(config.to_scan_options(), diagnostics=diagnostics)
            results = validate_files_sync(
                files, config.to_validate_config(scanned), diagnostics=diagnostics
            )
        except LinkGuardError as exc:
            parser.exit(1, f"linkguard check failed: {exc}\nRun with --verbose for more details.\n")

        print_errors(results, throw_error=count_errors(results) > 0)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
