"""Human-readable reporting of validation results."""

from __future__ import annotations

import sys
from typing import List, Sequence, TextIO

from .models import ValidateError, ValidateResult


def describe_reason(error: ValidateError) -> str:
    """Return the taxonomy value, or the message of a recorded exception."""
    return str(error.reason)


def format_errors(results: Sequence[ValidateResult]) -> str:
    """Render results as the multi-line report printed by the CLI."""
    lines: List[str] = []
    total = 0
    for result in results:
        lines.append(f"Invalid URLs in {result.file}:")
        for error in result.errors:
            lines.append(
                f"{error.url}: {describe_reason(error)} at line {error.line} column {error.column}"
            )
        lines.append("------")
        total += len(result.errors)
    lines.append(f"{len(results)} errored file, {total} errors")
    return "\n".join(lines)


def count_errors(results: Sequence[ValidateResult]) -> int:
    return sum(len(result.errors) for result in results)


def print_errors(
    results: Sequence[ValidateResult],
    throw_error: bool = False,
    *,
    stream: TextIO | None = None,
) -> None:
    """Print the report; with ``throw_error`` exit with status 1 when errors exist."""
    report = format_errors(results)
    if throw_error and count_errors(results) > 0:
        print(report, file=stream or sys.stderr)
        raise SystemExit(1)
    print(report, file=stream or sys.stdout)


__all__ = ["count_errors", "describe_reason", "format_errors", "print_errors"]
