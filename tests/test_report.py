"""Tests for the human-readable error report."""

from __future__ import annotations

import io

import pytest

from linkguard.errors import ResolutionError
from linkguard.models import ErrorReason, ValidateError, ValidateResult
from linkguard.report import count_errors, format_errors, print_errors


def _results() -> list[ValidateResult]:
    return [
        ValidateResult(
            file="a.md",
            errors=[
                ValidateError(url="/missing", line=1, column=12, reason=ErrorReason.NOT_FOUND),
                ValidateError(url="/docs#x", line=3, column=1, reason=ErrorReason.INVALID_FRAGMENT),
            ],
        ),
        ValidateResult(
            file="b.md",
            errors=[
                ValidateError(
                    url="../up",
                    line=2,
                    column=4,
                    reason=ResolutionError("base_url option is missing"),
                )
            ],
        ),
    ]


def test_format_errors() -> None:
    assert format_errors(_results()).splitlines() == [
        "Invalid URLs in a.md:",
        "/missing: not-found at line 1 column 12",
        "/docs#x: invalid-fragment at line 3 column 1",
        "------",
        "Invalid URLs in b.md:",
        "../up: base_url option is missing at line 2 column 4",
        "------",
        "2 errored file, 3 errors",
    ]


def test_count_errors() -> None:
    assert count_errors(_results()) == 3
    assert count_errors([]) == 0


def test_print_errors_without_throwing() -> None:
    stream = io.StringIO()

    print_errors(_results(), stream=stream)

    assert stream.getvalue().endswith("2 errored file, 3 errors\n")


def test_print_errors_exits_when_errors_exist() -> None:
    stream = io.StringIO()

    with pytest.raises(SystemExit) as excinfo:
        print_errors(_results(), throw_error=True, stream=stream)

    assert excinfo.value.code == 1
    assert "Invalid URLs in a.md:" in stream.getvalue()


def test_print_errors_does_not_exit_on_clean_run() -> None:
    stream = io.StringIO()

    print_errors([], throw_error=True, stream=stream)

    assert stream.getvalue() == "0 errored file, 0 errors\n"


def test_detected_tuple_view() -> None:
    assert _results()[0].detected[0] == ("/missing", 1, 12, ErrorReason.NOT_FOUND)
