"""Validate Markdown/MDX links against the routes of a static site."""

from __future__ import annotations

from .diagnostics import Diagnostic, Diagnostics
from .errors import ConfigError, LinkGuardError, ResolutionError, RouteConfigError
from .files import read_file_from_path, read_files
from .models import (
    ErrorReason,
    FallbackUrl,
    FileObject,
    UrlMeta,
    UrlSpace,
    ValidateError,
    ValidateResult,
)
from .report import format_errors, print_errors
from .scan import PopulateEntry, RouteConfigEntry, ScanOptions, scan_urls
from .validate import MarkdownConfig, ValidateConfig, validate_files, validate_files_sync

__all__ = [
    "ConfigError",
    "Diagnostic",
    "Diagnostics",
    "ErrorReason",
    "FallbackUrl",
    "FileObject",
    "LinkGuardError",
    "MarkdownConfig",
    "PopulateEntry",
    "ResolutionError",
    "RouteConfigEntry",
    "RouteConfigError",
    "ScanOptions",
    "UrlMeta",
    "UrlSpace",
    "ValidateConfig",
    "ValidateError",
    "ValidateResult",
    "format_errors",
    "print_errors",
    "read_file_from_path",
    "read_files",
    "scan_urls",
    "validate_files",
    "validate_files_sync",
]
