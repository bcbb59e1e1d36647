"""Exception hierarchy for linkguard."""

from __future__ import annotations


class LinkGuardError(RuntimeError):
    """Base class for linkguard failures."""


class RouteConfigError(LinkGuardError, ValueError):
    """Raised when a route layout or scan option cannot be turned into URLs."""


class ResolutionError(LinkGuardError):
    """Raised when a link needs a resolver dependency that was not configured."""


class ConfigError(LinkGuardError):
    """Raised when the configuration file cannot be parsed."""


__all__ = ["ConfigError", "LinkGuardError", "ResolutionError", "RouteConfigError"]
