"""Structured warnings collected while scanning and validating."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .logging import get_logger

_LOGGER = get_logger("diagnostics")


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal warning raised during a run."""

    code: str
    message: str
    subject: Optional[str] = None


class Diagnostics:
    """Collects diagnostics for callers and mirrors them to the package logger."""

    def __init__(self) -> None:
        self._items: List[Diagnostic] = []

    def warn(self, code: str, message: str, *, subject: str | None = None) -> Diagnostic:
        diagnostic = Diagnostic(code=code, message=message, subject=subject)
        self._items.append(diagnostic)
        _LOGGER.warning(message)
        return diagnostic

    def codes(self) -> List[str]:
        return [item.code for item in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["Diagnostic", "Diagnostics"]
