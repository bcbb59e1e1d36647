"""Pathname helpers that never touch the filesystem."""

from __future__ import annotations

from typing import List


def split_path(path: str) -> List[str]:
    """Split a path into segments, dropping leading/trailing/duplicate slashes."""
    return [part for part in path.split("/") if part]


def resolve_url(base: str, relative: str) -> str:
    """Resolve ``relative`` against ``base`` using a segment stack.

    ``..`` past the root is ignored instead of raising, so ``/a`` + ``../../b``
    resolves to ``b``. The result carries no leading slash.
    """
    stack = split_path(base)
    for segment in split_path(relative):
        if segment == "..":
            if stack:
                stack.pop()
        elif segment != ".":
            stack.append(segment)
    return "/".join(stack)


def parent_url(url: str) -> str:
    """Return ``url`` without its final segment (``docs/a`` -> ``docs``).

    Top-level pages such as ``/guide`` have the site root ``/`` as parent.
    """
    return "/".join(url.split("/")[:-1]) or "/"


__all__ = ["parent_url", "resolve_url", "split_path"]
