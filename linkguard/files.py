"""Loading documents from disk."""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import frontmatter

from .models import FileObject

PathToUrl = Callable[[str], Optional[str]]


def read_file_from_path(
    path: Union[str, Path], path_to_url: Optional[PathToUrl] = None
) -> FileObject:
    """Read a document, stripping frontmatter while keeping line numbers intact."""
    file_path = str(path)
    text = Path(file_path).read_text(encoding="utf-8")
    post = frontmatter.loads(text)
    return FileObject(
        path=file_path,
        content=_blank_frontmatter(text, post),
        data=dict(post.metadata),
        url=path_to_url(file_path) if path_to_url else None,
    )


def read_files(
    patterns: Union[str, Sequence[str]], path_to_url: Optional[PathToUrl] = None
) -> List[FileObject]:
    """Expand glob patterns (``**`` allowed) and read every match."""
    return [read_file_from_path(path, path_to_url) for path in expand_patterns(patterns)]


def expand_patterns(patterns: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(patterns, str):
        patterns = [patterns]
    seen: set[str] = set()
    matches: List[str] = []
    for pattern in patterns:
        for match in sorted(glob.glob(pattern, recursive=True)):
            if match in seen or not Path(match).is_file():
                continue
            seen.add(match)
            matches.append(match)
    return matches


def _blank_frontmatter(original: str, post: frontmatter.Post) -> str:
    """Replace the frontmatter block with blank lines, keeping the body verbatim."""
    handler = post.handler or frontmatter.detect_format(original.lstrip(), frontmatter.handlers)
    if handler is None:
        return original
    lines = original.split("\n")
    start = next((index for index, line in enumerate(lines) if line.strip()), None)
    opening = getattr(handler, "START_DELIMITER", None)
    closing = getattr(handler, "END_DELIMITER", None)
    if start is not None and opening and closing and lines[start].strip() == opening:
        for index in range(start + 1, len(lines)):
            if lines[index].strip() == closing:
                return "\n" * (index + 1) + "\n".join(lines[index + 1 :])
    return _pad_to_original_lines(original, post.content)


def _pad_to_original_lines(original: str, body: str) -> str:
    # the frontmatter parser trims the body, so locate it at the end of the original text
    if not body:
        return body
    trimmed = original.rstrip()
    index = len(trimmed) - len(body) if trimmed.endswith(body) else original.rfind(body)
    if index < 0:
        offset = max(original.count("\n") - body.count("\n"), 0)
    else:
        offset = original.count("\n", 0, index)
    return "\n" * offset + body


__all__ = ["PathToUrl", "expand_patterns", "read_file_from_path", "read_files"]
