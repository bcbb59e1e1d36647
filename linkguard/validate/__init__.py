"""Validation of document links against a scanned URL space."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional, Sequence, Union

from ..diagnostics import Diagnostics
from ..files import read_file_from_path
from ..logging import get_logger
from ..models import FileObject, UrlSpace, ValidateError, ValidateResult
from ..utils.url import parent_url
from .external import DEFAULT_TIMEOUT, ExternalUrlChecker
from .markdown import (
    MARKDOWN_EXTENSIONS,
    LinkRef,
    MarkdownConfig,
    MarkdownLinkExtractor,
    is_markdown,
)
from .resolver import (
    DeterminatePathname,
    ExternalChecker,
    LinkResolver,
    PathToUrl,
    PathnameKind,
    ResolutionContext,
    Whitelist,
)

_LOGGER = get_logger("validate")

RelativePathMode = Literal["exists", "as-url", False]


@dataclass
class ValidateConfig:
    """Options for :func:`validate_files`.

    ``base_dir`` prefixes the directory of every input path when resolving
    relative file links. ``external_checker`` replaces the default httpx
    checker, mainly for tests.
    """

    scanned: UrlSpace
    base_url: Optional[str] = None
    base_dir: Optional[str] = None
    ignore_fragment: bool = False
    ignore_query: bool = False
    check_external: bool = False
    check_relative_paths: RelativePathMode = False
    check_relative_urls: bool = True
    path_to_url: Optional[PathToUrl] = None
    whitelist: Optional[Whitelist] = None
    determinate_pathname: Optional[DeterminatePathname] = None
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    external_timeout: float = DEFAULT_TIMEOUT
    external_checker: Optional[ExternalChecker] = None


async def validate_files(
    files: Sequence[Union[str, Path, FileObject]],
    config: ValidateConfig,
    *,
    diagnostics: Optional[Diagnostics] = None,
) -> List[ValidateResult]:
    """Validate every file and return results for files with errors.

    Paths are read from disk with frontmatter stripped. Results keep input
    order; errors keep document order.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    normalized = await _load_files(files, config.path_to_url)

    def default_path_to_url(path: str) -> Optional[str]:
        target = os.path.normpath(path)
        for file in normalized:
            if file.url and os.path.normpath(file.path) == target:
                return file.url
        return None

    checker = config.external_checker
    if config.check_external and checker is None:
        checker = ExternalUrlChecker(timeout=config.external_timeout, diagnostics=diagnostics)

    run = _FileRun(
        config=config,
        resolver=LinkResolver(config, checker),
        extractor=MarkdownLinkExtractor(config.markdown),
        path_to_url=config.path_to_url or default_path_to_url,
        diagnostics=diagnostics,
    )

    if isinstance(checker, ExternalUrlChecker):
        async with checker:
            results = await run.run_all(normalized)
    else:
        results = await run.run_all(normalized)

    _LOGGER.debug("Validated %d files, %d with errors", len(normalized), len(results))
    return results


def validate_files_sync(
    files: Sequence[Union[str, Path, FileObject]],
    config: ValidateConfig,
    *,
    diagnostics: Optional[Diagnostics] = None,
) -> List[ValidateResult]:
    """Blocking wrapper around :func:`validate_files`."""
    return asyncio.run(validate_files(files, config, diagnostics=diagnostics))


async def _load_files(
    files: Sequence[Union[str, Path, FileObject]], path_to_url: Optional[PathToUrl]
) -> List[FileObject]:
    async def load(item: Union[str, Path, FileObject]) -> FileObject:
        if isinstance(item, FileObject):
            return item
        return await asyncio.to_thread(read_file_from_path, item, path_to_url)

    async with asyncio.TaskGroup() as group:
        tasks = [group.create_task(load(item)) for item in files]
    return [task.result() for task in tasks]


@dataclass
class _FileRun:
    config: ValidateConfig
    resolver: LinkResolver
    extractor: MarkdownLinkExtractor
    path_to_url: PathToUrl
    diagnostics: Diagnostics

    async def run_all(self, files: Sequence[FileObject]) -> List[ValidateResult]:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(self.run_file(file)) for file in files]
        results = [task.result() for task in tasks]
        return [result for result in results if result.errors]

    async def run_file(self, file: FileObject) -> ValidateResult:
        if not is_markdown(file.path):
            extension = os.path.splitext(file.path)[1]
            self.diagnostics.warn(
                "unsupported-format",
                f"format unsupported: {extension}, supported: {', '.join(MARKDOWN_EXTENSIONS)}",
                subject=file.path,
            )
            return ValidateResult(file=file.path)

        resolution = ResolutionContext(
            base_url=parent_url(file.url) if file.url else self.config.base_url,
            base_dir=self._base_dir(file.path),
            path_to_url=self.path_to_url,
        )
        refs = self.extractor.extract(file)
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(self.check(ref, resolution)) for ref in refs]
        errors = [error for error in (task.result() for task in tasks) if error is not None]
        return ValidateResult(file=file.path, errors=errors)

    async def check(self, ref: LinkRef, resolution: ResolutionContext) -> Optional[ValidateError]:
        try:
            reason = await self.resolver.detect(ref.href, resolution)
        except Exception as exc:  # becomes this link's reason
            _LOGGER.debug("Resolving %s failed: %s", ref.href, exc)
            return ValidateError(url=ref.href, line=ref.line, column=ref.column, reason=exc)
        if reason is None:
            return None
        return ValidateError(url=ref.href, line=ref.line, column=ref.column, reason=reason)

    def _base_dir(self, path: str) -> str:
        directory = os.path.dirname(path)
        if self.config.base_dir:
            return os.path.join(self.config.base_dir, directory)
        return directory


__all__ = [
    "ExternalUrlChecker",
    "LinkResolver",
    "MarkdownConfig",
    "MarkdownLinkExtractor",
    "PathnameKind",
    "ResolutionContext",
    "ValidateConfig",
    "validate_files",
    "validate_files_sync",
]
