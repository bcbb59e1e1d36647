"""Link extraction from Markdown and MDX documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from ..models import FileObject

MARKDOWN_EXTENSIONS = (".md", ".mdx")

_TAG_PATTERN = re.compile(
    r"<([A-Za-z][\w.:-]*)"
    r"((?:\s+[^\s=/>]+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|\{[^}]*\}|[^\s>]+))?)*)"
    r"\s*/?>"
)
_ATTR_PATTERN = re.compile(r"([^\s=/>]+)(?:\s*=\s*(\"[^\"]*\"|'[^']*'|\{[^}]*\}|[^\s>]+))?")
_SCHEME_TAIL = re.compile(r"([a-z][a-z0-9.+-]*)$", re.IGNORECASE)

Plugin = Union[Callable[..., None], Tuple[Callable[..., None], Mapping[str, Any]]]


@dataclass(frozen=True)
class MarkdownNode:
    """A document node handed to the node-to-href mapping.

    ``line``/``column`` are 1-based and ``None`` for nodes without a source
    position. ``attributes`` values are ``None`` when not a plain string.
    """

    type: str
    line: Optional[int]
    column: Optional[int]
    token: Optional[Token] = None
    href: Optional[str] = None
    name: Optional[str] = None
    attributes: Mapping[str, Optional[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class LinkRef:
    href: str
    line: int
    column: int


OnNode = Callable[[MarkdownNode], Optional[Iterable[str]]]


@dataclass
class MarkdownConfig:
    """Parser and extraction settings.

    ``components`` maps a component tag to the attributes holding hrefs, either
    as ``{"attributes": [...]}`` or as a plain list.
    """

    components: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    plugins: List[Plugin] = field(default_factory=list)
    on_node: Optional[OnNode] = None

    def __post_init__(self) -> None:
        normalised: Dict[str, Tuple[str, ...]] = {}
        for name, value in self.components.items():
            if isinstance(value, Mapping):
                attributes = value.get("attributes") or []
            else:
                attributes = value
            normalised[str(name)] = tuple(str(item) for item in attributes)
        self.components = normalised


def is_markdown(path: str) -> bool:
    return path.endswith(MARKDOWN_EXTENSIONS)


class MarkdownLinkExtractor:
    """Parses documents with markdown-it and yields position-tagged hrefs."""

    def __init__(self, config: Optional[MarkdownConfig] = None) -> None:
        self.config = config or MarkdownConfig()
        self._on_node: OnNode = self.config.on_node or self._default_on_node
        self._markdown = self._build_parser(mdx=False)
        self._mdx = self._build_parser(mdx=True)

    def extract(self, file: FileObject) -> List[LinkRef]:
        refs: List[LinkRef] = []
        for node in self.iter_nodes(file):
            if node.line is None or node.column is None:
                continue
            hrefs = self._on_node(node)
            if not hrefs:
                continue
            for href in hrefs:
                refs.append(LinkRef(href=href, line=node.line, column=node.column))
        return refs

    def iter_nodes(self, file: FileObject) -> Iterator[MarkdownNode]:
        mdx = file.path.endswith(".mdx")
        source = file.content.replace("\r\n", "\n").replace("\r", "\n")
        lines = source.split("\n")
        parser = self._mdx if mdx else self._markdown

        for token in parser.parse(source):
            if token.map is None:
                continue
            first_line = token.map[0]
            yield MarkdownNode(
                type=token.type,
                line=first_line + 1,
                column=_indent(lines, first_line) + 1,
                token=token,
            )
            if token.type == "inline":
                yield from self._inline_nodes(token, lines, mdx)
            elif token.type == "html_block" and mdx:
                yield from _element_nodes(token, token.content, 0, token.content, first_line, lines)

    def _inline_nodes(
        self, inline: Token, lines: Sequence[str], mdx: bool
    ) -> Iterator[MarkdownNode]:
        assert inline.map is not None
        content = inline.content
        children = inline.children or []
        cursor = 0
        for index, child in enumerate(children):
            if child.type == "link_open":
                offset = child.meta.get("offset")
                if offset is None:
                    offset = _find_link_text(children, index, content, cursor)
                if offset is None:
                    continue
                cursor = offset + 1
                line, column = _locate(content, offset, inline.map[0], lines)
                href = child.attrGet("href")
                yield MarkdownNode(
                    type="link",
                    line=line,
                    column=column,
                    token=child,
                    href=str(href) if href is not None else None,
                )
            elif child.type == "html_inline" and mdx:
                offset = child.meta.get("offset")
                if offset is None:
                    continue
                yield from _element_nodes(child, child.content, offset, content, inline.map[0], lines)

    def _default_on_node(self, node: MarkdownNode) -> Optional[List[str]]:
        if node.type == "link" and node.href is not None:
            return [node.href]
        if node.type == "element" and node.name in self.config.components:
            wanted = self.config.components[node.name]
            # expression values such as href={url} cannot be analysed statically
            return [
                value
                for name, value in node.attributes.items()
                if name in wanted and isinstance(value, str)
            ]
        return None

    def _build_parser(self, *, mdx: bool) -> MarkdownIt:
        md = MarkdownIt("gfm-like")
        # keep hrefs exactly as written so errors quote the original link
        md.normalizeLink = _identity  # type: ignore[method-assign]
        if mdx:
            md.disable("code")
        _track_offset(md, "link")
        _track_offset(md, "autolink")
        _track_offset(md, "html_inline")
        _track_offset(md, "linkify", scheme_prefixed=True)
        for plugin in self.config.plugins:
            if isinstance(plugin, tuple):
                func, options = plugin
                md.use(func, **dict(options))
            else:
                md.use(plugin)
        return md


def _identity(url: str) -> str:
    return url


def _track_offset(md: MarkdownIt, name: str, *, scheme_prefixed: bool = False) -> None:
    """Record where tokens pushed by inline rule ``name`` start in the source."""
    original = next((rule.fn for rule in md.inline.ruler.__rules__ if rule.name == name), None)
    if original is None:
        return

    def tracked(state: StateInline, silent: bool) -> bool:
        start = state.pos
        if scheme_prefixed:
            match = _SCHEME_TAIL.search(state.pending)
            if match:
                start -= len(match.group(1))
        first = len(state.tokens)
        if not original(state, silent):
            return False
        if not silent:
            for token in state.tokens[first:]:
                if token.type in ("link_open", "html_inline") and "offset" not in token.meta:
                    token.meta["offset"] = start
        return True

    md.inline.ruler.at(name, tracked)


def _find_link_text(
    children: Sequence[Token], index: int, content: str, cursor: int
) -> Optional[int]:
    # links added after inline parsing (bare e-mails) only carry their text
    if index + 1 >= len(children) or children[index + 1].type != "text":
        return None
    found = content.find(children[index + 1].content, cursor)
    return found if found >= 0 else None


def _element_nodes(
    token: Token,
    text: str,
    base_offset: int,
    content: str,
    first_line: int,
    lines: Sequence[str],
) -> Iterator[MarkdownNode]:
    for match in _TAG_PATTERN.finditer(text):
        line, column = _locate(content, base_offset + match.start(), first_line, lines)
        yield MarkdownNode(
            type="element",
            line=line,
            column=column,
            token=token,
            name=match.group(1),
            attributes=_parse_attributes(match.group(2)),
        )


def _parse_attributes(raw: str) -> Dict[str, Optional[str]]:
    attributes: Dict[str, Optional[str]] = {}
    for match in _ATTR_PATTERN.finditer(raw):
        name, value = match.group(1), match.group(2)
        if value is None or value.startswith("{"):
            attributes[name] = None
        elif value[0] in "\"'":
            attributes[name] = value[1:-1]
        else:
            attributes[name] = value
    return attributes


def _locate(content: str, offset: int, first_line: int, lines: Sequence[str]) -> Tuple[int, int]:
    """Map an offset inside block ``content`` to a 1-based line and column."""
    line_index = first_line + content.count("\n", 0, offset)
    start = content.rfind("\n", 0, offset) + 1
    end = content.find("\n", start)
    content_line = content[start:] if end == -1 else content[start:end]
    raw = lines[line_index] if line_index < len(lines) else ""
    return line_index + 1, _line_prefix(raw, content_line) + (offset - start) + 1


def _line_prefix(raw: str, content_line: str) -> int:
    # block content drops container markers and indentation from the raw line
    raw_trimmed = raw.rstrip()
    piece = content_line.rstrip()
    if piece and raw_trimmed.endswith(piece):
        return len(raw_trimmed) - len(piece)
    stripped = content_line.strip()
    found = raw.find(stripped) if stripped else -1
    if found < 0:
        return 0
    return max(found - (len(content_line) - len(content_line.lstrip())), 0)


def _indent(lines: Sequence[str], index: int) -> int:
    if index >= len(lines):
        return 0
    line = lines[index]
    return len(line) - len(line.lstrip())


__all__ = [
    "LinkRef",
    "MARKDOWN_EXTENSIONS",
    "MarkdownConfig",
    "MarkdownLinkExtractor",
    "MarkdownNode",
    "OnNode",
    "Plugin",
    "is_markdown",
]
