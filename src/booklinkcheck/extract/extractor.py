"""Scan rendered pages for links and images."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from booklinkcheck.contracts.diagnostic import Diagnostic, ErrorKind, Severity
from booklinkcheck.contracts.document import SourceFile
from booklinkcheck.contracts.link import Link, LinkType
from booklinkcheck.extract.positions import PositionMapper

_LOG = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

_FENCE_RE = re.compile(
    r"^[ ]{0,3}(`{3,}|~{3,})[^\n]*\n.*?(?:^[ ]{0,3}\1[`~]*[ \t]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)
# Code spans never cross a blank line.
_CODE_SPAN_RE = re.compile(r"(?<!`)(`+)(?!`)(?:[^\n]|\n(?![ \t]*\n))+?(?<!`)\1(?!`)")
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)

# [text](dest "title") and ![alt](dest); one level of nested brackets in the text.
_INLINE_RE = re.compile(
    r"(?<!\\)!?\[(?:[^\[\]\\]|\\.|\[[^\[\]]*\])*\]"
    r"\([ \t]*(?P<dest><[^<>\n]*>|(?:[^\s()\\]|\\.|\([^\s()]*\))*)"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?[ \t]*\)"
)
_REFERENCE_RE = re.compile(
    r"^[ ]{0,3}\[(?P<label>[^\]\n^][^\]\n]*)\]:[ \t]*(?P<dest><[^<>\n]*>|\S+)",
    re.MULTILINE,
)
_AUTOLINK_RE = re.compile(r"<(?P<dest>[A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*)>")
_TAG_RE = re.compile(r"<[A-Za-z][A-Za-z0-9\-]*\b[^<>]*>")
_ATTR_RE = re.compile(r"\b(?:href|src)\s*=\s*(?:\"(?P<dq>[^\"]*)\"|'(?P<sq>[^']*)')", re.IGNORECASE)


@dataclass(frozen=True)
class ExtractionResult:
    links: list[Link] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def classify_link_type(target: str) -> LinkType:
    if _SCHEME_RE.match(target):
        return LinkType.EXTERNAL
    if target.startswith("#"):
        return LinkType.ANCHOR
    return LinkType.INTERNAL


def mask_code(text: str, *, code_spans: bool = True) -> str:
    """Blank out code blocks, code spans and HTML comments, keeping offsets intact."""

    def blank(match: re.Match[str]) -> str:
        return re.sub(r"[^\n]", " ", match.group(0))

    text = _FENCE_RE.sub(blank, text)
    text = _HTML_COMMENT_RE.sub(blank, text)
    if not code_spans:
        return text
    return _CODE_SPAN_RE.sub(blank, text)


def _candidates(text: str) -> list[tuple[int, int, int, int]]:
    """Return ``(match_start, match_end, dest_start, dest_end)`` for every link candidate."""
    found: list[tuple[int, int, int, int]] = []
    # Inline matches may nest (an image inside a link), so search from every start.
    pos = 0
    while (match := _INLINE_RE.search(text, pos)) is not None:
        found.append((match.start(), match.end(), match.start("dest"), match.end("dest")))
        pos = match.start() + 1
    for pattern in (_REFERENCE_RE, _AUTOLINK_RE):
        for match in pattern.finditer(text):
            found.append((match.start(), match.end(), match.start("dest"), match.end("dest")))
    for tag in _TAG_RE.finditer(text):
        for attr in _ATTR_RE.finditer(tag.group(0)):
            group = "dq" if attr.group("dq") is not None else "sq"
            found.append(
                (tag.start(), tag.end(), tag.start() + attr.start(group), tag.start() + attr.end(group))
            )
    found.sort()

    # Autolinks can also look like HTML tags; keep the first candidate per destination.
    unique: list[tuple[int, int, int, int]] = []
    seen: set[tuple[int, int]] = set()
    for candidate in found:
        if candidate[2:] in seen:
            continue
        seen.add(candidate[2:])
        unique.append(candidate)
    return unique


def extract_links(source_file: SourceFile) -> ExtractionResult:
    """Extract every link of *source_file* in document order.

    Raises :class:`~booklinkcheck.contracts.exceptions.DocumentError` when the
    page's position map is unusable. Links whose position cannot be mapped, and
    links with an empty destination, are reported as ``MalformedLink``
    diagnostics without stopping the scan.
    """
    mapper = PositionMapper(source_file)
    text = mask_code(source_file.content)
    result = ExtractionResult()

    for match_start, match_end, dest_start, dest_end in _candidates(text):
        raw = source_file.content[dest_start:dest_end]
        if raw.startswith("<") and raw.endswith(">"):
            raw = raw[1:-1]
        target = raw.strip()

        span_start, span_end = (dest_start, dest_end) if target else (match_start, match_end)
        span = mapper.span(span_start, span_end)
        if span is None:
            _LOG.debug("unmappable link %r at offset %d in %s", target, span_start, source_file.path)
            result.diagnostics.append(
                Diagnostic(
                    severity=Severity.ERROR,
                    kind=ErrorKind.MALFORMED_LINK,
                    message=f"cannot map link `{target}` at rendered offset {span_start} back to its source",
                    source_file=source_file.path,
                )
            )
            continue

        link = Link(
            source_file=source_file.path,
            span=span,
            raw_target=target,
            link_type=classify_link_type(target),
        )
        if not target:
            result.diagnostics.append(
                Diagnostic.for_link(
                    link, ErrorKind.MALFORMED_LINK, "link has an empty target", severity=Severity.ERROR
                )
            )
            continue
        result.links.append(link)

    return result
