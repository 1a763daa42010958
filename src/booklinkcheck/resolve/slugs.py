"""Heading anchors, computed the way the book renderer assigns heading ids.

A heading's id is its text with inline markup removed, keeping only
alphanumerics, ``_`` and ``-`` (lower-cased) and turning whitespace into
``-``. Repeated ids get ``-1``, ``-2``, ... in order of appearance. A heading
may override its id with a trailing ``{#custom-id}`` attribute block.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from booklinkcheck.extract.extractor import mask_code

_ATX_RE = re.compile(r"^[ ]{0,3}#{1,6}(?:[ \t]+(?P<text>.*?))?(?:[ \t]+#+)?[ \t]*$")
_SETEXT_RE = re.compile(r"^[ ]{0,3}(?:=+|-+)[ \t]*$")
_ATTRS_RE = re.compile(r"[ \t]*\{(?P<attrs>[^{}]*)\}[ \t]*$")
_ID_ATTR_RE = re.compile(r"(?:^|\s)#(?P<id>[^\s}]+)")
_BLOCK_START_RE = re.compile(r"^[ ]{0,3}(?:[-*+>]|\d+[.)]|#|\||<)")

_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)|\[([^\]]*)\]\[[^\]]*\]")
_HTML_TAG_RE = re.compile(r"</?[A-Za-z][^<>]*>")
_EMPHASIS_RE = re.compile(r"(\*{1,3}|~~)(?=\S)(.+?)(?<=\S)\1|(?<!\w)(_{1,3})(?=\S)(.+?)(?<=\S)\3(?!\w)")
_HTML_ANCHOR_RE = re.compile(r"<[A-Za-z][^<>]*?\b(?:id|name)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')", re.IGNORECASE)


def normalize_id(text: str) -> str:
    """Slug for a heading text that has already been stripped of markup."""
    out: list[str] = []
    for ch in text.strip():
        if ch.isalnum() or ch in "_-":
            out.append(ch.lower() if ch.isascii() else ch)
        elif ch.isspace():
            out.append("-")
    return "".join(out)


def strip_inline_markup(text: str) -> str:
    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(lambda m: m.group(1) if m.group(1) is not None else m.group(2), text)
    text = _HTML_TAG_RE.sub("", text)
    text = text.replace("`", "")
    previous = None
    while previous != text:
        previous = text
        text = _EMPHASIS_RE.sub(lambda m: m.group(2) if m.group(2) is not None else m.group(4), text)
    return text


def iter_headings(content: str) -> Iterator[tuple[str, str | None]]:
    """Yield ``(text, explicit_id)`` for every ATX and setext heading outside code blocks."""
    lines = mask_code(content, code_spans=False).splitlines()
    paragraph: list[str] = []
    for line in lines:
        atx = _ATX_RE.match(line)
        if atx is not None:
            paragraph = []
            yield _split_attrs(atx.group("text") or "")
            continue
        if paragraph and _SETEXT_RE.match(line):
            yield _split_attrs(" ".join(part.strip() for part in paragraph))
            paragraph = []
            continue
        if not line.strip() or _BLOCK_START_RE.match(line):
            paragraph = []
            continue
        paragraph.append(line)


def _split_attrs(text: str) -> tuple[str, str | None]:
    attrs = _ATTRS_RE.search(text)
    if attrs is None:
        return text, None
    explicit = _ID_ATTR_RE.search(attrs.group("attrs"))
    return text[: attrs.start()], explicit.group("id") if explicit else None


def unique_slugs(texts: Iterable[str]) -> list[str]:
    """Slugs for *texts* in order, disambiguating repeats with a numeric suffix."""
    counts: dict[str, int] = {}
    slugs: list[str] = []
    for text in texts:
        slug = normalize_id(strip_inline_markup(text))
        seen = counts.get(slug)
        if seen is None:
            counts[slug] = 0
            slugs.append(slug)
        else:
            counts[slug] = seen + 1
            slugs.append(f"{slug}-{seen + 1}")
    return slugs


def page_anchors(content: str) -> set[str]:
    """Every fragment a link into *content* may target."""
    anchors: set[str] = set()
    generated: list[str] = []
    for text, explicit in iter_headings(content):
        if explicit is not None:
            anchors.add(explicit)
        else:
            generated.append(text)
    anchors.update(unique_slugs(generated))
    for match in _HTML_ANCHOR_RE.finditer(mask_code(content)):
        anchors.add(match.group(1) if match.group(1) is not None else match.group(2))
    return anchors
