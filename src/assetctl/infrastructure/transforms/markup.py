"""HTML whitespace collapsing.

Text between tags has runs of whitespace collapsed to one space, and
whitespace next to block-level tags is dropped entirely. Tags themselves,
comments, and the bodies of ``pre``/``textarea``/``script``/``style`` are
left byte-for-byte intact.
"""

from __future__ import annotations

import re

_PRESERVED_RE = re.compile(
    r"<(pre|textarea|script|style)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_TAG_RE = re.compile(r"(<!--.*?-->|<[^>]+>)", re.DOTALL)
_WS_RE = re.compile(r"\s+")

_BLOCK_TAGS = (
    "html|head|body|title|meta|link|base|div|p|ul|ol|li|dl|dt|dd|section|article|"
    "aside|header|footer|nav|main|figure|figcaption|table|thead|tbody|tfoot|tr|td|th|"
    "caption|colgroup|col|form|fieldset|legend|h[1-6]|hr|br|blockquote|address|"
    "details|summary|dialog|noscript|template|option|optgroup|select|picture|source|"
    "video|audio|canvas|svg|iframe|pre|textarea|script|style"
)
_BLOCK_EDGE_RE = re.compile(
    rf"\s*(<!doctype[^>]*>|</?(?:{_BLOCK_TAGS})\b[^>]*>)\s*",
    re.IGNORECASE,
)


def _collapse(segment: str) -> str:
    parts = _TAG_RE.split(segment)
    # Odd indices are tags/comments, even indices are text.
    for i in range(0, len(parts), 2):
        parts[i] = _WS_RE.sub(" ", parts[i])
    return _BLOCK_EDGE_RE.sub(r"\1", "".join(parts))


def collapse_whitespace(markup: str) -> str:
    """Minify *markup* by collapsing insignificant whitespace."""
    out: list[str] = []
    pos = 0
    for match in _PRESERVED_RE.finditer(markup):
        out.append(_collapse(markup[pos : match.start()]).rstrip())
        out.append(match.group(0))
        pos = match.end()
        # Whitespace after a preserved block-level element is insignificant.
        while pos < len(markup) and markup[pos].isspace():
            pos += 1
    out.append(_collapse(markup[pos:]))
    return "".join(out).strip()
