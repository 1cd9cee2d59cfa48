"""Discovery and substitution of asset references inside stylesheets."""

from __future__ import annotations

import re
from typing import Callable

_URL_RE = re.compile(r"""url\(\s*(?P<quote>['"]?)(?P<ref>[^'")]*?)(?P=quote)\s*\)""", re.I)
_IMPORT_RE = re.compile(r"""@import\s+(?P<quote>['"])(?P<ref>[^'"]+)(?P=quote)""", re.I)
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)


def is_local_reference(ref: str) -> bool:
    """Return True for references that point at a file in the asset tree."""
    if not ref:
        return False
    if ref.startswith(("#", "//")):
        return False
    return not _SCHEME_RE.match(ref)


def split_suffix(ref: str) -> tuple[str, str]:
    """Split `font.woff?v=1#iefix` into ('font.woff', '?v=1#iefix')."""
    cut = len(ref)
    for ch in "?#":
        idx = ref.find(ch)
        if idx != -1:
            cut = min(cut, idx)
    return ref[:cut], ref[cut:]


def _comment_spans(text: str) -> list[tuple[int, int]]:
    return [m.span() for m in _COMMENT_RE.finditer(text)]


def _in_spans(pos: int, spans: list[tuple[int, int]]) -> bool:
    return any(start <= pos < end for start, end in spans)


def process_css(text: str, replace: Callable[[str], str]) -> str:
    """
    Call `replace(path)` for every local `url(...)` and `@import "..."`
    reference in `text` and substitute the result. Quotes and any
    query/fragment suffix are preserved. References inside comments are
    left alone.
    """
    comments = _comment_spans(text)

    def substitute(match: re.Match) -> str:
        if _in_spans(match.start(), comments):
            return match.group(0)
        raw = match.group("ref").strip()
        if not is_local_reference(raw):
            return match.group(0)
        path, suffix = split_suffix(raw)
        if not path:
            return match.group(0)
        new_path = replace(path)
        if new_path == path:
            return match.group(0)
        start, end = match.span("ref")
        whole_start = match.start()
        prefix = match.group(0)[: start - whole_start]
        rest = match.group(0)[end - whole_start :]
        return f"{prefix}{new_path}{suffix}{rest}"

    # @import "x.css" is matched separately; @import url(x.css) goes through _URL_RE
    text = _URL_RE.sub(substitute, text)
    comments = _comment_spans(text)
    return _IMPORT_RE.sub(substitute, text)
