from __future__ import annotations

import os
from typing import Callable, Iterable

from pathspec import GitIgnoreSpec

from .fsutil import ensure_url_separators


def _as_list(patterns: str | Iterable[str] | None) -> list[str]:
    if not patterns:
        return []
    if isinstance(patterns, str):
        return [patterns]
    return [p for p in patterns if p]


def build_exclusion_filter(
    include: str | Iterable[str] | None,
    exclude: str | Iterable[str] | None,
    base_dir: str,
) -> Callable[[str], bool] | None:
    """
    Build a `should_exclude(path)` predicate from gitignore-style patterns,
    matched against the path relative to `base_dir`.

    Exclude patterns win over include patterns. When include patterns are
    given, a file must match at least one of them to be kept.
    """
    include_patterns = _as_list(include)
    exclude_patterns = _as_list(exclude)
    if not include_patterns and not exclude_patterns:
        return None

    include_spec = (
        GitIgnoreSpec.from_lines(include_patterns)
        if include_patterns
        else None
    )
    exclude_spec = (
        GitIgnoreSpec.from_lines(exclude_patterns)
        if exclude_patterns
        else None
    )
    base_dir = os.path.abspath(base_dir)

    def should_exclude(path: str) -> bool:
        relative = ensure_url_separators(
            os.path.relpath(os.path.abspath(path), base_dir)
        )
        if exclude_spec is not None and exclude_spec.match_file(relative):
            return True
        if include_spec is not None:
            return not include_spec.match_file(relative)
        return False

    return should_exclude
