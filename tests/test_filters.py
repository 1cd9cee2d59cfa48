from __future__ import annotations

import os
import warnings

from hashly.filters import build_exclusion_filter


def test_no_patterns_means_no_filter(tmp_path) -> None:
    assert build_exclusion_filter(None, [], str(tmp_path)) is None


def test_exclude_patterns_match_relative_paths(tmp_path) -> None:
    should_exclude = build_exclusion_filter(None, ["*.txt", "private/"], str(tmp_path))
    assert should_exclude(os.path.join(tmp_path, "notes.txt"))
    assert should_exclude(os.path.join(tmp_path, "private", "key.png"))
    assert not should_exclude(os.path.join(tmp_path, "img", "a.png"))


def test_include_restricts_and_exclude_wins(tmp_path) -> None:
    should_exclude = build_exclusion_filter("*.png", ["drafts/"], str(tmp_path))
    assert not should_exclude(os.path.join(tmp_path, "img", "a.png"))
    assert should_exclude(os.path.join(tmp_path, "a.css"))
    assert should_exclude(os.path.join(tmp_path, "drafts", "b.png"))


def test_building_filters_emits_no_deprecation_warnings(tmp_path) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        should_exclude = build_exclusion_filter(["*.css"], ["*.txt"], str(tmp_path))
    assert should_exclude(os.path.join(tmp_path, "a.txt"))
    assert not should_exclude(os.path.join(tmp_path, "a.css"))
