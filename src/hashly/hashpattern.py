"""Naming convention for hashed output files: ``<stem>-hc<hash><ext>``."""

from __future__ import annotations

import os
import re

HASH_MARKER = "-hc"

_HASHED_NAME_RE = re.compile(r"-hc[0-9a-f]{8,}(?:\.[^./\\]*)?$")


def get_hashed_file_name(path: str, target_dir: str, hash_code: str) -> str:
    basename = os.path.basename(path)
    stem, ext = os.path.splitext(basename)
    return os.path.join(target_dir, f"{stem}{HASH_MARKER}{hash_code}{ext}")


def get_hashed_path(
    path_physical: str, source_base: str, target_base: str, hash_code: str
) -> str:
    """
    Place the hashed name under `target_base`, mirroring the directory of
    `path_physical` relative to `source_base`.
    """
    relative = os.path.relpath(path_physical, source_base)
    target_dir = os.path.dirname(os.path.join(target_base, relative))
    return get_hashed_file_name(path_physical, target_dir, hash_code)


def is_hashed_file(path: str) -> bool:
    return bool(_HASHED_NAME_RE.search(os.path.basename(path)))
