from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

PATH_KEY = "path"
HASHED_PATH_KEY = "hashedPath"
RESERVED_KEYS = frozenset({PATH_KEY, HASHED_PATH_KEY})


@dataclass
class ManifestEntry:
    """
    One asset's record. `path` and `hashed_path` are root-relative virtual
    paths with forward slashes; the physical paths and hash code only live
    for the duration of a run and are dropped by `to_record`.
    """

    path: str
    hashed_path: str
    path_physical: str | None = None
    hashed_path_physical: str | None = None
    hash_code: str | None = None
    unverified: bool = False
    extra: dict[str, Any] = field(default_factory=dict)
    transformed_text: str | None = field(default=None, repr=False)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            PATH_KEY: self.path,
            HASHED_PATH_KEY: self.hashed_path,
        }
        record.update(self.extra)
        return record

    @classmethod
    def from_record(
        cls, record: dict[str, Any], source_base: str, target_base: str
    ) -> "ManifestEntry":
        path = record[PATH_KEY]
        hashed_path = record[HASHED_PATH_KEY]
        return cls(
            path=path,
            hashed_path=hashed_path,
            path_physical=_physical(source_base, path),
            hashed_path_physical=_physical(target_base, hashed_path),
            extra={k: v for k, v in record.items() if k not in RESERVED_KEYS},
        )


def _physical(base: str, virtual_path: str) -> str:
    parts = [p for p in virtual_path.split("/") if p]
    return os.path.normpath(os.path.join(os.path.abspath(base), *parts))
