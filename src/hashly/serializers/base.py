from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..entry import HASHED_PATH_KEY, PATH_KEY
from ..errors import ManifestFormatError


@dataclass(frozen=True)
class Serializer:
    name: str
    extension: str
    parse: Callable[[str], list[dict[str, Any]]]
    serialize: Callable[[list[dict[str, Any]]], str]


def validate_records(data: Any, *, source: str) -> list[dict[str, Any]]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ManifestFormatError(f"{source} manifest must be a list of entries")
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ManifestFormatError(f"{source} manifest entry {i} must be a mapping")
        for key in (PATH_KEY, HASHED_PATH_KEY):
            if not isinstance(record.get(key), str):
                raise ManifestFormatError(
                    f"{source} manifest entry {i} is missing '{key}'"
                )
    return data
