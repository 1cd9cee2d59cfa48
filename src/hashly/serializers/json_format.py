from __future__ import annotations

import json
from typing import Any

from ..errors import ManifestFormatError
from .base import Serializer, validate_records


def _parse(text: str) -> list[dict[str, Any]]:
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestFormatError(f"Invalid JSON manifest: {exc}") from exc
    return validate_records(data, source="JSON")


def _serialize(records: list[dict[str, Any]]) -> str:
    return json.dumps(records, indent=2, ensure_ascii=False) + "\n"


JSON_SERIALIZER = Serializer(
    name="json", extension=".json", parse=_parse, serialize=_serialize
)
