from __future__ import annotations

from typing import Any

import yaml

from ..errors import ManifestFormatError
from .base import Serializer, validate_records


def _parse(text: str) -> list[dict[str, Any]]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestFormatError(f"Invalid YAML manifest: {exc}") from exc
    return validate_records(data, source="YAML")


def _serialize(records: list[dict[str, Any]]) -> str:
    if not records:
        return "[]\n"
    return yaml.safe_dump(
        records, sort_keys=False, allow_unicode=True, default_flow_style=False
    )


YAML_SERIALIZER = Serializer(
    name="yaml", extension=".yaml", parse=_parse, serialize=_serialize
)
