from __future__ import annotations

from ..errors import ConfigurationError
from .base import Serializer, validate_records
from .json_format import JSON_SERIALIZER
from .yaml_format import YAML_SERIALIZER

DEFAULT_FORMAT = "json"

_SERIALIZERS: dict[str, Serializer] = {}


def register_serializer(serializer: Serializer) -> None:
    _SERIALIZERS[serializer.name] = serializer


def get_serializer(name: str | None = None) -> Serializer:
    key = (name or DEFAULT_FORMAT).strip().lower()
    if key == "yml":
        key = "yaml"
    serializer = _SERIALIZERS.get(key)
    if serializer is None:
        supported = ", ".join(supported_formats())
        raise ConfigurationError(
            f"Unknown manifest format '{name}'. Supported formats: {supported}"
        )
    return serializer


def supported_formats() -> list[str]:
    return sorted(_SERIALIZERS)


register_serializer(JSON_SERIALIZER)
register_serializer(YAML_SERIALIZER)

__all__ = [
    "DEFAULT_FORMAT",
    "Serializer",
    "get_serializer",
    "register_serializer",
    "supported_formats",
    "validate_records",
]
