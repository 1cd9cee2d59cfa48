from __future__ import annotations

import pytest

from hashly.errors import ConfigurationError, ManifestFormatError
from hashly.serializers import get_serializer, supported_formats

RECORDS = [
    {"path": "/a.txt", "hashedPath": "/a-hc1234abcd.txt"},
    {"path": "/img.png", "hashedPath": "/img-hcabcd1234.png", "width": 2, "height": 3},
]


@pytest.mark.parametrize("name", ["json", "yaml"])
def test_parse_reads_serialized_output(name) -> None:
    serializer = get_serializer(name)
    assert serializer.parse(serializer.serialize(RECORDS)) == RECORDS


def test_json_is_default_and_keeps_key_order() -> None:
    serializer = get_serializer()
    assert serializer.name == "json"
    assert serializer.extension == ".json"
    text = serializer.serialize(RECORDS)
    assert text.index('"path"') < text.index('"hashedPath"')
    assert text.endswith("\n")


def test_yml_alias_and_supported_formats() -> None:
    assert get_serializer("YML").extension == ".yaml"
    assert supported_formats() == ["json", "yaml"]


def test_unknown_format_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        get_serializer("xml")


def test_invalid_manifest_content() -> None:
    serializer = get_serializer("json")
    with pytest.raises(ManifestFormatError):
        serializer.parse("{not json")
    with pytest.raises(ManifestFormatError):
        serializer.parse('{"path": "/a"}')
    with pytest.raises(ManifestFormatError):
        serializer.parse('[{"path": "/a"}]')
    assert serializer.parse("") == []
