from __future__ import annotations

import pytest

from hashly.entry import ManifestEntry
from hashly.errors import ConfigurationError, PluginError
from hashly.plugins import ImageSizePlugin, apply_plugins, load_plugin


class StampPlugin:
    def process_file(self, entry):
        return {"stamp": entry.hash_code}


stamp = StampPlugin()


def _entry(path: str) -> ManifestEntry:
    return ManifestEntry(
        path="/x", hashed_path="/x-hc00000000", path_physical=path, hash_code="00000000"
    )


def test_image_size_plugin(tmp_path) -> None:
    from PIL import Image

    path = tmp_path / "pixel.png"
    Image.new("RGB", (3, 2)).save(path)

    assert ImageSizePlugin().process_file(_entry(str(path))) == {"width": 3, "height": 2}
    assert ImageSizePlugin().process_file(_entry(str(tmp_path / "a.css"))) is None


def test_image_size_plugin_reports_broken_images(tmp_path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"not a png")
    with pytest.raises(PluginError):
        ImageSizePlugin().process_file(_entry(str(path)))


def test_load_plugin_variants() -> None:
    assert isinstance(load_plugin("image-size"), ImageSizePlugin)
    assert isinstance(load_plugin("test_plugins:StampPlugin"), StampPlugin)
    assert load_plugin("test_plugins:stamp") is stamp
    assert load_plugin(stamp) is stamp


@pytest.mark.parametrize(
    "spec", ["nonsense", "no_such_module_xyz:Thing", "test_plugins:Missing", "test_plugins:_entry"]
)
def test_load_plugin_errors(spec) -> None:
    with pytest.raises(ConfigurationError):
        load_plugin(spec)


def test_apply_plugins_last_write_wins() -> None:
    class A:
        def process_file(self, entry):
            return {"k": "a", "only_a": 1}

    class B:
        def process_file(self, entry):
            return {"k": "b"}

    class Nothing:
        def process_file(self, entry):
            return None

    entry = apply_plugins(_entry("/tmp/x"), [A(), Nothing(), B()])
    assert entry.extra == {"k": "b", "only_a": 1}
