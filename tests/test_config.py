from __future__ import annotations

import pytest

from hashly.config import build_options, get_config_path, read_config
from hashly.errors import ConfigurationError
from hashly.plugins import ImageSizePlugin


def test_default_config_path_uses_xdg(tmp_path) -> None:
    assert get_config_path() == str(tmp_path / "xdg" / "hashly" / "config.yaml")
    assert read_config() == {}


def test_read_config_normalizes_keys(tmp_path) -> None:
    path = tmp_path / "hashly.yaml"
    path.write_text(
        "exclude: '*.map'\nignore-errors: true\nclean-old-days: '7'\nmanifest-format: yaml\n",
        encoding="utf-8",
    )

    assert read_config(str(path)) == {
        "exclude": ["*.map"],
        "continue_on_error": True,
        "clean_old_days": 7,
        "manifest_format": "yaml",
    }


def test_read_config_rejects_unknown_keys(tmp_path) -> None:
    path = tmp_path / "hashly.yaml"
    path.write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        read_config(str(path))


def test_explicit_missing_config_is_an_error(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        read_config(str(tmp_path / "missing.yaml"))


def test_overrides_win_and_none_keeps_file_value() -> None:
    options = build_options(
        {"amend": True, "quick_hash": True, "plugins": ["image-size"]},
        quick_hash=False,
        amend=None,
    )
    assert options.amend is True
    assert options.quick_hash is False
    assert isinstance(options.plugins[0], ImageSizePlugin)
    assert options.process_css is True


def test_build_options_rejects_unknown_option() -> None:
    with pytest.raises(ConfigurationError):
        build_options(colour="blue")
