from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from hashly.config import HashlyOptions


def md5(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data).hexdigest()


def quiet_options(**kwargs) -> HashlyOptions:
    kwargs.setdefault("logger", None)
    kwargs.setdefault("log_error", None)
    return HashlyOptions(**kwargs)


@pytest.fixture
def site(tmp_path: Path) -> tuple[Path, Path]:
    src = tmp_path / "src"
    dist = tmp_path / "dist"
    src.mkdir()
    (src / "a.txt").write_text("hello", encoding="utf-8")
    (src / "style.css").write_text("background: url(img.png)", encoding="utf-8")
    (src / "img.png").write_bytes(b"X")
    return src, dist


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
