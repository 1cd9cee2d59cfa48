from __future__ import annotations

import os

from hashly import hashcode, hashpattern


def test_hashed_path_mirrors_source_layout(tmp_path) -> None:
    src = str(tmp_path / "src")
    dist = str(tmp_path / "dist")
    path = os.path.join(src, "img", "logo.png")

    hashed = hashpattern.get_hashed_path(path, src, dist, "0123456789abcdef")

    assert hashed == os.path.join(dist, "img", "logo-hc0123456789abcdef.png")


def test_hashed_name_keeps_inner_dots() -> None:
    hashed = hashpattern.get_hashed_file_name("/a/app.min.js", "/out", "deadbeef")
    assert os.path.basename(hashed) == "app.min-hcdeadbeef.js"


def test_is_hashed_file_recognizes_own_output() -> None:
    name = hashpattern.get_hashed_file_name("/a/site.css", "/out", hashcode.generate("x"))
    assert hashpattern.is_hashed_file(name)
    assert hashpattern.is_hashed_file("/out/LICENSE-hc0123456789abcdef")


def test_is_hashed_file_ignores_plain_names() -> None:
    assert not hashpattern.is_hashed_file("/out/manifest.json")
    assert not hashpattern.is_hashed_file("/out/archive-hc.png")
    assert not hashpattern.is_hashed_file("/out/the-hcbook.txt")
    assert not hashpattern.is_hashed_file("/out-hcdeadbeef00/file.txt")


def test_quick_hash_uses_xxhash() -> None:
    import xxhash

    assert hashcode.generate(b"hello", quick=True) == xxhash.xxh64(b"hello").hexdigest()
    assert hashcode.generate("hello") == hashcode.generate(b"hello")


def test_generate_for_file_matches_in_memory_hash(tmp_path) -> None:
    path = tmp_path / "data.bin"
    path.write_bytes(b"abc" * 1000)
    assert hashcode.generate_for_file(str(path)) == hashcode.generate(b"abc" * 1000)
