from __future__ import annotations

import hashlib

_CHUNK_SIZE = 1024 * 1024


def _new_hasher(quick: bool):
    if quick:
        import xxhash

        return xxhash.xxh64()
    return hashlib.md5()


def generate(data: bytes | str, quick: bool = False) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    hasher = _new_hasher(quick)
    hasher.update(data)
    return hasher.hexdigest()


def generate_for_file(path: str, quick: bool = False) -> str:
    hasher = _new_hasher(quick)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()
