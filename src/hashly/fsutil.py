from __future__ import annotations

import os
import shutil


def ensure_url_separators(path: str) -> str:
    return path.replace(os.sep, "/")


def is_within(path: str, base_dir: str) -> bool:
    path = os.path.abspath(path)
    base_dir = os.path.abspath(base_dir)
    try:
        return os.path.commonpath([path, base_dir]) == base_dir
    except ValueError:
        # different drives on windows
        return False


def recurse_dir(directory: str) -> list[str]:
    """Return every file below `directory` in a stable, sorted order."""
    files = []
    for root, dirs, names in os.walk(directory):
        dirs.sort()
        for name in sorted(names):
            files.append(os.path.join(root, name))
    return files


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def copy_file(source: str, destination: str) -> None:
    _ensure_parent(destination)
    shutil.copyfile(source, destination)


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_text(path: str, content: str) -> None:
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def delete(path: str) -> bool:
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    return True
