from __future__ import annotations

import os
from datetime import datetime, timedelta

from . import fsutil, hashpattern
from .config import HashlyOptions
from .engine import LOG_SEPARATOR, get_manifest_path, load_manifest
from .serializers import get_serializer


def _delete(path: str, options: HashlyOptions) -> bool:
    options.log(f"Deleting {path}...")
    return fsutil.delete(path)


def clean(directory: str, options: HashlyOptions | None = None) -> list[str]:
    """Delete the manifest and every hashed file below `directory`."""
    options = options or HashlyOptions()
    serializer = get_serializer(options.manifest_format)

    options.log(LOG_SEPARATOR)
    options.log(f"Cleaning directory: {directory}")
    options.log(LOG_SEPARATOR)

    deleted = []
    manifest_path = get_manifest_path(directory, serializer, options)
    if os.path.exists(manifest_path) and _delete(manifest_path, options):
        deleted.append(manifest_path)

    if not os.path.isdir(directory):
        return deleted

    for path in fsutil.recurse_dir(directory):
        if hashpattern.is_hashed_file(path) and _delete(path, options):
            deleted.append(path)
    return deleted


def clean_old(directory: str, options: HashlyOptions | None = None) -> list[str]:
    """
    Delete hashed files below `directory` that the current manifest does not
    reference. With `clean_old_days` set, only files last modified more than
    that many days ago are removed.
    """
    options = options or HashlyOptions()
    serializer = get_serializer(options.manifest_format)
    days = options.clean_old_days or 0

    options.log(LOG_SEPARATOR)
    options.log(
        f"Cleaning non-manifest files older than {days} days in directory: {directory}"
    )
    options.log(LOG_SEPARATOR)

    directory = os.path.abspath(directory)
    manifest_path = get_manifest_path(directory, serializer, options)
    entries = load_manifest(manifest_path, serializer, directory, directory) or []
    referenced = {os.path.normcase(e.hashed_path_physical) for e in entries}

    oldest_allowed = (datetime.now() - timedelta(days=days)).timestamp()

    deleted = []
    if not os.path.isdir(directory):
        return deleted

    for path in fsutil.recurse_dir(directory):
        if not hashpattern.is_hashed_file(path):
            continue
        if os.path.normcase(os.path.abspath(path)) in referenced:
            continue
        if days > 0 and os.stat(path).st_mtime >= oldest_allowed:
            continue
        if _delete(path, options):
            deleted.append(path)
    return deleted
