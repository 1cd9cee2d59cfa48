from __future__ import annotations


def process_directory(
    source_dir: str,
    target_dir: str | None = None,
    *,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    manifest_format: str | None = None,
    manifest_path: str | None = None,
    amend: bool = False,
    ignore_errors: bool = False,
    quick_hash: bool = False,
    process_css: bool = True,
    plugins: list | None = None,
):
    from .config import build_options
    from .engine import process_directory as _process_directory

    options = build_options(
        include=include,
        exclude=exclude,
        manifest_format=manifest_format,
        manifest_path=manifest_path,
        amend=amend,
        continue_on_error=ignore_errors,
        quick_hash=quick_hash,
        process_css=process_css,
        plugins=plugins,
    )
    return _process_directory(source_dir, target_dir, options)


def process_files(files: list[str], source_dir: str, target_dir: str, options=None):
    from .engine import process_files as _process_files

    return _process_files(files, source_dir, target_dir, options)


def clean(
    directory: str,
    *,
    manifest_format: str | None = None,
    manifest_path: str | None = None,
) -> list[str]:
    from .cleanup import clean as _clean
    from .config import build_options

    options = build_options(manifest_format=manifest_format, manifest_path=manifest_path)
    return _clean(directory, options)


def clean_old(
    directory: str,
    *,
    days: int | None = None,
    manifest_format: str | None = None,
    manifest_path: str | None = None,
) -> list[str]:
    from .cleanup import clean_old as _clean_old
    from .config import build_options

    options = build_options(
        clean_old_days=days,
        manifest_format=manifest_format,
        manifest_path=manifest_path,
    )
    return _clean_old(directory, options)


__all__ = [
    "process_directory",
    "process_files",
    "clean",
    "clean_old",
]
