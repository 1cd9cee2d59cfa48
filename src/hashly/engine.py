"""
Manifest reconciliation: hashes each eligible file, copies it to its hashed
location, rewrites stylesheet references, and reuses entries from a previous
manifest when their hashed path is unchanged.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from . import css, fsutil, hashcode, hashpattern
from .config import HashlyOptions
from .entry import ManifestEntry
from .errors import (
    ConfigurationError,
    ContainmentError,
    FileProcessingError,
    ReferenceCycleError,
)
from .filters import build_exclusion_filter
from .plugins import apply_plugins
from .serializers import Serializer, get_serializer

log = logging.getLogger(__name__)

SKIP_HASHED = "hashed"
SKIP_EXCLUDED = "excluded"

LOG_SEPARATOR = "---------------------"


@dataclass
class Session:
    """State for one reconciliation run."""

    manifest: list[ManifestEntry] = field(default_factory=list)
    lookup: dict[str, ManifestEntry] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)
    # paths that already failed this run; not retried when referenced again
    failed: set[str] = field(default_factory=set)
    # stylesheets currently being rewritten, guards against reference cycles
    in_progress: set[str] = field(default_factory=set)


@dataclass
class ProcessResult:
    exit_code: int
    manifest_path: str
    manifest: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Reconciler:
    def __init__(self, options: HashlyOptions | None = None):
        self.options = options or HashlyOptions()
        self._filters: dict[str, Any] = {}

    def _should_exclude(self, path: str, base_dir: str) -> bool:
        if base_dir not in self._filters:
            self._filters[base_dir] = build_exclusion_filter(
                self.options.include, self.options.exclude, base_dir
            )
        predicate = self._filters[base_dir]
        return bool(predicate and predicate(path))

    def _is_css(self, path: str) -> bool:
        return self.options.process_css and os.path.splitext(path)[1].lower() == ".css"

    def _skip(self, session: Session, path: str, reason: str) -> None:
        log.debug("skip (%s): %s", reason, path)
        session.skipped.append((path, reason))

    def build_entry(
        self,
        path: str,
        base_dir: str,
        target_dir: str,
        hash_code: str | None = None,
    ) -> ManifestEntry:
        """Compute the manifest entry for `path`; nothing is copied here."""
        if not fsutil.is_within(path, base_dir):
            raise ContainmentError(path, base_dir)

        relative = os.path.relpath(path, base_dir)
        hash_code = hash_code or hashcode.generate_for_file(
            path, quick=self.options.quick_hash
        )
        hashed_physical = hashpattern.get_hashed_path(
            path, base_dir, target_dir, hash_code
        )
        hashed_relative = os.path.relpath(hashed_physical, target_dir)

        entry = ManifestEntry(
            path="/" + fsutil.ensure_url_separators(relative),
            hashed_path="/" + fsutil.ensure_url_separators(hashed_relative),
            path_physical=path,
            hashed_path_physical=hashed_physical,
            hash_code=hash_code,
        )
        return apply_plugins(entry, self.options.plugins)

    def build_css_entry(
        self, path: str, base_dir: str, target_dir: str, session: Session
    ) -> ManifestEntry:
        """
        Rewrite the asset references in a stylesheet to their hashed paths
        and hash the rewritten text, so the stylesheet's name changes
        whenever anything it references changes.
        """
        css_dir = os.path.dirname(path)
        # directory the hashed stylesheet will be written to
        css_target_dir = os.path.normpath(
            os.path.join(target_dir, os.path.relpath(css_dir, base_dir))
        )

        def resolve(reference: str) -> str:
            root_relative = reference.startswith("/")
            if root_relative:
                parts = [p for p in reference.split("/") if p]
                ref_path = os.path.normpath(os.path.join(base_dir, *parts))
            else:
                ref_path = os.path.normpath(os.path.join(css_dir, reference))

            if not os.path.isfile(ref_path):
                log.debug("unresolved reference in %s: %s", path, reference)
                return reference

            ref_entry = self.process_entry(ref_path, base_dir, target_dir, session)
            if ref_entry is None:
                return reference
            if root_relative:
                return ref_entry.hashed_path
            return fsutil.ensure_url_separators(
                os.path.relpath(ref_entry.hashed_path_physical, css_target_dir)
            )

        transformed = css.process_css(fsutil.read_text(path), resolve)
        entry = self.build_entry(
            path,
            base_dir,
            target_dir,
            hash_code=hashcode.generate(transformed, quick=self.options.quick_hash),
        )
        entry.transformed_text = transformed
        return entry

    def process_entry(
        self, path: str, base_dir: str, target_dir: str, session: Session
    ) -> ManifestEntry | None:
        path = os.path.abspath(path)

        existing = session.lookup.get(path)
        if existing is not None and not existing.unverified:
            return existing

        if path in session.failed:
            return None

        if not fsutil.is_within(path, base_dir):
            raise ContainmentError(path, base_dir)

        if hashpattern.is_hashed_file(path):
            self._skip(session, path, SKIP_HASHED)
            return None

        if self._should_exclude(path, base_dir):
            self._skip(session, path, SKIP_EXCLUDED)
            return None

        try:
            if path in session.in_progress:
                raise ReferenceCycleError(path)
            session.in_progress.add(path)
            try:
                if self._is_css(path):
                    entry = self.build_css_entry(path, base_dir, target_dir, session)
                else:
                    entry = self.build_entry(path, base_dir, target_dir)
            finally:
                session.in_progress.discard(path)

            self.options.log(f"{path} > {entry.hashed_path_physical}")

            # unchanged since the previous run: keep the carried-over entry
            if existing is not None and existing.hashed_path == entry.hashed_path:
                existing.unverified = False
                return existing

            if entry.transformed_text is not None:
                fsutil.write_text(entry.hashed_path_physical, entry.transformed_text)
                entry.transformed_text = None
            else:
                fsutil.copy_file(entry.path_physical, entry.hashed_path_physical)

            if existing is not None:
                # content changed; the fresh entry takes the stale one's place
                index = next(i for i, e in enumerate(session.manifest) if e is existing)
                session.manifest[index] = entry
            else:
                session.manifest.append(entry)
            session.lookup[path] = entry
            return entry
        except Exception as exc:
            if not self.options.continue_on_error:
                if isinstance(exc, FileProcessingError):
                    raise
                raise FileProcessingError(path, exc) from exc

            cause = exc.cause if isinstance(exc, FileProcessingError) else exc
            msg = f"ERROR: {path}: {cause}"
            if path not in session.in_progress:
                session.failed.add(path)
            self.options.error(msg)
            session.errors.append(msg)
            return None

    def reconcile(
        self,
        files: Iterable[str],
        base_dir: str,
        target_dir: str,
        existing: Iterable[ManifestEntry] | None = None,
    ) -> Session:
        base_dir = os.path.abspath(base_dir)
        target_dir = os.path.abspath(target_dir)
        session = Session()

        # carried-over entries start unverified; a matching hashed path
        # computed this run confirms them without copying again
        for previous in existing or ():
            carried = replace(previous, unverified=True, extra=dict(previous.extra))
            session.manifest.append(carried)
            if carried.path_physical:
                session.lookup[os.path.abspath(carried.path_physical)] = carried

        for path in files:
            self.process_entry(path, base_dir, target_dir, session)

        return session


def reconcile(
    files: Iterable[str],
    base_dir: str,
    target_dir: str,
    existing: Iterable[ManifestEntry] | None = None,
    options: HashlyOptions | None = None,
) -> Session:
    return Reconciler(options).reconcile(files, base_dir, target_dir, existing)


def get_manifest_path(
    directory: str, serializer: Serializer, options: HashlyOptions
) -> str:
    if options.manifest_path:
        return os.path.abspath(options.manifest_path)
    return os.path.join(os.path.abspath(directory), "manifest" + serializer.extension)


def trim_manifest(entries: Iterable[ManifestEntry]) -> list[dict[str, Any]]:
    """Drop run-local fields and sort by virtual path."""
    return [entry.to_record() for entry in sorted(entries, key=lambda e: e.path)]


def load_manifest(
    manifest_path: str, serializer: Serializer, base_dir: str, target_dir: str
) -> list[ManifestEntry] | None:
    if not os.path.exists(manifest_path):
        return None
    records = serializer.parse(fsutil.read_text(manifest_path))
    return [ManifestEntry.from_record(r, base_dir, target_dir) for r in records]


def process_files(
    files: Iterable[str] | None,
    base_dir: str,
    target_dir: str,
    options: HashlyOptions | None = None,
) -> ProcessResult:
    """
    Hash and copy `files` from `base_dir` into `target_dir` and write the
    manifest. Per-file failures are collected when `continue_on_error` is
    set; otherwise the first one is raised and no manifest is written.
    """
    if files is None:
        raise ConfigurationError("No files specified")

    options = options or HashlyOptions()
    base_dir = os.path.abspath(base_dir)
    target_dir = os.path.abspath(target_dir)

    if not os.path.isdir(base_dir):
        raise ConfigurationError(f"The source directory '{base_dir}' doesn't exist.")

    serializer = get_serializer(options.manifest_format)

    options.log(LOG_SEPARATOR)
    options.log(f"Processing directory: {base_dir} > {target_dir}")
    if options.include:
        options.log(f"include: {', '.join(options.include)}")
    if options.exclude:
        options.log(f"exclude: {', '.join(options.exclude)}")
    options.log(f"manifest format: {serializer.name}")
    options.log(LOG_SEPARATOR)

    manifest_path = get_manifest_path(target_dir, serializer, options)

    existing = None
    if options.amend:
        existing = load_manifest(manifest_path, serializer, base_dir, target_dir)

    # a stale manifest must not survive a run that fails halfway
    fsutil.delete(manifest_path)

    candidates = [os.path.abspath(f) for f in files]
    candidates = [f for f in candidates if f != manifest_path]

    session = Reconciler(options).reconcile(candidates, base_dir, target_dir, existing)

    records = trim_manifest(session.manifest)
    options.log(f"Writing manifest: {manifest_path}")
    fsutil.write_text(manifest_path, serializer.serialize(records))

    options.log(LOG_SEPARATOR)
    if session.errors:
        options.log("Errors found: ")
        for msg in session.errors:
            options.log(msg)
    else:
        options.log("Success")

    return ProcessResult(
        exit_code=1 if session.errors else 0,
        manifest_path=manifest_path,
        manifest=records,
        errors=list(session.errors),
        skipped=list(session.skipped),
    )


def process_directory(
    source_dir: str,
    target_dir: str | None = None,
    options: HashlyOptions | None = None,
) -> ProcessResult:
    if not os.path.isdir(source_dir):
        raise ConfigurationError(
            f"The source directory '{os.path.abspath(source_dir)}' doesn't exist."
        )
    files = fsutil.recurse_dir(source_dir)
    return process_files(files, source_dir, target_dir or source_dir, options)
