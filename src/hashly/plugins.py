"""
Plugins contribute extra fields to manifest entries.

A plugin is any object with a ``process_file(entry)`` method returning a
mapping (or None). Plugins run in the order they are declared and their
fields are merged into ``entry.extra``; a later plugin overwrites fields set
by an earlier one.
"""

from __future__ import annotations

import importlib
import os
from typing import Any, Iterable, Mapping, Protocol

from .entry import RESERVED_KEYS, ManifestEntry
from .errors import ConfigurationError, PluginError


class Plugin(Protocol):
    def process_file(self, entry: ManifestEntry) -> Mapping[str, Any] | None: ...


def apply_plugins(entry: ManifestEntry, plugins: Iterable[Plugin]) -> ManifestEntry:
    for plugin in plugins:
        data = plugin.process_file(entry)
        if not data:
            continue
        reserved = RESERVED_KEYS.intersection(data)
        if reserved:
            name = type(plugin).__name__
            raise PluginError(
                f"Plugin {name} may not set reserved fields: {', '.join(sorted(reserved))}"
            )
        entry.extra.update(data)
    return entry


class ImageSizePlugin:
    """Adds `width` and `height` for raster images."""

    IMAGE_TYPES = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".webp"}

    def process_file(self, entry: ManifestEntry) -> dict[str, int] | None:
        path = entry.path_physical
        if not path:
            return None
        ext = os.path.splitext(path)[1].lower()
        if ext not in self.IMAGE_TYPES:
            return None

        from PIL import Image

        try:
            with Image.open(path) as image:
                width, height = image.size
        except OSError as exc:
            raise PluginError(f"Unable to read image size: {exc}") from exc
        return {"width": width, "height": height}


_BUILTIN_PLUGINS = {
    "image-size": ImageSizePlugin,
}


def load_plugin(spec: Any) -> Plugin:
    """
    Resolve a plugin from a built-in name (``image-size``), a
    ``module:attribute`` reference, or an object already providing
    ``process_file``. Classes are instantiated without arguments.
    """
    if not isinstance(spec, str):
        target = spec
    elif spec in _BUILTIN_PLUGINS:
        target = _BUILTIN_PLUGINS[spec]
    else:
        module_name, sep, attr = spec.partition(":")
        if not sep or not module_name or not attr:
            raise ConfigurationError(
                f"Invalid plugin '{spec}'; expected a built-in name or 'module:attribute'"
            )
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ConfigurationError(f"Cannot import plugin module '{module_name}': {exc}") from exc
        try:
            target = getattr(module, attr)
        except AttributeError as exc:
            raise ConfigurationError(f"Module '{module_name}' has no attribute '{attr}'") from exc

    if isinstance(target, type):
        target = target()
    if not callable(getattr(target, "process_file", None)):
        raise ConfigurationError(f"Plugin {spec!r} has no process_file method")
    return target


def load_plugins(specs: Iterable[Any]) -> list[Plugin]:
    return [load_plugin(spec) for spec in specs]
