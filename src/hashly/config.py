from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Sequence

from .errors import ConfigurationError

log = logging.getLogger(__name__)


def _default_logger(message: str) -> None:
    log.info(message)


def _default_log_error(message: str) -> None:
    log.error(message)


@dataclass
class HashlyOptions:
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    manifest_format: str | None = None
    manifest_path: str | None = None
    amend: bool = False
    continue_on_error: bool = False
    quick_hash: bool = False
    process_css: bool = True
    # objects with a process_file(entry) method, applied in order
    plugins: Sequence[Any] = field(default_factory=list)
    logger: Callable[[str], None] | None = _default_logger
    log_error: Callable[[str], None] | None = _default_log_error
    clean_old_days: int | None = None

    def log(self, message: str) -> None:
        if self.logger:
            self.logger(message)

    def error(self, message: str) -> None:
        if self.log_error:
            self.log_error(message)


# keys accepted in the YAML config file
_FILE_KEYS = {
    "include",
    "exclude",
    "manifest_format",
    "manifest_path",
    "amend",
    "continue_on_error",
    "quick_hash",
    "process_css",
    "plugins",
    "clean_old_days",
}


def get_config_path(custom_path=None):
    if custom_path:
        return custom_path
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(xdg_config_home, "hashly", "config.yaml")


def read_config(custom_path=None) -> dict[str, Any]:
    import yaml

    config_path = get_config_path(custom_path)
    try:
        with open(config_path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except FileNotFoundError:
        if custom_path:
            raise ConfigurationError(f"Config file '{custom_path}' doesn't exist.")
        return {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")
    return normalize_config(data, source=config_path)


def normalize_config(data: dict[str, Any], *, source: str = "config") -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).strip().replace("-", "_")
        if key == "ignore_errors":
            key = "continue_on_error"
        if key not in _FILE_KEYS:
            raise ConfigurationError(f"{source}: unknown option '{raw_key}'")
        if key in ("include", "exclude", "plugins") and isinstance(value, str):
            value = [value]
        if key == "clean_old_days" and value is not None:
            try:
                value = int(value)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(
                    f"{source}: 'clean-old-days' must be an integer"
                ) from exc
        normalized[key] = value
    return normalized


def build_options(
    file_config: dict[str, Any] | None = None, **overrides: Any
) -> HashlyOptions:
    """
    Merge config-file values with explicit overrides. Overrides set to None
    are treated as "not given" so file values survive.
    """
    valid = {f.name for f in fields(HashlyOptions)}
    values: dict[str, Any] = {}
    for source in (file_config or {}, overrides):
        for key, value in source.items():
            if key not in valid:
                raise ConfigurationError(f"Unknown option '{key}'")
            if value is None:
                continue
            values[key] = value

    if "plugins" in values:
        from .plugins import load_plugins

        values["plugins"] = load_plugins(values["plugins"])

    return replace(HashlyOptions(), **values)
