"""Scan configuration — immutable value objects and the two-tier loader.

Configuration is read from the scan root::

    .todoscan.json          shared, usually committed
    .todoscan.local.json    local override, usually git-ignored

Each tier overrides the one beneath it key by key; the ``pattern`` object
is merged field by field.  Missing files are not an error.  A file that
cannot be read, parsed or validated is logged and skipped.
"""

from __future__ import annotations

import codecs
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema

from todo_scan.contracts.load import validate_instance

_logger = logging.getLogger(__name__)

SHARED_CONFIG_NAME = ".todoscan.json"
LOCAL_CONFIG_NAME = ".todoscan.local.json"
CONFIG_SCHEMA = "todoscan_config.schema.json"

_DEFAULT_DIRECTORY_EXCEPTIONS = frozenset(
    {
        "vendor",
        "node_modules",
        ".git",
        "sass",
        "js",
        "Migrations",
    }
)


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


@dataclass(frozen=True)
class PatternConfig:
    """How a candidate line is recognised."""

    regex: str = r"\btodo\b"
    limit: int = 300              # max line length eligible for matching
    case_sensitive: bool = False

    def compile(self) -> re.Pattern[str]:
        try:
            return re.compile(self.regex)
        except re.error as exc:
            raise ConfigError(f"Invalid pattern regex {self.regex!r}: {exc}") from exc


@dataclass(frozen=True)
class ScanConfig:
    """Immutable scan configuration, passed explicitly to the walker."""

    pattern: PatternConfig = field(default_factory=PatternConfig)
    encoding: str = "utf-8"
    directory_exceptions: frozenset[str] = _DEFAULT_DIRECTORY_EXCEPTIONS
    file_exceptions: frozenset[str] = frozenset()
    time_warning: float = 10.0    # seconds, presentation only
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        # Fail fast rather than once per file.
        self.pattern.compile()
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ConfigError(f"Unknown encoding {self.encoding!r}") from exc

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanConfig:
        """Build a config from the JSON file shape, defaults filling gaps."""
        defaults = PatternConfig()
        pattern = data.get("pattern", {})
        return cls(
            pattern=PatternConfig(
                regex=pattern.get("regex", defaults.regex),
                limit=pattern.get("limit", defaults.limit),
                case_sensitive=pattern.get("caseSensitive", defaults.case_sensitive),
            ),
            encoding=data.get("encoding", "utf-8"),
            directory_exceptions=frozenset(
                data.get("directoryExceptions", _DEFAULT_DIRECTORY_EXCEPTIONS)
            ),
            file_exceptions=frozenset(data.get("fileExceptions", ())),
            time_warning=data.get("timeWarning", 10.0),
            follow_symlinks=data.get("followSymlinks", False),
        )

    def to_dict(self) -> dict[str, Any]:
        """Inverse of :meth:`from_dict`; collections are sorted."""
        return {
            "pattern": {
                "regex": self.pattern.regex,
                "limit": self.pattern.limit,
                "caseSensitive": self.pattern.case_sensitive,
            },
            "encoding": self.encoding,
            "directoryExceptions": sorted(self.directory_exceptions),
            "fileExceptions": sorted(self.file_exceptions),
            "timeWarning": self.time_warning,
            "followSymlinks": self.follow_symlinks,
        }


def merge_config_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return *base* overridden by *override*; ``pattern`` merges per field."""
    merged = dict(base)
    for key, value in override.items():
        if key == "pattern" and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def read_config_file(path: Path) -> dict[str, Any] | None:
    """Load and validate one config file; ``None`` if missing or unusable."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        validate_instance(data, CONFIG_SCHEMA)
    except (OSError, ValueError, jsonschema.ValidationError) as exc:
        _logger.error("Error reading or parsing config %s: %s", path, exc)
        return None
    return data


def load_config(root: Path) -> ScanConfig:
    """Merge defaults, the shared file and the local file found in *root*."""
    merged: dict[str, Any] = ScanConfig().to_dict()
    for name in (SHARED_CONFIG_NAME, LOCAL_CONFIG_NAME):
        data = read_config_file(root / name)
        if data is not None:
            _logger.debug("Loaded config %s", root / name)
            merged = merge_config_dicts(merged, data)
    return ScanConfig.from_dict(merged)
