"""Typed configuration for the BLP converter.

Use `ConverterConfig` to load, validate, and persist runtime settings.
"""

import dataclasses
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import List

import yaml

from .core.io import OUTPUT_FORMATS

logger = logging.getLogger("blp_converter.config")

_SUPPORTED_CONFIG_VERSION = 1
_MAX_JOBS = 128


@dataclass
class ConverterConfig:
    """Converter configuration; CLI flags override values loaded from YAML."""

    config_version: int = 1
    output_dir: str = "./"
    output_format: str = "png"
    # Levels past the end of a file's mip chain are clamped to its last level.
    mip_level: int = 0
    jobs: int = 0  # 0 = one per CPU
    infos: bool = False
    extensions: List[str] = field(default_factory=lambda: [".blp"])
    log_level: str = "INFO"
    log_file: str = ""
    show_progress: bool = True

    @classmethod
    def from_yaml(cls, path: str) -> "ConverterConfig":
        """Load a YAML config on top of the defaults.

        A missing file yields the defaults. Malformed YAML, a non-mapping
        document, or values that fail `validate` raise ValueError naming
        the file.
        """
        config = cls()
        if not os.path.exists(path):
            logger.info("No config at '%s'; using built-in defaults.", path)
            config.validate()
            return config

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: not valid YAML ({exc})") from exc
        if data is None:
            data = {}
        elif not isinstance(data, dict):
            raise ValueError(
                f"{path}: expected a mapping of settings, got {type(data).__name__}"
            )

        version = data.get("config_version", 1)
        if isinstance(version, int) and version > _SUPPORTED_CONFIG_VERSION:
            logger.warning(
                "'%s' declares config_version=%d; settings newer than "
                "version %d may be ignored.",
                path, version, _SUPPORTED_CONFIG_VERSION,
            )

        _apply_yaml_values(config, data)
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{path}: {exc}") from exc
        return config

    def to_yaml(self, path: str):
        """Write every setting to *path*, replacing it atomically."""
        body = yaml.safe_dump(dataclasses.asdict(self), default_flow_style=False,
                              sort_keys=False)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        tmp_path = f"{path}.{os.getpid()}.{threading.get_ident()}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write("# BLPConverter settings; command-line flags take precedence.\n")
                f.write(body)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def resolve_jobs(self) -> int:
        """Return the worker count, mapping 0 to the number of CPUs."""
        if self.jobs > 0:
            return self.jobs
        return os.cpu_count() or 1

    def validate(self):
        """Validate configuration values. Raises ValueError on invalid config."""
        errors = []

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_log_levels:
            errors.append(
                f"log_level must be one of {sorted(valid_log_levels)}, "
                f"got '{self.log_level}'"
            )

        if self.output_format.lower() not in OUTPUT_FORMATS:
            errors.append(
                f"output_format must be one of {sorted(OUTPUT_FORMATS)}, "
                f"got '{self.output_format}'"
            )

        if self.mip_level < 0:
            errors.append("mip_level must be >= 0")
        if self.jobs < 0:
            errors.append("jobs must be >= 0 (0 = one per CPU)")
        if self.jobs > _MAX_JOBS:
            errors.append(f"jobs must be <= {_MAX_JOBS}")

        if not self.extensions:
            errors.append(
                "extensions must not be empty -- no files would be converted"
            )
        for ext in self.extensions:
            if not isinstance(ext, str) or not ext.startswith("."):
                errors.append(f"extensions entries must start with '.', got {ext!r}")

        if not self.output_dir:
            errors.append("output_dir must not be empty")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n" +
                "\n".join(f"  - {e}" for e in errors)
            )

        self.output_format = self.output_format.lower()


def _coerce(name: str, value, default):
    """Return *value* converted to the type of *default*, or raise TypeError."""
    expected = type(default)
    if expected is int and isinstance(value, float) and value.is_integer():
        return int(value)
    # bool is an int subclass; a YAML `true` is not a level or a job count.
    if isinstance(value, bool) and expected is not bool:
        raise TypeError(name)
    if not isinstance(value, expected):
        raise TypeError(name)
    if expected is list:
        return list(value)
    return value


def _apply_yaml_values(config: ConverterConfig, data: dict):
    """Copy known keys from a YAML mapping onto *config*, warning on the rest."""
    defaults = {f.name: getattr(config, f.name) for f in dataclasses.fields(config)}
    for key, value in data.items():
        if key not in defaults:
            logger.warning("Unknown config key ignored: '%s'", key)
            continue
        default = defaults[key]
        if value is None:
            logger.warning("Config key '%s' is null; keeping default %r.", key, default)
            continue
        try:
            setattr(config, key, _coerce(key, value, default))
        except TypeError:
            logger.warning(
                "Config type mismatch for '%s': expected %s, got %s (%r). "
                "Keeping default.",
                key, type(default).__name__, type(value).__name__, value,
            )
