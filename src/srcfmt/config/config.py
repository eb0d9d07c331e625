"""Configuration management for srcfmt."""

from __future__ import annotations

import codecs
import locale
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from srcfmt.config.paths import (
    PYPROJECT_FILE_NAME,
    cache_store_path,
    default_config_path,
    resolve_against,
)
from srcfmt.features.formatting.domain.errors import ConfigError
from srcfmt.features.formatting.domain.line_ending import LineEnding
from srcfmt.features.formatting.engines.base import FormatterSettings
from srcfmt.features.formatting.engines.import_sorter import UnmatchedImports
from srcfmt.features.formatting.usecases.discovery import DEFAULT_INCLUDES
from srcfmt.platform.logging import logger


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


def _list_field(default: tuple[str, ...]) -> Any:
    return field(default_factory=lambda: list(default), metadata={"list": True})


@dataclass
class FormatterConfig:
    """Settings for one formatting run."""

    # Project root; relative paths below resolve against it
    base_dir: Path | None = _path_field()

    # Build output directory holding the hash cache store
    target_directory: Path | None = _path_field(Path("target"))

    # Source discovery
    directories: list[str] = _list_field(("src",))
    includes: list[str] = _list_field(DEFAULT_INCLUDES)
    excludes: list[str] = _list_field(())

    # Compiler levels layered under the formatter options
    compiler_source: str = "1.8"
    compiler_compliance: str = "1.8"
    compiler_target_platform: str = "1.8"

    # Text handling; None means the platform encoding
    encoding: str | None = None
    line_ending: LineEnding = LineEnding.AUTO

    # Formatter option files; unset means compiler defaults only
    config_file: Path | None = _path_field()
    config_js_file: Path | None = _path_field()

    # Java import grouping
    import_order_file: Path | None = _path_field()
    unmatched_imports: UnmatchedImports = UnmatchedImports.LAST

    skip: bool = False
    workers: int = 1
    log_file: Path | None = _path_field()

    def __post_init__(self) -> None:
        """Normalize raw TOML values into typed attributes.

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if f.metadata.get("path", False):
                if isinstance(value, str):
                    setattr(self, f.name, Path(value) if value.strip() else None)
                elif value is not None and not isinstance(value, Path):
                    raise ConfigError(f"'{f.name}' must be a path string")
            elif f.metadata.get("list", False):
                if isinstance(value, str):
                    setattr(self, f.name, [value])
                elif not isinstance(value, (list, tuple)) or not all(
                    isinstance(item, str) for item in value
                ):
                    raise ConfigError(f"'{f.name}' must be a list of strings")
                else:
                    setattr(self, f.name, list(value))

        if not isinstance(self.line_ending, LineEnding):
            self.line_ending = LineEnding.from_user_input(str(self.line_ending))
        if not isinstance(self.unmatched_imports, UnmatchedImports):
            self.unmatched_imports = UnmatchedImports.from_user_input(str(self.unmatched_imports))
        if isinstance(self.encoding, str) and not self.encoding.strip():
            self.encoding = None
        for name in ("compiler_source", "compiler_compliance", "compiler_target_platform"):
            value = getattr(self, name)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                setattr(self, name, str(value))
            elif not isinstance(value, str):
                raise ConfigError(f"'{name}' must be a version string")
        if not isinstance(self.skip, bool):
            raise ConfigError("'skip' must be true or false")
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigError(f"'workers' must be a positive integer, got {self.workers!r}")

    @property
    def project_dir(self) -> Path:
        """Absolute base directory (the current directory when unset)."""

        return (self.base_dir or Path.cwd()).expanduser().resolve()

    def resolve(self, path: Path | str) -> Path:
        return resolve_against(self.project_dir, path)

    @property
    def target_path(self) -> Path:
        return self.resolve(self.target_directory or Path("target"))

    @property
    def cache_store(self) -> Path:
        return cache_store_path(self.target_path)

    def source_directories(self) -> list[Path]:
        return [self.resolve(directory) for directory in self.directories]

    def resolve_encoding(self) -> str:
        """Return the validated codec name for reading and writing sources.

        Raises:
            ConfigError: If the configured encoding is not supported.
        """
        if self.encoding is None:
            platform_encoding = locale.getpreferredencoding(False)
            logger.warning(
                "File encoding has not been set, using platform encoding %s, "
                "i.e. build is platform dependent!",
                platform_encoding,
            )
            return codecs.lookup(platform_encoding).name
        try:
            return codecs.lookup(self.encoding).name
        except LookupError as exc:
            raise ConfigError(f"Encoding '{self.encoding}' is not supported") from exc

    def formatter_settings(self) -> FormatterSettings:
        return FormatterSettings(
            compiler_source=self.compiler_source,
            compiler_compliance=self.compiler_compliance,
            compiler_target_platform=self.compiler_target_platform,
        )

    def with_overrides(self, **overrides: Any) -> FormatterConfig:
        """Return a copy with non-``None`` overrides applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_mapping(cls, data: dict[str, Any], origin: Path | None = None) -> FormatterConfig:
        """Build a config from a TOML table.

        Relative ``base_dir`` values resolve against the directory holding
        ``origin``; without ``base_dir`` that directory becomes the base.

        Raises:
            ConfigError: If the table holds unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            where = f" in {origin}" if origin else ""
            raise ConfigError(f"Unknown configuration keys{where}: {', '.join(unknown)}")

        values = dict(data)
        if origin is not None:
            raw_base = values.get("base_dir")
            anchor = origin.parent
            values["base_dir"] = resolve_against(anchor, raw_base) if raw_base else anchor
        try:
            return cls(**values)
        except TypeError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def load(cls, config_path: Path | None = None, base_dir: Path | None = None) -> FormatterConfig:
        """Load configuration from file.

        An explicit ``config_path`` must exist. Otherwise ``srcfmt.toml`` and
        then ``[tool.srcfmt]`` in ``pyproject.toml`` under ``base_dir`` are
        tried; when neither exists the defaults apply.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        root = (base_dir or Path.cwd()).expanduser().resolve()

        if config_path is not None:
            path = resolve_against(root, config_path)
            if not path.is_file():
                raise ConfigError(f"Configuration file not found: {path}")
            config = cls.from_mapping(_read_toml(path), path)
            logger.info("Configuration loaded from %s", path)
            return config

        path = default_config_path(root)
        if path.is_file():
            config = cls.from_mapping(_read_toml(path), path)
            logger.info("Configuration loaded from %s", path)
            return config

        pyproject = root / PYPROJECT_FILE_NAME
        if pyproject.is_file():
            table = _read_toml(pyproject).get("tool", {}).get("srcfmt")
            if isinstance(table, dict):
                config = cls.from_mapping(table, pyproject)
                logger.info("Configuration loaded from [tool.srcfmt] in %s", pyproject)
                return config

        logger.debug("No configuration file found under %s, using defaults", root)
        return cls(base_dir=root)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


__all__ = ["FormatterConfig"]
