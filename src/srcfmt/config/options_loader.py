"""Summary: Load opaque formatter option sets from profile files.
Why: Formatters only see key/value maps, whatever file format holds them."""

from __future__ import annotations

import tomllib
import xml.etree.ElementTree as ElementTree
from collections.abc import Callable
from pathlib import Path

from srcfmt.config.paths import resolve_against
from srcfmt.features.formatting.domain.errors import ConfigError
from srcfmt.platform.logging import logger

Options = dict[str, str]


def _read_xml_profile(content: bytes, source: Path) -> Options:
    """Read ``<setting id=... value=...>`` entries of an Eclipse formatter profile."""

    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        raise ConfigError(f"Cannot parse config file [{source}]: {exc}") from exc

    options: Options = {}
    for setting in root.iter("setting"):
        key = setting.get("id")
        value = setting.get("value")
        if key is None or value is None:
            raise ConfigError(f"Config file [{source}] has a setting without id or value")
        options[key] = value
    if not options:
        raise ConfigError(f"Config file [{source}] does not define any setting")
    return options


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _read_toml(content: bytes, source: Path) -> Options:
    """Read flat TOML keys, or the ``[formatter]`` table when present."""

    try:
        data = tomllib.loads(content.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot parse config file [{source}]: {exc}") from exc

    table = data.get("formatter", data)
    if not isinstance(table, dict):
        raise ConfigError(f"Config file [{source}] must hold a table of options")

    options: Options = {}
    for key, value in table.items():
        if isinstance(value, (dict, list)):
            raise ConfigError(f"Option '{key}' in [{source}] must be a scalar")
        options[str(key)] = _stringify(value)
    return options


def _read_properties(content: bytes, source: Path) -> Options:
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Cannot parse config file [{source}]: {exc}") from exc

    options: Options = {}
    for number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        key, separator, value = line.partition("=")
        if not separator:
            raise ConfigError(f"Config file [{source}] line {number} is not a key=value pair")
        options[key.strip()] = value.strip()
    return options


_READERS: dict[str, Callable[[bytes, Path], Options]] = {
    ".xml": _read_xml_profile,
    ".toml": _read_toml,
    ".properties": _read_properties,
    ".prefs": _read_properties,
}


def load_formatter_options(config_file: Path | str | None, base_dir: Path) -> Options | None:
    """Load the option set stored in ``config_file``.

    Returns:
        The options; an empty dict when no file is configured (the formatter
        then falls back to compiler defaults); ``None`` when the configured
        file does not exist (the formatter stays uninitialized).

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """

    if config_file is None or str(config_file).strip() == "":
        return {}

    path = resolve_against(base_dir, config_file)
    if not path.is_file():
        logger.debug("Config file [%s] cannot be found", path)
        return None

    reader = _READERS.get(path.suffix.lower(), _read_xml_profile)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"Cannot read config file [{path}]: {exc}") from exc

    options = reader(content, path)
    logger.debug("Loaded %d formatter options from %s", len(options), path)
    return options


__all__ = ["Options", "load_formatter_options"]
