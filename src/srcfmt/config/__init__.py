"""Configuration loading, path policy and formatter option resolution."""

from srcfmt.config.config import FormatterConfig
from srcfmt.config.import_order import parse_import_order, resolve_import_order
from srcfmt.config.options_loader import load_formatter_options

__all__ = [
    "FormatterConfig",
    "load_formatter_options",
    "parse_import_order",
    "resolve_import_order",
]
