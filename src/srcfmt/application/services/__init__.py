"""Application services orchestrating the formatting feature."""

from srcfmt.application.services.format_service import FormatRunRequest, FormatService

__all__ = ["FormatRunRequest", "FormatService"]
