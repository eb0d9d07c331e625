"""Summary: JavaScript formatter backed by the brace reindentation engine.
Why: JavaScript sources share the C-family block structure."""

from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar, override

from .base import BaseFormatter, FormatterSettings
from .brace_indenter import BraceIndenter, IndentStyle


class JavascriptFormatter(BaseFormatter):
    """Formatter for ``.js`` sources; template literals are left verbatim."""

    name: ClassVar[str] = "javascript"
    extensions: ClassVar[frozenset[str]] = frozenset({".js"})
    option_prefix: ClassVar[str] = "org.eclipse.wst.jsdt.core.formatter."

    def __init__(self) -> None:
        super().__init__()
        self._engine: BraceIndenter | None = None

    @override
    def _create_engine(self, options: Mapping[str, str], settings: FormatterSettings) -> None:
        del settings
        self._engine = BraceIndenter(
            style=IndentStyle.from_options(options, self.option_prefix),
            multiline_delimiters=("`",),
            regex_literals=True,
        )

    @override
    def _do_format(self, source: str, newline: str) -> str:
        assert self._engine is not None
        return self._engine.format(source, newline)


__all__ = ["JavascriptFormatter"]
