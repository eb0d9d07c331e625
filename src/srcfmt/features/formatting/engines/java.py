"""Summary: Java formatter combining brace reindentation and import sorting.
Why: Java sources need both a structural pass and canonical import groups."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import ClassVar, Final, override

from .base import COMPILER_SOURCE, BaseFormatter, FormatterSettings, parse_source_level
from .brace_indenter import BraceIndenter, IndentStyle
from .import_sorter import ImportSorter, UnmatchedImports

DEFAULT_IMPORT_ORDER: Final[tuple[str, ...]] = ("java", "javax", "org", "com")


class JavaFormatter(BaseFormatter):
    """Formatter for ``.java`` compilation units."""

    name: ClassVar[str] = "java"
    extensions: ClassVar[frozenset[str]] = frozenset({".java"})
    option_prefix: ClassVar[str] = "org.eclipse.jdt.core.formatter."

    def __init__(
        self,
        import_order: Sequence[str] = DEFAULT_IMPORT_ORDER,
        unmatched_imports: UnmatchedImports = UnmatchedImports.LAST,
    ) -> None:
        super().__init__()
        self._engine: BraceIndenter | None = None
        self._sorter: ImportSorter = ImportSorter(tuple(import_order), unmatched_imports)

    @property
    def import_order(self) -> tuple[str, ...]:
        return tuple(self._sorter.import_order)

    def set_import_order(
        self,
        import_order: Sequence[str],
        unmatched_imports: UnmatchedImports | None = None,
    ) -> None:
        self._sorter = ImportSorter(
            tuple(import_order),
            unmatched_imports or self._sorter.unmatched,
        )

    @override
    def _create_engine(self, options: Mapping[str, str], settings: FormatterSettings) -> None:
        level = parse_source_level(options.get(COMPILER_SOURCE, settings.compiler_source))
        forbidden: dict[str, str] = {}
        if level < (1, 8):
            forbidden["->"] = (
                f"Lambda expressions are not allowed at source level {level[0]}.{level[1]}; "
                "possible cause is unmatched source/target/compliance version"
            )
        if level < (1, 5):
            forbidden["@"] = (
                f"Annotations are not allowed at source level {level[0]}.{level[1]}; "
                "possible cause is unmatched source/target/compliance version"
            )
        self._engine = BraceIndenter(
            style=IndentStyle.from_options(options, self.option_prefix),
            multiline_delimiters=('"""',),
            forbidden_tokens=forbidden,
        )

    @override
    def _do_format(self, source: str, newline: str) -> str:
        assert self._engine is not None
        formatted = self._engine.format(source, newline)
        return self._sorter.sort(formatted, newline)


__all__ = ["JavaFormatter", "DEFAULT_IMPORT_ORDER"]
