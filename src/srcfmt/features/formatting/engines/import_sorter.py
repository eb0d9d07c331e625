"""Summary: Regroup Java import statements by configured namespace prefixes.
Why: Canonical import order is part of the Java formatting pass."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

from ..domain.errors import ConfigError

_IMPORT_LINE: Final[re.Pattern[str]] = re.compile(
    r"^import\s+(?P<static>static\s+)?(?P<name>[\w$]+(?:\s*\.\s*[\w$*]+)*)\s*;\s*(?://.*)?$"
)


class UnmatchedImports(StrEnum):
    """Placement of imports that match no configured group."""

    FIRST = "first"
    LAST = "last"

    @classmethod
    def from_user_input(cls, value: str) -> UnmatchedImports:
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ConfigError(
                f"Unknown unmatched_imports policy '{value}' (expected first or last)"
            ) from exc


@dataclass(slots=True)
class _Import:
    name: str
    static: bool
    lines: list[str] = field(default_factory=list)


def matches_prefix(name: str, prefix: str) -> bool:
    """Return whether ``prefix`` names ``name`` or one of its parent packages."""

    return name == prefix or name.startswith(prefix + ".")


@dataclass(frozen=True, slots=True)
class ImportSorter:
    """Sort the import block of a compilation unit.

    Each import joins the first configured prefix that matches its fully
    qualified name. An empty prefix is the slot for imports no other prefix
    matches; without one, unmatched imports go first or last according to
    ``unmatched``. Groups are emitted in configured order separated by one
    blank line, imports keep their original relative order inside a group and
    static imports form their own groups ahead of regular ones. Comment lines
    in the import block travel with the import that follows them.
    """

    import_order: Sequence[str]
    unmatched: UnmatchedImports = UnmatchedImports.LAST

    def group_rank(self, name: str) -> int:
        """Return the emission rank of the group ``name`` belongs to."""

        for index, prefix in enumerate(self.import_order):
            if prefix and matches_prefix(name, prefix):
                return index
        for index, prefix in enumerate(self.import_order):
            if prefix == "":
                return index
        return -1 if self.unmatched is UnmatchedImports.FIRST else len(self.import_order)

    def sort(self, text: str, newline: str) -> str:
        """Return ``text`` with its import block regrouped.

        The block starts at the first import and ends before the first line
        that is neither an import, a blank line nor a line comment, so
        import-shaped text further down (text blocks, comments) is never part
        of it. The text is returned unchanged when it has no imports.
        """

        lines = text.split(newline)
        first = next((i for i, line in enumerate(lines) if _IMPORT_LINE.match(line.strip())), None)
        if first is None:
            return text

        last = first
        for index in range(first + 1, len(lines)):
            stripped = lines[index].strip()
            if _IMPORT_LINE.match(stripped):
                last = index
            elif stripped and not stripped.startswith("//"):
                break
        imports = self._collect(lines[first : last + 1])

        ordered = sorted(imports, key=lambda imp: (0 if imp.static else 1, self.group_rank(imp.name)))

        block: list[str] = []
        previous_key: tuple[bool, int] | None = None
        for imp in ordered:
            key = (imp.static, self.group_rank(imp.name))
            if previous_key is not None and key != previous_key:
                block.append("")
            block.extend(imp.lines)
            previous_key = key

        return newline.join([*lines[:first], *block, *lines[last + 1 :]])

    @staticmethod
    def _collect(region: list[str]) -> list[_Import]:
        imports: list[_Import] = []
        pending_comments: list[str] = []
        for line in region:
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith("//"):
                pending_comments.append(stripped)
                continue
            match = _IMPORT_LINE.match(stripped)
            assert match is not None
            name = re.sub(r"\s+", "", match.group("name"))
            imports.append(
                _Import(
                    name=name,
                    static=match.group("static") is not None,
                    lines=[*pending_comments, stripped],
                )
            )
            pending_comments = []
        return imports


__all__ = ["ImportSorter", "UnmatchedImports", "matches_prefix"]
