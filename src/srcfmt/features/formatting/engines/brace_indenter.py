"""Summary: Brace-depth reindentation engine for C-family sources.
Why: Provide the structural formatting pass shared by the Java and JavaScript formatters."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final

from ..domain.errors import ConfigError, FormatError

_NEWLINE_SPLIT: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")
_CLOSERS: Final[dict[str, str]] = {"}": "{", ")": "(", "]": "["}
_REGEX_PRECEDERS: Final[frozenset[str]] = frozenset("(,=:[!&|?{;")
_REGEX_KEYWORD: Final[re.Pattern[str]] = re.compile(
    r"(?:^|[^\w$])(?:return|typeof|case|delete|void|throw|in|of|yield|await)$"
)
CONTINUATION_UNITS: Final[int] = 2


@dataclass(frozen=True, slots=True)
class IndentStyle:
    """Whitespace policy derived from formatter options."""

    use_tabs: bool = True
    size: int = 4
    blank_lines_to_preserve: int = 1

    @property
    def unit(self) -> str:
        return "\t" if self.use_tabs else " " * self.size

    @classmethod
    def from_options(cls, options: Mapping[str, str], prefix: str) -> IndentStyle:
        """Build a style from ``<prefix>tabulation.char`` and friends.

        Raises:
            ConfigError: If an option holds an invalid value.
        """

        char = options.get(f"{prefix}tabulation.char", "tab").strip().lower()
        if char not in {"tab", "space"}:
            raise ConfigError(f"Invalid {prefix}tabulation.char '{char}' (expected tab or space)")

        size = _int_option(options, f"{prefix}tabulation.size", 4)
        preserve = _int_option(
            options, f"{prefix}number_of_empty_lines_to_preserve", 1, allow_zero=True
        )
        return cls(use_tabs=char == "tab", size=size, blank_lines_to_preserve=preserve)


def _int_option(
    options: Mapping[str, str], key: str, default: int, *, allow_zero: bool = False
) -> int:
    raw = options.get(key)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"Option {key} must be an integer, got '{raw}'") from exc
    if value < 0 or (value == 0 and not allow_zero):
        raise ConfigError(f"Option {key} is out of range: {value}")
    return value


@dataclass(slots=True)
class _ScanState:
    openers: list[str] = field(default_factory=list)
    in_block_comment: bool = False
    open_multiline: str | None = None
    opened_at: int = 0

    @property
    def brace_depth(self) -> int:
        return self.openers.count("{")


@dataclass(slots=True)
class _Line:
    text: str
    verbatim: bool = False


@dataclass(slots=True)
class BraceIndenter:
    """Reindent source text by brace nesting.

    The engine trims trailing whitespace, indents code by brace depth plus a
    continuation indent inside open parentheses, aligns block comment
    continuation lines, leaves multi-line string bodies untouched, collapses
    blank line runs and terminates the text with exactly one newline.

    With ``regex_literals`` set, a ``/`` where an operand is expected opens a
    regular expression literal whose body is skipped like a string.

    ``forbidden_tokens`` maps code tokens (outside strings and comments) to
    the error reported when they occur, which lets callers reject syntax the
    configured language level does not support.
    """

    style: IndentStyle
    multiline_delimiters: Sequence[str] = ()
    forbidden_tokens: Mapping[str, str] = field(default_factory=dict)
    regex_literals: bool = False

    def format(self, source: str, newline: str) -> str:
        """Return the reindented ``source`` using ``newline`` between lines.

        Raises:
            FormatError: If the structure cannot be resolved (unbalanced
                brackets, unterminated comments or strings) or a forbidden
                token is found.
        """

        state = _ScanState()
        output: list[_Line] = []
        unit = self.style.unit

        for number, raw_line in enumerate(_NEWLINE_SPLIT.split(source), start=1):
            if state.open_multiline is not None:
                output.append(_Line(raw_line, verbatim=True))
                self._scan(raw_line, number, state)
                continue

            stripped = raw_line.strip()
            if state.in_block_comment:
                continuation = " " if stripped.startswith("*") else ""
                text = f"{unit * state.brace_depth}{continuation}{stripped}" if stripped else ""
                output.append(_Line(text))
                self._scan(raw_line, number, state)
                continue

            if not stripped:
                output.append(_Line(""))
                continue

            output.append(_Line(self._indent_for(stripped, state) + stripped))
            self._scan(raw_line, number, state)

        if state.in_block_comment:
            raise FormatError("Unterminated block comment", line=state.opened_at)
        if state.open_multiline is not None:
            raise FormatError("Unterminated multi-line string", line=state.opened_at)
        if state.openers:
            raise FormatError(f"Unbalanced brackets: '{''.join(state.openers)}' left open")

        lines = self._collapse_blank_lines(output)
        if not lines:
            return ""
        return newline.join(lines) + newline

    def _indent_for(self, stripped: str, state: _ScanState) -> str:
        unit = self.style.unit
        leading_closers = len(stripped) - len(stripped.lstrip("}"))
        depth = max(state.brace_depth - leading_closers, 0)
        indent = unit * depth
        if state.openers and state.openers[-1] in "([" and stripped[0] not in _CLOSERS:
            indent += unit * CONTINUATION_UNITS
        return indent

    def _collapse_blank_lines(self, lines: list[_Line]) -> list[str]:
        collapsed: list[str] = []
        blank_run = 0
        for line in lines:
            if line.verbatim:
                blank_run = 0
                collapsed.append(line.text)
                continue
            if line.text == "":
                blank_run += 1
                if collapsed and blank_run <= self.style.blank_lines_to_preserve:
                    collapsed.append("")
                continue
            blank_run = 0
            collapsed.append(line.text.rstrip())
        while collapsed and collapsed[-1] == "":
            _ = collapsed.pop()
        return collapsed

    def _scan(self, line: str, number: int, state: _ScanState) -> None:
        """Advance ``state`` across one line, tracking brackets outside literals."""

        index = 0
        length = len(line)
        code: list[str] = []

        while index < length:
            if state.in_block_comment:
                end = line.find("*/", index)
                if end < 0:
                    break
                state.in_block_comment = False
                index = end + 2
                continue

            if state.open_multiline is not None:
                end = self._find_closing(line, index, state.open_multiline)
                if end < 0:
                    break
                index = end + len(state.open_multiline)
                state.open_multiline = None
                continue

            if line.startswith("//", index):
                break
            if line.startswith("/*", index):
                state.in_block_comment = True
                state.opened_at = number
                index += 2
                continue

            delimiter = next(
                (d for d in self.multiline_delimiters if line.startswith(d, index)), None
            )
            if delimiter is not None:
                state.open_multiline = delimiter
                state.opened_at = number
                index += len(delimiter)
                continue

            char = line[index]
            if char == "/" and self.regex_literals and _expects_operand(code):
                end = _find_regex_end(line, index + 1)
                if end >= 0:
                    index = end + 1
                    while index < length and (line[index].isalnum() or line[index] == "_"):
                        index += 1
                    code.append("//")
                    continue

            if char in {'"', "'"}:
                end = self._find_closing(line, index + 1, char)
                if end < 0:
                    raise FormatError("Unterminated string literal", line=number)
                index = end + 1
                code.append('""')
                continue

            if char in "{([":
                state.openers.append(char)
            elif char in _CLOSERS:
                if not state.openers or state.openers[-1] != _CLOSERS[char]:
                    raise FormatError(f"Unbalanced closing '{char}'", line=number)
                _ = state.openers.pop()
            code.append(char)
            index += 1

        self._check_forbidden("".join(code), number)

    def _check_forbidden(self, code: str, number: int) -> None:
        for token, message in self.forbidden_tokens.items():
            if token in code:
                raise FormatError(message, line=number)

    @staticmethod
    def _find_closing(line: str, start: int, delimiter: str) -> int:
        """Return the index of the unescaped ``delimiter`` at or after ``start``."""

        index = start
        while index < len(line):
            if line[index] == "\\":
                index += 2
                continue
            if line.startswith(delimiter, index):
                return index
            index += 1
        return -1


def _expects_operand(code: list[str]) -> bool:
    """Return whether the scanned code so far leaves an operand position open."""

    preceding = "".join(code).rstrip()
    if not preceding:
        return True
    return preceding[-1] in _REGEX_PRECEDERS or _REGEX_KEYWORD.search(preceding) is not None


def _find_regex_end(line: str, start: int) -> int:
    """Return the index of the ``/`` closing a regex body, or ``-1``.

    Escapes are skipped and a ``/`` inside a ``[...]`` class does not close
    the literal.
    """

    index = start
    in_class = False
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if in_class:
            in_class = char != "]"
        elif char == "[":
            in_class = True
        elif char == "/":
            return index
        index += 1
    return -1


__all__ = ["BraceIndenter", "IndentStyle", "CONTINUATION_UNITS"]
