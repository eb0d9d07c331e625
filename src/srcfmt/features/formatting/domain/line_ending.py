"""Summary: Line-ending policies applied to formatted output.
Why: Keep newline selection in one place for every formatter."""

from __future__ import annotations

import os
from enum import StrEnum

from .errors import ConfigError


class LineEnding(StrEnum):
    """Newline policy for rewritten files.

    AUTO uses the platform separator, KEEP preserves the single ending found
    in the file (falling back to AUTO when mixed or absent), and LF, CRLF and
    CR force a fixed sequence.
    """

    AUTO = "AUTO"
    KEEP = "KEEP"
    LF = "LF"
    CRLF = "CRLF"
    CR = "CR"

    @classmethod
    def from_user_input(cls, value: str) -> LineEnding:
        """Parse a case-insensitive policy name."""

        normalized = value.strip().upper()
        try:
            return cls(normalized)
        except ValueError as exc:
            valid = ", ".join(member.value for member in cls)
            raise ConfigError(f"Unknown line ending '{value}' (expected one of: {valid})") from exc

    def chars_for(self, text: str) -> str:
        """Return the newline sequence to use when rewriting ``text``."""

        if self is LineEnding.LF:
            return "\n"
        if self is LineEnding.CRLF:
            return "\r\n"
        if self is LineEnding.CR:
            return "\r"
        if self is LineEnding.KEEP:
            detected = detect_line_ending(text)
            if detected is not None:
                return detected
        return os.linesep


def detect_line_ending(text: str) -> str | None:
    """Return the only newline sequence used in ``text``, or ``None``.

    ``None`` is returned when the text has no line break or mixes several
    kinds of endings.
    """

    crlf = text.count("\r\n")
    lone_cr = text.count("\r") - crlf
    lone_lf = text.count("\n") - crlf

    found = [
        chars
        for chars, count in (("\r\n", crlf), ("\r", lone_cr), ("\n", lone_lf))
        if count > 0
    ]
    if len(found) != 1:
        return None
    return found[0]


__all__ = ["LineEnding", "detect_line_ending"]
