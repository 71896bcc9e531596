"""Text cursor used by the declaration grammars.

The scanner mirrors the small subset of a Foundation-style scanner the
grammars need: literal matching with all-or-nothing advancement, a
case-sensitivity flag and whitespace skipping before each scan.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import FrozenSet, Iterator, Optional, Tuple, TypeVar

from .constants import Constants

T = TypeVar("T")


class ScannableError(Exception):
    """Parse failure carrying a human-readable message."""

    def __init__(self, message: str, current_line: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.current_line = current_line

    def __str__(self) -> str:
        if self.current_line:
            return f'{self.message} in line: "{self.current_line}"'
        return self.message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScannableError):
            return NotImplemented
        return self.message == other.message and self.current_line == other.current_line

    def __hash__(self) -> int:
        return hash((self.message, self.current_line))


# (value, None) on success, (None, error) on failure.
ParseResult = Tuple[Optional[T], Optional[ScannableError]]


class Scanner:
    """Single-cursor scanner over one input string.

    A scanner is not shareable between concurrent parses; one instance
    serves one parse at a time.
    """

    def __init__(
        self,
        text: str,
        case_sensitive: bool = False,
        characters_to_skip: Optional[FrozenSet[str]] = Constants.WHITESPACE,
    ):
        self._text = text
        self._location = 0
        self.case_sensitive = case_sensitive
        self.characters_to_skip = characters_to_skip or frozenset()

    @property
    def text(self) -> str:
        return self._text

    @property
    def location(self) -> int:
        """Current cursor offset into ``text``."""
        return self._location

    @location.setter
    def location(self, value: int) -> None:
        if value < 0 or value > len(self._text):
            raise ValueError(f"location {value} out of range")
        self._location = value

    @property
    def remaining(self) -> str:
        return self._text[self._location:]

    @property
    def is_at_end(self) -> bool:
        """True when only skippable characters remain."""
        return self._skipped(self._location) == len(self._text)

    @property
    def current_line(self) -> str:
        """The line containing the cursor, without its terminator."""
        start = self._text.rfind("\n", 0, self._location) + 1
        end = self._text.find("\n", self._location)
        if end == -1:
            end = len(self._text)
        return self._text[start:end]

    @contextmanager
    def case_sensitivity(self, case_sensitive: bool) -> Iterator["Scanner"]:
        """Temporarily set ``case_sensitive``; the prior value is always restored."""
        previous = self.case_sensitive
        self.case_sensitive = case_sensitive
        try:
            yield self
        finally:
            self.case_sensitive = previous

    @contextmanager
    def skipping(self, characters: Optional[FrozenSet[str]]) -> Iterator["Scanner"]:
        """Temporarily set ``characters_to_skip``; the prior set is always restored."""
        previous = self.characters_to_skip
        self.characters_to_skip = characters or frozenset()
        try:
            yield self
        finally:
            self.characters_to_skip = previous

    def _skipped(self, position: int) -> int:
        while position < len(self._text) and self._text[position] in self.characters_to_skip:
            position += 1
        return position

    def scan_literal(self, literal: str) -> bool:
        """Consume ``literal`` if the remaining input starts with it.

        On a mismatch the cursor is left exactly where it was.
        """
        if not literal:
            return False
        start = self._skipped(self._location)
        candidate = self._text[start:start + len(literal)]
        if self.case_sensitive:
            matched = candidate == literal
        else:
            matched = candidate.casefold() == literal.casefold()
        if not matched:
            return False
        self._location = start + len(literal)
        return True

    def scan_characters(self, characters: FrozenSet[str]) -> Optional[str]:
        """Consume the longest run of ``characters``; None if the run is empty."""
        start = self._skipped(self._location)
        end = start
        while end < len(self._text) and self._text[end] in characters:
            end += 1
        if end == start:
            return None
        self._location = end
        return self._text[start:end]

    def scan_up_to_characters(self, characters: FrozenSet[str]) -> Optional[str]:
        """Consume text up to the first of ``characters`` or the end of input.

        Returns None without moving when nothing precedes the stop character.
        """
        start = self._skipped(self._location)
        end = start
        while end < len(self._text) and self._text[end] not in characters:
            end += 1
        if end == start:
            return None
        self._location = end
        return self._text[start:end]

    def scan_up_to(self, literal: str) -> Optional[str]:
        """Consume text up to (not including) ``literal``.

        Returns None without moving when nothing precedes ``literal``. The
        rest of the input is consumed when ``literal`` never occurs.
        """
        start = self._skipped(self._location)
        if self.case_sensitive:
            end = self._text.find(literal, start)
        else:
            end = self._text.casefold().find(literal.casefold(), start)
        if end == -1:
            end = len(self._text)
        if end == start:
            return None
        self._location = end
        return self._text[start:end]

    def error(self, message: str) -> ScannableError:
        """Build a ScannableError annotated with the current line."""
        return ScannableError(message, current_line=self.current_line)
