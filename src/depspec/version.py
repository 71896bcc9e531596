"""Pinned versions and version constraints.

Grammar::

    version-specifier := ( "==" version | ">=" version | "~>" version
                         | '"' git-reference '"' | version )?
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import semantic_version

from .constants import Constants
from .logging_utils import extra_context, is_debug_enabled
from .scanner import ParseResult, Scanner, ScannableError

logger = logging.getLogger(__name__)

# Dotted numeric release with optional prerelease/build suffix; rejects shas like "3f2a9c".
_VERSION_PATTERN = re.compile(r"^\d+(?:\.\d+)*(?:[-+][0-9A-Za-z.\-+]*)?$")

# A bare pin cannot start with these; "@" opens the platforms clause.
_BARE_PIN_LEADERS = frozenset((Constants.QUOTE, Constants.PLATFORMS_KEYWORD[0]))


def parse_semantic_version(text: str) -> Optional[semantic_version.Version]:
    """Parse tags such as ``v1.2`` or ``1.2.3-beta.1``; None if not a version."""
    candidate = text.strip()
    if candidate[:1] in ("v", "V"):
        candidate = candidate[1:]
    if not _VERSION_PATTERN.match(candidate):
        return None
    try:
        return semantic_version.Version(candidate)
    except ValueError:
        pass
    try:
        return semantic_version.Version.coerce(candidate)
    except ValueError:
        return None


def _scan_quoted(scanner: Scanner) -> ParseResult[str]:
    """Scan the body of a quoted string whose opening quote was consumed."""
    # Quoted text is taken verbatim, whitespace included.
    with scanner.skipping(None):
        body = scanner.scan_up_to(Constants.QUOTE) or ""
        if not scanner.scan_literal(Constants.QUOTE):
            return None, scanner.error("unterminated quoted string")
    return body, None


@dataclass(frozen=True)
class PinnedVersion:
    """A concrete commitish a dependency was resolved to (tag, version or sha)."""

    commitish: str

    def __str__(self) -> str:
        return self.commitish

    @property
    def semantic_version(self) -> Optional[semantic_version.Version]:
        return parse_semantic_version(self.commitish)

    def declaration(self) -> str:
        """Render the commitish so that ``parse`` reads it back unchanged.

        Commitishes a bare token cannot carry are wrapped in quotes.

        Raises:
            ValueError: if the commitish is empty or holds both a quote and
                whitespace.
        """
        text = self.commitish
        if not text:
            raise ValueError("empty commitish cannot be written as a declaration")
        needs_quotes = (
            text[0] in _BARE_PIN_LEADERS
            or any(c in Constants.WHITESPACE for c in text)
        )
        if not needs_quotes:
            return text
        if Constants.QUOTE in text:
            raise ValueError(f"commitish {text!r} cannot be written as a declaration")
        return f"{Constants.QUOTE}{text}{Constants.QUOTE}"

    @classmethod
    def parse(cls, scanner: Scanner) -> ParseResult["PinnedVersion"]:
        """Parse a quoted commitish or a bare token up to whitespace."""
        if scanner.scan_literal(Constants.QUOTE):
            body, error = _scan_quoted(scanner)
            if error is not None:
                return None, error
            if not body:
                return None, scanner.error("expected pinned version")
            return cls(body), None

        start = scanner.location
        token = scanner.scan_up_to_characters(Constants.WHITESPACE)
        if token is None or token[0] in _BARE_PIN_LEADERS:
            scanner.location = start
            return None, scanner.error("expected pinned version")
        return cls(token), None


class VersionSpecifierKind(Enum):
    """Shapes a version constraint can take."""

    ANY = "any"
    EXACTLY = "exactly"
    AT_LEAST = "at_least"
    COMPATIBLE_WITH = "compatible_with"
    GIT_REFERENCE = "git_reference"


_OPERATORS = (
    (Constants.VERSION_EXACTLY, VersionSpecifierKind.EXACTLY),
    (Constants.VERSION_AT_LEAST, VersionSpecifierKind.AT_LEAST),
    (Constants.VERSION_COMPATIBLE_WITH, VersionSpecifierKind.COMPATIBLE_WITH),
)

_OPERATOR_TEXT = {kind: op for op, kind in _OPERATORS}
_COMPARISON_KINDS = frozenset(_OPERATOR_TEXT)


def _same_release(left: semantic_version.Version, right: semantic_version.Version) -> bool:
    return (left.major, left.minor, left.patch) == (right.major, right.minor, right.patch)


@dataclass(frozen=True)
class VersionSpecifier:
    """A version constraint.

    ``version`` is set for the comparison kinds and ``reference`` for
    ``GIT_REFERENCE``; ``ANY`` carries neither.
    """

    kind: VersionSpecifierKind = VersionSpecifierKind.ANY
    version: Optional[semantic_version.Version] = None
    reference: Optional[str] = None

    def __post_init__(self):
        if self.kind in _COMPARISON_KINDS and self.version is None:
            raise ValueError(f"{self.kind.value} constraint needs a version")
        if self.kind is VersionSpecifierKind.GIT_REFERENCE and self.reference is None:
            raise ValueError("git_reference constraint needs a reference")

    @classmethod
    def any(cls) -> "VersionSpecifier":
        return cls()

    @classmethod
    def exactly(cls, version: str) -> "VersionSpecifier":
        return cls(VersionSpecifierKind.EXACTLY, _require_version(version))

    @classmethod
    def at_least(cls, version: str) -> "VersionSpecifier":
        return cls(VersionSpecifierKind.AT_LEAST, _require_version(version))

    @classmethod
    def compatible_with(cls, version: str) -> "VersionSpecifier":
        return cls(VersionSpecifierKind.COMPATIBLE_WITH, _require_version(version))

    @classmethod
    def git_reference(cls, reference: str) -> "VersionSpecifier":
        return cls(VersionSpecifierKind.GIT_REFERENCE, reference=reference)

    def is_satisfied_by(self, pinned: PinnedVersion) -> bool:
        """Determine whether ``pinned`` meets this constraint.

        Non-semantic pins (branches, shas) meet every version range, as a
        git reference cannot be ordered against one.
        """
        if self.kind is VersionSpecifierKind.GIT_REFERENCE:
            return pinned.commitish == self.reference

        candidate = pinned.semantic_version
        if candidate is None:
            return True

        if self.kind is VersionSpecifierKind.ANY:
            return not candidate.prerelease
        requirement = self.version
        if self.kind is VersionSpecifierKind.EXACTLY:
            return candidate == requirement

        if candidate.prerelease and not (
            requirement.prerelease and _same_release(candidate, requirement)
        ):
            return False
        if self.kind is VersionSpecifierKind.AT_LEAST:
            return candidate >= requirement
        # COMPATIBLE_WITH
        if requirement.major > 0:
            return candidate.major == requirement.major and candidate >= requirement
        return (
            candidate.major == 0
            and candidate.minor == requirement.minor
            and candidate >= requirement
        )

    def __str__(self) -> str:
        if self.kind is VersionSpecifierKind.ANY:
            return ""
        if self.kind is VersionSpecifierKind.GIT_REFERENCE:
            return f"{Constants.QUOTE}{self.reference}{Constants.QUOTE}"
        return f"{_OPERATOR_TEXT[self.kind]} {self.version}"

    @classmethod
    def parse(cls, scanner: Scanner) -> ParseResult["VersionSpecifier"]:
        """Parse an optional version constraint; no constraint yields ANY."""
        for operator, kind in _OPERATORS:
            if scanner.scan_literal(operator):
                text = scanner.scan_characters(Constants.VERSION_CHARACTERS)
                if text is None:
                    return None, _failed(scanner, scanner.error(f"expected version after '{operator}'"))
                version = parse_semantic_version(text)
                if version is None:
                    return None, _failed(scanner, scanner.error(f"invalid version '{text}'"))
                return cls(kind, version), None

        if scanner.scan_literal(Constants.QUOTE):
            reference, error = _scan_quoted(scanner)
            if error is not None:
                return None, _failed(scanner, error)
            return cls.git_reference(reference), None

        start = scanner.location
        text = scanner.scan_characters(Constants.VERSION_CHARACTERS)
        if text is not None:
            version = parse_semantic_version(text)
            if version is not None:
                return cls(VersionSpecifierKind.EXACTLY, version), None
            scanner.location = start
        return cls.any(), None


def _require_version(text: str) -> semantic_version.Version:
    version = parse_semantic_version(text)
    if version is None:
        raise ValueError(f"invalid version '{text}'")
    return version


def _failed(scanner: Scanner, error: ScannableError) -> ScannableError:
    if is_debug_enabled(logger):
        logger.debug(
            "Version specifier rejected at offset %d: %s",
            scanner.location,
            error.message,
            extra=extra_context(
                event="parse_error",
                component="version_specifier",
                action="parse",
                outcome="failure",
            ),
        )
    return error
