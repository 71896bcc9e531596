"""Platform constraints attached to dependency declarations.

Grammar::

    platform-specifier := ( "@platforms" "[" platform ("," platform)* "]" )?
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from .constants import Constants
from .logging_utils import extra_context, is_debug_enabled
from .platform import KNOWN_PLATFORMS, Platform
from .scanner import ParseResult, Scanner, ScannableError

logger = logging.getLogger(__name__)

LIST_NOT_FOUND = "list of platforms not found"
LIST_SYNTAX_ERROR = "syntax error in platforms list"


@dataclass(frozen=True)
class PlatformSpecifier:
    """Either no restriction (``platforms is None``) or a set of acceptable platforms.

    Use ``PlatformSpecifier.NONE`` and ``PlatformSpecifier.of(...)`` rather
    than the constructor.
    """

    platforms: Optional[FrozenSet[Platform]] = None

    @classmethod
    def of(cls, *platforms: Platform) -> "PlatformSpecifier":
        return cls.from_iterable(platforms)

    @classmethod
    def from_iterable(cls, platforms: Iterable[Platform]) -> "PlatformSpecifier":
        collected = frozenset(platforms)
        if not collected:
            raise ValueError("a platform list needs at least one platform")
        return cls(collected)

    @property
    def is_none(self) -> bool:
        return self.platforms is None

    def is_satisfied_by(self, platform: Platform) -> bool:
        """Determine whether ``platform`` satisfies this specifier."""
        if self.platforms is None:
            return True
        return platform in self.platforms

    def platform_names(self) -> str:
        """Comma-separated names in registry order; empty for NONE."""
        if self.platforms is None:
            return ""
        ordered = [p for p in KNOWN_PLATFORMS if p in self.platforms]
        return ", ".join(str(p) for p in ordered)

    def __str__(self) -> str:
        if self.platforms is None:
            return ""
        return (
            f"{Constants.PLATFORMS_KEYWORD} {Constants.PLATFORMS_LIST_OPEN}"
            f"{self.platform_names()}{Constants.PLATFORMS_LIST_CLOSE}"
        )

    @classmethod
    def parse(cls, scanner: Scanner) -> ParseResult["PlatformSpecifier"]:
        """Parse an optional ``@platforms [...]`` clause.

        On failure the cursor is left where the error was found; callers
        needing clause atomicity should snapshot ``scanner.location`` first.
        """
        if not scanner.scan_literal(Constants.PLATFORMS_KEYWORD):
            return cls.NONE, None
        if not scanner.scan_literal(Constants.PLATFORMS_LIST_OPEN):
            return None, _failed(scanner, scanner.error(LIST_NOT_FOUND))

        platforms = set()
        while True:
            platform, error = Platform.parse(scanner)
            if error is not None:
                return None, _failed(scanner, error)
            platforms.add(platform)
            if scanner.scan_literal(Constants.PLATFORMS_LIST_CLOSE):
                break
            if not scanner.scan_literal(Constants.PLATFORMS_LIST_SEPARATOR):
                return None, _failed(scanner, scanner.error(LIST_SYNTAX_ERROR))

        return cls(frozenset(platforms)), None


PlatformSpecifier.NONE = PlatformSpecifier()


def _failed(scanner: Scanner, error: ScannableError) -> ScannableError:
    if is_debug_enabled(logger):
        logger.debug(
            "Platform list rejected at offset %d: %s",
            scanner.location,
            error.message,
            extra=extra_context(
                event="parse_error",
                component="platform_specifier",
                action="parse",
                outcome="failure",
            ),
        )
    return error
