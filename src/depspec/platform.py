"""Known build platforms and the single-platform parser."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .logging_utils import extra_context, is_debug_enabled
from .scanner import ParseResult, Scanner

logger = logging.getLogger(__name__)

PLATFORM_NOT_FOUND = "valid platform name not found"


class Platform(Enum):
    """Closed set of build platforms.

    The value is the canonical lowercase name; equality and hashing follow
    it alone. Aliases are parse-time spellings kept outside the identity.
    """

    MACOS = "macos"
    IOS = "ios"
    TVOS = "tvos"
    WATCHOS = "watchos"
    LINUX = "linux"
    MACCATALYST = "maccatalyst"

    @property
    def canonical_name(self) -> str:
        return self.value

    @property
    def aliases(self) -> Tuple[str, ...]:
        return _ALIASES.get(self, ())

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Platform":
        """Look up a platform by canonical name or alias, ignoring case.

        Raises:
            ValueError: if ``name`` is not a known spelling.
        """
        wanted = name.strip().casefold()
        for platform in KNOWN_PLATFORMS:
            if wanted == platform.value or wanted in (a.casefold() for a in platform.aliases):
                return platform
        raise ValueError(f"Unknown platform: {name}")

    @classmethod
    def parse(cls, scanner: Scanner) -> ParseResult["Platform"]:
        """Parse one platform token case-insensitively.

        Platforms are tried in ``KNOWN_PLATFORMS`` order; for each, the
        canonical name is tried before its aliases and the first match wins.
        """
        with scanner.case_sensitivity(False):
            for platform in KNOWN_PLATFORMS:
                if scanner.scan_literal(platform.value):
                    return platform, None
                for alias in platform.aliases:
                    if scanner.scan_literal(alias):
                        return platform, None

        if is_debug_enabled(logger):
            logger.debug(
                "No platform at offset %d: %r",
                scanner.location,
                scanner.remaining[:20],
                extra=extra_context(
                    event="parse_error",
                    component="platform",
                    action="parse",
                    outcome="not_found",
                ),
            )
        return None, scanner.error(PLATFORM_NOT_FOUND)


_ALIASES: Dict[Platform, Tuple[str, ...]] = {
    Platform.MACCATALYST: ("uikitForMac",),
}

# Registry in declaration order; this order is the parse tie-break.
KNOWN_PLATFORMS: Tuple[Platform, ...] = tuple(Platform)


@dataclass(frozen=True)
class PinnedPlatform:
    """A single parsed platform token, as opposed to a platform list."""

    platform: Platform

    def __str__(self) -> str:
        return str(self.platform)

    @classmethod
    def parse(cls, scanner: Scanner) -> ParseResult["PinnedPlatform"]:
        platform, error = Platform.parse(scanner)
        if error is not None:
            return None, error
        return cls(platform), None
