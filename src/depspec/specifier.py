"""Version and platform constraints combined into one predicate.

A declaration clause reads::

    <version-specifier> ["@platforms" "[" <platform> ("," <platform>)* "]"]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .logging_utils import extra_context, is_debug_enabled
from .platform import Platform
from .platform_specifier import PlatformSpecifier
from .scanner import ParseResult, Scanner, ScannableError
from .version import PinnedVersion, VersionSpecifier, VersionSpecifierKind

logger = logging.getLogger(__name__)

TRAILING_CHARACTERS = "unexpected trailing characters"


@dataclass(frozen=True)
class PinnedSpecifier:
    """A concrete version plus the platform scope it was resolved for."""

    version: PinnedVersion
    platform_specifier: PlatformSpecifier = field(default=PlatformSpecifier.NONE)


@dataclass(frozen=True)
class ResolvedSpecifier:
    """A resolved version as recorded after resolution, kept for display."""

    version: PinnedVersion
    platform_specifier: PlatformSpecifier = field(default=PlatformSpecifier.NONE)

    def __str__(self) -> str:
        if self.platform_specifier.is_none:
            return self.version.declaration()
        return f"{self.version.declaration()} {self.platform_specifier}"

    @classmethod
    def parse(cls, scanner: Scanner) -> ParseResult["ResolvedSpecifier"]:
        version, error = PinnedVersion.parse(scanner)
        if error is not None:
            return None, error
        platform_specifier, error = PlatformSpecifier.parse(scanner)
        if error is not None:
            return None, error
        return cls(version, platform_specifier), None


@dataclass(frozen=True)
class Specifier:
    """A version constraint and a platform constraint that must both hold."""

    version_specifier: VersionSpecifier = field(default_factory=VersionSpecifier.any)
    platform_specifier: PlatformSpecifier = field(default=PlatformSpecifier.NONE)

    def is_satisfied(self, version: PinnedVersion, platform: Platform) -> bool:
        """Determine whether the (version, platform) candidate meets both constraints."""
        version_ok = self.version_specifier.is_satisfied_by(version)
        platform_ok = self.platform_specifier.is_satisfied_by(platform)
        return version_ok and platform_ok

    def __str__(self) -> str:
        parts = [str(self.version_specifier), str(self.platform_specifier)]
        return " ".join(part for part in parts if part)

    @classmethod
    def from_pinned(cls, pinned: PinnedSpecifier) -> ParseResult["Specifier"]:
        """Build a specifier that accepts exactly the pinned version."""
        semantic = pinned.version.semantic_version
        if semantic is None:
            return None, ScannableError("Unable to retrieve version")
        version_specifier = VersionSpecifier(VersionSpecifierKind.EXACTLY, semantic)
        return cls(version_specifier, pinned.platform_specifier), None

    @classmethod
    def parse(cls, scanner: Scanner) -> ParseResult["Specifier"]:
        version_specifier, error = VersionSpecifier.parse(scanner)
        if error is not None:
            return None, error
        platform_specifier, error = PlatformSpecifier.parse(scanner)
        if error is not None:
            return None, error
        return cls(version_specifier, platform_specifier), None


def parse_specifier(text: str) -> ParseResult[Specifier]:
    """Parse a complete specifier clause; leftover input is an error."""
    scanner = Scanner(text)
    specifier, error = Specifier.parse(scanner)
    if error is None and not scanner.is_at_end:
        error = scanner.error(TRAILING_CHARACTERS)
        specifier = None
    if error is not None and is_debug_enabled(logger):
        logger.debug(
            "Specifier %r rejected: %s",
            text,
            error.message,
            extra=extra_context(
                event="parse_error",
                component="specifier",
                action="parse",
                outcome="failure",
            ),
        )
    return specifier, error
