"""Platform and version constraint model for dependency declarations."""

from .platform import KNOWN_PLATFORMS, PinnedPlatform, Platform
from .platform_specifier import PlatformSpecifier
from .scanner import ParseResult, Scanner, ScannableError
from .specifier import PinnedSpecifier, ResolvedSpecifier, Specifier, parse_specifier
from .version import PinnedVersion, VersionSpecifier, VersionSpecifierKind

__all__ = [
    "KNOWN_PLATFORMS",
    "ParseResult",
    "PinnedPlatform",
    "PinnedSpecifier",
    "PinnedVersion",
    "Platform",
    "PlatformSpecifier",
    "ResolvedSpecifier",
    "Scanner",
    "ScannableError",
    "Specifier",
    "VersionSpecifier",
    "VersionSpecifierKind",
    "parse_specifier",
]
