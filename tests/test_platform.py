"""Tests for the platform registry and platform token parser."""

import pytest

from src.depspec.platform import KNOWN_PLATFORMS, PinnedPlatform, Platform
from src.depspec.scanner import Scanner


def _all_spellings():
    for platform in KNOWN_PLATFORMS:
        yield platform, platform.canonical_name
        for alias in platform.aliases:
            yield platform, alias


class TestRegistry:
    """Closed registry of known platforms."""

    def test_known_platforms_in_declaration_order(self):
        """Test the registry lists platforms in declaration order."""
        assert [str(p) for p in KNOWN_PLATFORMS] == [
            "macos", "ios", "tvos", "watchos", "linux", "maccatalyst",
        ]

    def test_maccatalyst_alias(self):
        """Test only macCatalyst carries an alias."""
        assert Platform.MACCATALYST.aliases == ("uikitForMac",)
        assert Platform.IOS.aliases == ()

    def test_equality_and_hash_follow_name(self):
        """Test platforms with the same name are one value."""
        assert Platform("ios") is Platform.IOS
        assert hash(Platform("ios")) == hash(Platform.IOS)
        assert len({Platform.IOS, Platform("ios")}) == 1

    def test_from_name_accepts_alias(self):
        """Test from_name resolves aliases and rejects unknown names."""
        assert Platform.from_name("UIKitForMac") is Platform.MACCATALYST
        with pytest.raises(ValueError):
            Platform.from_name("windows")


class TestPlatformParse:
    """Platform.parse over names, aliases and case variations."""

    def test_parse_canonical_name(self):
        """Test a canonical name parses to its platform."""
        platform, error = Platform.parse(Scanner("macos"))
        assert error is None
        assert platform is Platform.MACOS

    @pytest.mark.parametrize("platform,spelling", list(_all_spellings()))
    def test_alias_transparency(self, platform, spelling):
        """Test every spelling parses to the same value as the canonical name."""
        parsed, error = Platform.parse(Scanner(spelling))
        assert error is None
        assert parsed == platform
        canonical, _ = Platform.parse(Scanner(platform.canonical_name))
        assert parsed == canonical

    @pytest.mark.parametrize("platform,spelling", list(_all_spellings()))
    def test_case_insensitive(self, platform, spelling):
        """Test case permutations parse and the scanner flag is restored."""
        for variant in (spelling.upper(), spelling.lower(), spelling.swapcase()):
            scanner = Scanner(variant, case_sensitive=True)
            parsed, error = Platform.parse(scanner)
            assert error is None
            assert parsed is platform
            assert scanner.case_sensitive is True

    def test_mixed_case_ios(self):
        """Test mixed case iOs parses as iOS."""
        parsed, _ = Platform.parse(Scanner("iOs"))
        assert parsed is Platform.IOS

    def test_unknown_platform_keeps_cursor(self):
        """Test an unknown token fails without moving the cursor."""
        scanner = Scanner("  windows", case_sensitive=True)
        parsed, error = Platform.parse(scanner)
        assert parsed is None
        assert error.message == "valid platform name not found"
        assert scanner.location == 0
        assert scanner.case_sensitive is True

    def test_parse_advances_only_past_token(self):
        """Test parsing consumes only the platform token."""
        scanner = Scanner("ios, macos]")
        Platform.parse(scanner)
        assert scanner.remaining == ", macos]"

    def test_alias_resolves_to_maccatalyst(self):
        """Test uikitForMac parses as macCatalyst."""
        parsed, error = Platform.parse(Scanner("uikitForMac"))
        assert error is None
        assert parsed is Platform.MACCATALYST
        assert str(parsed) == "maccatalyst"


class TestPinnedPlatform:
    """Single-token platform wrapper."""

    def test_parse_wraps_platform(self):
        """Test a parsed token is wrapped and rendered by name."""
        pinned, error = PinnedPlatform.parse(Scanner("tvOS"))
        assert error is None
        assert pinned == PinnedPlatform(Platform.TVOS)
        assert str(pinned) == "tvos"

    def test_parse_propagates_error(self):
        """Test the platform error is passed through unchanged."""
        pinned, error = PinnedPlatform.parse(Scanner("android"))
        assert pinned is None
        assert error.message == "valid platform name not found"
