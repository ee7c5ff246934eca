"""Tests for tag colors."""

import pytest
from folio.core.colors import PALETTE, color_for, string_hash


class TestStringHash:
    """Tests for string_hash()."""

    def test__empty_string__returns_zero(self) -> None:
        """Hash of the empty string is 0."""
        assert string_hash("") == 0

    def test__short_string__matches_polynomial(self) -> None:
        """Hash is the base-31 polynomial over code units."""
        assert string_hash("a") == 97
        assert string_hash("ab") == 97 * 31 + 98
        assert string_hash("hello") == 99162322

    def test__overflow__wraps_to_signed_32_bits(self) -> None:
        """Wrap like two's-complement 32-bit arithmetic."""
        assert string_hash("polygenelubricants") == -(2**31)

    def test__result_stays_in_int32_range(self) -> None:
        """Long inputs never escape the signed 32-bit range."""
        value = string_hash("a much longer tag name than anyone would use" * 10)

        assert -(2**31) <= value < 2**31

    def test__astral_characters__hash_utf16_code_units(self) -> None:
        """Characters outside the BMP contribute two surrogate code units."""
        high, low = 0xD83D, 0xDE00
        assert string_hash("\U0001f600") == high * 31 + low

    def test__colliding_strings__share_hash(self) -> None:
        """Known collisions of the polynomial hash stay collisions."""
        assert string_hash("Aa") == string_hash("BB") == 2112


class TestColorFor:
    """Tests for color_for()."""

    def test__palette_has_eight_colors(self) -> None:
        """Palette is a fixed, immutable 8-entry tuple."""
        assert len(PALETTE) == 8
        assert isinstance(PALETTE, tuple)

    def test__empty_string__returns_first_color(self) -> None:
        """Empty tag maps to palette index 0."""
        assert color_for("") == PALETTE[0] == "#093145"

    def test__known_tags__map_to_expected_colors(self) -> None:
        """Index is abs(hash) modulo palette length."""
        assert color_for("a") == PALETTE[97 % 8]
        assert color_for("hello") == "#60d878"

    def test__int32_min_hash__returns_first_color(self) -> None:
        """abs(-2**31) is 2**31, which is divisible by 8."""
        assert color_for("polygenelubricants") == PALETTE[0]

    @pytest.mark.parametrize("tag", ["javascript", "python", "Type Script", "λ", ""])
    def test__same_tag__returns_same_color(self, tag: str) -> None:
        """Colors are deterministic for equal strings."""
        assert color_for(tag) == color_for(str(tag))
        assert color_for(tag) in PALETTE

    def test__negative_hash__uses_absolute_value(self) -> None:
        """Negative hashes index the palette through their absolute value."""
        tag = "polygenelubricants!"

        assert string_hash(tag) == -(2**31) + 33
        assert color_for(tag) == PALETTE[7] == "#c16ed6"
