"""Tests for short code generation."""

import codes
from validators import is_valid_code


class TestGenerateCode:
    """Test random code generation."""

    def test_default_length(self):
        assert len(codes.generate_code()) == codes.CODE_LENGTH == 6

    def test_codes_are_well_formed(self):
        for _ in range(200):
            code = codes.generate_code()
            assert is_valid_code(code)
            assert set(code) <= set(codes.ALPHABET)

    def test_alphabet_is_62_characters(self):
        assert len(set(codes.ALPHABET)) == 62

    def test_codes_vary(self):
        """No counter or seed is shared between calls."""
        assert len({codes.generate_code() for _ in range(100)}) > 95
