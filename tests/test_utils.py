"""Tests for guise.utils module."""

import pytest

from guise.utils import authority_from_url, parse_uint


class TestParseUint:
    """Tests for parse_uint function."""

    def test_parses_decimal(self):
        """Test a plain decimal token."""
        assert parse_uint("771", 16) == 771

    def test_surrounding_whitespace_ignored(self):
        """Test whitespace around the token is tolerated."""
        assert parse_uint(" 29 ", 16) == 29

    def test_max_value_fits(self):
        """Test the largest value for the width is accepted."""
        assert parse_uint("65535", 16) == 65535
        assert parse_uint("255", 8) == 255

    @pytest.mark.parametrize("token", ["65536", "70000"])
    def test_overflow_raises(self, token):
        """Test values wider than the field raise ValueError."""
        with pytest.raises(ValueError):
            parse_uint(token, 16)

    def test_byte_overflow_raises(self):
        """Test 256 does not fit in 8 bits."""
        with pytest.raises(ValueError):
            parse_uint("256", 8)

    @pytest.mark.parametrize("token", ["", " ", "abc", "-1", "+1", "0x10", "1.5", "١٢"])
    def test_non_decimal_raises(self, token):
        """Test non-decimal tokens raise ValueError."""
        with pytest.raises(ValueError):
            parse_uint(token, 16)


class TestAuthorityFromUrl:
    """Tests for authority_from_url function."""

    def test_host_only(self):
        """Test the authority of a plain https URL."""
        assert authority_from_url("https://new.example/path") == "new.example"

    def test_keeps_port(self):
        """Test the port stays part of the authority."""
        assert authority_from_url("https://api.example.com:8443/v1") == "api.example.com:8443"

    def test_no_path(self):
        """Test a URL without a path."""
        assert authority_from_url("http://example.com") == "example.com"

    def test_missing_authority_returns_empty(self):
        """Test a URL without // has no authority."""
        assert authority_from_url("example.com/path") == ""
