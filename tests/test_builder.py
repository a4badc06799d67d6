"""Tests for guise.builder module."""

import pytest

from guise.builder import RequestFingerprint, build_request_fingerprint
from guise.errors import InvalidAkamaiFingerprint, InvalidCipher
from guise.headers import HEADER_ORDER_KEY, PSEUDO_HEADER_ORDER_KEY
from guise.impersonation.identities import DEFAULT_IDENTITY, ClientIdentity
from guise.impersonation.profiles import (
    CHROME_106,
    DEFAULT_CONNECTION_FLOW,
    FIREFOX,
    PriorityFrame,
)
from h2.settings import SettingCodes


URL = "https://example.com/path?q=1"


class TestBuildRequestFingerprint:
    """Tests for build_request_fingerprint."""

    def test_chrome_request(self, chrome_ja3):
        """Test a Chrome request assembles every part."""
        result = build_request_fingerprint(
            chrome_ja3,
            "2",
            "HelloChrome_106",
            {
                "Host": "attacker.example",
                "User-Agent": "Mozilla/5.0",
                "Content-Length": "12",
                "x-kc-session": "internal",
            },
            URL,
        )
        assert isinstance(result, RequestFingerprint)
        assert result.identity == ClientIdentity("Chrome", "106")
        assert result.http2 is CHROME_106
        assert result.tls.to_ja3() == chrome_ja3
        assert result.headers == {
            "Host": ["example.com"],
            "User-Agent": ["Mozilla/5.0"],
            PSEUDO_HEADER_ORDER_KEY: [":method", ":authority", ":scheme", ":path"],
        }

    def test_firefox_profile_pseudo_order(self, chrome_ja3):
        """Test the pseudo-header order follows the identity's profile."""
        result = build_request_fingerprint(chrome_ja3, "2", "HelloFirefox_106", {}, URL)
        assert result.http2 is FIREFOX
        assert result.headers[PSEUDO_HEADER_ORDER_KEY] == [
            ":method",
            ":path",
            ":authority",
            ":scheme",
        ]

    def test_unknown_client_uses_default(self, chrome_ja3):
        """Test an unknown client name falls back to the default identity."""
        result = build_request_fingerprint(chrome_ja3, "2", "Netscape_4", None, URL)
        assert result.identity == DEFAULT_IDENTITY
        assert result.http2 is CHROME_106
        assert list(result.headers) == [PSEUDO_HEADER_ORDER_KEY]

    def test_header_order_hint(self, chrome_ja3):
        """Test the header order hint arranges headers and is emitted."""
        result = build_request_fingerprint(
            chrome_ja3,
            "2",
            "HelloChrome_106",
            {"Accept": "*/*", "User-Agent": "ua", "Host": "x"},
            URL,
            header_order=["host", "user-agent", "accept"],
        )
        assert list(result.headers)[:3] == ["Host", "User-Agent", "Accept"]
        assert result.headers[HEADER_ORDER_KEY] == ["host", "user-agent", "accept"]

    def test_pseudo_hint_overrides_profile(self, chrome_ja3):
        """Test a pseudo-header hint with several entries wins over the profile."""
        hint = [":method", ":scheme", ":path", ":authority"]
        result = build_request_fingerprint(
            chrome_ja3, "2", "HelloChrome_106", {}, URL, pseudo_header_order=hint
        )
        assert result.headers[PSEUDO_HEADER_ORDER_KEY] == hint

    def test_single_entry_pseudo_hint_ignored(self, chrome_ja3):
        """Test a one-entry pseudo-header hint keeps the profile's order."""
        result = build_request_fingerprint(
            chrome_ja3,
            "2",
            "HelloFirefox_106",
            {},
            URL,
            pseudo_header_order=[":path"],
        )
        assert result.headers[PSEUDO_HEADER_ORDER_KEY][1] == ":path"

    def test_multi_value_headers_flattened(self, chrome_ja3):
        """Test multi-value header sets keep only the last value."""
        result = build_request_fingerprint(
            chrome_ja3,
            "2",
            "HelloChrome_106",
            {"Accept": ["text/html", "*/*"], "Cookie": "a=1", "X-Empty": []},
            URL,
        )
        assert result.headers["Accept"] == ["*/*"]
        assert result.headers["Cookie"] == ["a=1"]
        assert "X-Empty" not in result.headers

    def test_akamai_fingerprint(self, chrome_ja3, firefox_akamai):
        """Test an Akamai fingerprint replaces the identity's profile."""
        result = build_request_fingerprint(
            chrome_ja3, "2", "HelloChrome_106", {}, URL, akamai=firefox_akamai
        )
        assert result.http2 == FIREFOX
        assert result.identity == ClientIdentity("Chrome", "106")
        assert result.headers[PSEUDO_HEADER_ORDER_KEY][1] == ":path"

    def test_akamai_wins_over_frames(self, chrome_ja3, firefox_akamai):
        """Test an Akamai fingerprint takes precedence over explicit frames."""
        result = build_request_fingerprint(
            chrome_ja3,
            "2",
            "HelloChrome_106",
            {},
            URL,
            http2_settings={1: 4096},
            akamai=firefox_akamai,
        )
        assert result.http2 == FIREFOX

    def test_explicit_frames(self, chrome_ja3):
        """Test explicit SETTINGS and PRIORITY data build a new profile."""
        result = build_request_fingerprint(
            chrome_ja3,
            "2",
            "HelloChrome_106",
            {},
            URL,
            http2_settings={1: 4096, 4: 65535, 99: 1},
            http2_priorities=[(3, 0, False, 201)],
            connection_flow=1,
        )
        assert result.http2.settings_items == (
            (SettingCodes.HEADER_TABLE_SIZE, 4096),
            (SettingCodes.INITIAL_WINDOW_SIZE, 65535),
        )
        assert result.http2.priorities == (PriorityFrame(3, 0, False, 200),)
        assert result.http2.connection_flow == DEFAULT_CONNECTION_FLOW

    def test_http1_protocol(self, chrome_ja3):
        """Test protocol "1" advertises http/1.1 in ALPN."""
        result = build_request_fingerprint(chrome_ja3, "1", "HelloChrome_106", {}, URL)
        alpn = [
            ext for ext in result.tls.extensions if ext.extension_id == 16
        ]
        assert alpn[0].protocols == ("http/1.1",)

    def test_invalid_ja3_propagates(self):
        """Test JA3 errors are raised to the caller."""
        with pytest.raises(InvalidCipher):
            build_request_fingerprint("771,abc,0,29,0", "2", "HelloChrome_106", {}, URL)

    def test_invalid_akamai_propagates(self, chrome_ja3):
        """Test Akamai errors are raised to the caller."""
        with pytest.raises(InvalidAkamaiFingerprint):
            build_request_fingerprint(
                chrome_ja3, "2", "HelloChrome_106", {}, URL, akamai="1:2|3"
            )

    def test_window_only_override(self, chrome_ja3):
        """Test a connection window on its own replaces the profile's window."""
        result = build_request_fingerprint(
            chrome_ja3, "2", "HelloFirefox_106", {}, URL, connection_flow=1000
        )
        assert result.http2.connection_flow == 1000
        assert result.http2.settings_items == FIREFOX.settings_items
        assert result.http2.priorities == FIREFOX.priorities

    def test_window_only_override_of_one_ignored(self, chrome_ja3):
        """Test a window of 1 or less keeps the identity's window."""
        result = build_request_fingerprint(
            chrome_ja3, "2", "HelloFirefox_106", {}, URL, connection_flow=1
        )
        assert result.http2 is FIREFOX

    def test_window_too_large_raises(self, chrome_ja3):
        """Test a window that does not fit in 31 bits is rejected."""
        with pytest.raises(ValueError):
            build_request_fingerprint(
                chrome_ja3, "2", "HelloChrome_106", {}, URL, connection_flow=2**40
            )

    def test_pseudo_hint_applied_to_profile(self, chrome_ja3):
        """Test the profile and the pseudo-header sentinel share the hint."""
        hint = [":method", ":scheme", ":path", ":authority"]
        result = build_request_fingerprint(
            chrome_ja3, "2", "HelloChrome_106", {}, URL, pseudo_header_order=hint
        )
        assert result.http2.pseudo_header_order == tuple(hint)
        assert list(result.http2.pseudo_header_order) == result.headers[PSEUDO_HEADER_ORDER_KEY]
        assert result.http2.settings_items == CHROME_106.settings_items

    def test_frames_keep_identity_pseudo_order(self, chrome_ja3):
        """Test frame overrides without a hint keep the identity's pseudo order."""
        result = build_request_fingerprint(
            chrome_ja3,
            "2",
            "HelloSafari_16_0",
            {},
            URL,
            http2_settings={4: 4194304, 3: 100},
        )
        safari = (":method", ":scheme", ":path", ":authority")
        assert result.http2.pseudo_header_order == safari
        assert result.headers[PSEUDO_HEADER_ORDER_KEY] == list(safari)
