"""Pytest configuration and fixtures."""

import pytest

from guise.models import UpstreamResponse


CHROME_JA3 = (
    "771,4865-4866,0-23-65281-10-11-35-16-5-13-18-51-45-43-21,29-23-24,0"
)
FIREFOX_AKAMAI = (
    "1:65536;4:131072;5:16384|12517377|"
    "3:0:0:201,5:0:0:101,7:0:0:1,9:0:7:1,11:0:3:1,13:0:0:241|m,p,a,s"
)


@pytest.fixture
def chrome_ja3():
    """A Chrome-like JA3 string with padding and ALPN."""
    return CHROME_JA3


@pytest.fixture
def firefox_akamai():
    """Akamai HTTP/2 fingerprint of Firefox 106."""
    return FIREFOX_AKAMAI


@pytest.fixture
def upstream_response():
    """Create a sample upstream response with cookies."""
    return UpstreamResponse(
        status_code=302,
        reason="Found",
        http_version="2",
        headers=[
            ("Content-Type", "text/html"),
            ("Set-Cookie", "session=abc123; Path=/; HttpOnly"),
            ("Location", "/login"),
            ("set-cookie", "theme=dark"),
        ],
        body=b"<html></html>",
    )
