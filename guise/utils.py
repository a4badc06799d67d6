from __future__ import annotations

from urllib.parse import urlparse


def parse_uint(token: str, bits: int) -> int:
    """
    Parse an unsigned decimal token that must fit in ``bits`` bits.

    Surrounding whitespace is ignored; signs, hex and empty tokens are not
    accepted. Raises ValueError on anything else.
    """
    digits = token.strip()
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"not an unsigned integer: {token!r}")
    value = int(digits)
    if value >= 1 << bits:
        raise ValueError(f"{value} does not fit in {bits} bits")
    return value


def authority_from_url(url: str) -> str:
    """
    Return the authority segment of a URL (``host[:port]``).

    Returns an empty string when the URL has no ``//authority`` part.
    """
    return urlparse(url).netloc
