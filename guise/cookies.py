from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from http.cookies import SimpleCookie
from typing import Final

COOKIE_LIFETIME: Final[timedelta] = timedelta(hours=24)


def is_set_cookie(name: str) -> bool:
    return "set-cookie" in name.replace(" ", "").lower()


def parse_set_cookie(headers: Iterable[tuple[str, str]]) -> dict[str, str]:
    """
    Collect ``name -> value`` from every Set-Cookie header. Later cookies with
    the same name replace earlier ones.
    """
    cookies: dict[str, str] = {}
    for name, value in headers:
        if not is_set_cookie(name):
            continue
        cookie = SimpleCookie()
        cookie.load(value)
        for morsel in cookie.values():
            cookies[morsel.key] = morsel.value
    return cookies


@dataclass(frozen=True)
class ReplayCookie:
    """A cookie to re-issue on the inbound response."""

    name: str
    value: str
    expires: datetime

    def to_header(self) -> str:
        expires = self.expires
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        stamp = format_datetime(expires.astimezone(timezone.utc), usegmt=True)
        return f"{self.name}={self.value}; Expires={stamp}"
