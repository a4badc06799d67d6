from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from .cookies import COOKIE_LIFETIME, ReplayCookie, is_set_cookie, parse_set_cookie


@dataclass(frozen=True)
class ResponseReplay:
    """What the server layer needs to mirror an upstream response."""

    status_code: int
    headers: list[tuple[str, str]]
    cookies: list[ReplayCookie]
    body: bytes


class UpstreamResponse:
    """
    Upstream response as received by the transport, preserving header order.
    """

    def __init__(
        self,
        status_code: int,
        reason: str,
        http_version: str,
        headers: Iterable[tuple[str, str]],
        body: bytes,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.http_version = http_version
        self.raw_headers: list[tuple[str, str]] = list(headers)
        self._body = body

    @property
    def headers(self) -> dict[str, str]:
        # Last-write wins while keeping access case-insensitive for callers.
        out: dict[str, str] = {}
        for name, value in self.raw_headers:
            out[name.lower()] = value
        return out

    @property
    def cookies(self) -> dict[str, str]:
        return parse_set_cookie(self.raw_headers)

    @property
    def content(self) -> bytes:
        return self._body

    def replay(self, now: datetime | None = None) -> ResponseReplay:
        """
        Build the replay data: status and body as-is, headers without
        Set-Cookie, and each cookie re-issued to expire COOKIE_LIFETIME from
        ``now``.
        """
        now = now or datetime.now(timezone.utc)
        expires = now + COOKIE_LIFETIME
        return ResponseReplay(
            status_code=self.status_code,
            headers=[(n, v) for n, v in self.raw_headers if not is_set_cookie(n)],
            cookies=[
                ReplayCookie(name, value, expires)
                for name, value in self.cookies.items()
            ],
            body=self._body,
        )

    def __repr__(self) -> str:
        return f"<UpstreamResponse [{self.status_code}] {len(self._body)} bytes>"
