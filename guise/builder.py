from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from .headers import flatten, sanitize_for_url, to_ordered
from .impersonation.identities import ClientIdentity, resolve_identity
from .impersonation.ja3 import FingerprintSpec, parse_ja3
from .impersonation.profiles import (
    ClientProfile,
    PriorityFrame,
    parse_akamai,
    profile_for,
    profile_from_frames,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestFingerprint:
    """Everything the TLS engine and HTTP/2 transport need for one request."""

    identity: ClientIdentity
    tls: FingerprintSpec
    http2: ClientProfile
    headers: dict[str, list[str]]


def _flat_headers(headers: Mapping[str, str | Iterable[str]] | None) -> dict[str, str]:
    if not headers:
        return {}
    if any(not isinstance(v, str) for v in headers.values()):
        return flatten(
            {k: [v] if isinstance(v, str) else v for k, v in headers.items()}
        )
    return dict(headers)


def build_request_fingerprint(
    ja3: str,
    protocol: str,
    client: str,
    headers: Mapping[str, str | Iterable[str]] | None,
    url: str,
    *,
    header_order: Iterable[str] | None = None,
    pseudo_header_order: Iterable[str] | None = None,
    http2_settings: Mapping[int, int] | Iterable[tuple[int, int]] | None = None,
    http2_priorities: Iterable[PriorityFrame | tuple[int, int, bool, int]] | None = None,
    connection_flow: int | None = None,
    akamai: str | None = None,
) -> RequestFingerprint:
    """
    Build the TLS template, HTTP/2 profile and ordered headers for one request.

    Args:
        ja3: JA3 string for the ClientHello.
        protocol: ``"1"`` for HTTP/1.1, anything else for HTTP/2.
        client: identity name, e.g. ``"HelloChrome_106"``; unknown names use
            the default identity.
        headers: flat or multi-value request headers.
        url: target URL; its authority replaces any host header.
        header_order: optional header order hint.
        pseudo_header_order: optional pseudo-header order hint. When it has
            more than one entry it replaces the profile's order, otherwise the
            profile's order is used.
        http2_settings, http2_priorities: explicit frame data replacing the
            identity's profile (see profile_from_frames).
        connection_flow: WINDOW_UPDATE increment. With frame data it follows
            profile_from_frames; on its own it replaces the window of the
            selected profile when greater than 1.
        akamai: Akamai HTTP/2 fingerprint replacing the identity's profile.

    Raises:
        JA3ParseError: if the JA3 string is malformed.
        InvalidAkamaiFingerprint: if ``akamai`` is malformed.
        ValueError: if the frame data does not fit on the wire.
    """
    tls = parse_ja3(ja3, protocol)
    identity = resolve_identity(client)

    pseudo_hint = [h.strip() for h in pseudo_header_order or ()]
    identity_profile = profile_for(identity)
    if akamai:
        profile = parse_akamai(akamai)
    elif http2_settings or http2_priorities:
        profile = profile_from_frames(
            settings=http2_settings,
            priorities=http2_priorities,
            connection_flow=connection_flow,
            pseudo_header_order=pseudo_hint,
            default_pseudo_header_order=identity_profile.pseudo_header_order,
        )
    elif connection_flow is not None and connection_flow > 1:
        profile = replace(identity_profile, connection_flow=connection_flow)
    else:
        if connection_flow is not None:
            logger.debug("Ignoring connection window %s, keeping the profile's", connection_flow)
        profile = identity_profile

    # The pseudo-header sentinel and the HTTP/2 profile must agree.
    if len(pseudo_hint) > 1 and tuple(pseudo_hint) != profile.pseudo_header_order:
        profile = replace(profile, pseudo_header_order=tuple(pseudo_hint))

    flat = sanitize_for_url(_flat_headers(headers), url)
    return RequestFingerprint(
        identity=identity,
        tls=tls,
        http2=profile,
        headers=to_ordered(flat, header_order, profile.pseudo_header_order),
    )
