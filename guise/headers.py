from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Final

from .utils import authority_from_url

logger = logging.getLogger(__name__)

INTERNAL_HEADER_PREFIX: Final[str] = "x-kc-"
HEADER_ORDER_KEY: Final[str] = "Header-Order:"
PSEUDO_HEADER_ORDER_KEY: Final[str] = "PHeader-Order:"
DEFAULT_PSEUDO_HEADER_ORDER: Final[tuple[str, ...]] = (
    ":method",
    ":authority",
    ":scheme",
    ":path",
)


def _sanitize_header(name: str, value: str) -> tuple[str, str]:
    """
    Sanitize header name and value to prevent HTTP header injection (CRLF injection).
    Strips CR, LF, and null bytes from both name and value.
    """
    clean_name = name.replace("\r", "").replace("\n", "").replace("\x00", "")
    clean_value = value.replace("\r", "").replace("\n", "").replace("\x00", "")
    return clean_name, clean_value


def _strip_whitespace(token: str) -> str:
    return "".join(token.split())


def flatten(headers: Mapping[str, Iterable[str]]) -> dict[str, str]:
    """
    Collapse an ordered multi-value header set into a flat mapping.

    This is lossy: only the last value of each key survives, and keys with no
    values are dropped.
    """
    flat: dict[str, str] = {}
    for name, values in headers.items():
        for value in values:
            flat[name] = value
    return flat


def sanitize(headers: Mapping[str, str], target_authority: str) -> dict[str, str]:
    """
    Prepare caller headers for the upstream request.

    Any header whose name contains "host" (case-insensitive) is set to
    ``target_authority``; headers using INTERNAL_HEADER_PREFIX are removed;
    everything else is copied unchanged.
    """
    out: dict[str, str] = {}
    for name, value in headers.items():
        lowered = name.lower()
        if "host" in lowered:
            out[name] = target_authority or value
        elif lowered.replace(" ", "").startswith(INTERNAL_HEADER_PREFIX):
            logger.debug("Dropping internal header %s", name)
        else:
            out[name] = value
    return out


def sanitize_for_url(headers: Mapping[str, str], url: str) -> dict[str, str]:
    """Same as sanitize, taking the authority from the request URL."""
    return sanitize(headers, authority_from_url(url))


def _is_content_length(name: str) -> bool:
    return _strip_whitespace(name).lower() == "content-length"


def to_ordered(
    headers: Mapping[str, str],
    header_order: Iterable[str] | None = None,
    pseudo_header_order: Iterable[str] | None = None,
) -> dict[str, list[str]]:
    """
    Convert flat headers into the ordered multi-value form the transport reads.

    Args:
        headers: flat header mapping.
        header_order: desired header order. Entries are arranged accordingly
            (case-insensitive; unlisted headers keep their position after the
            listed ones) and, when it has more than one entry, the list is also
            emitted under HEADER_ORDER_KEY.
        pseudo_header_order: emitted under PSEUDO_HEADER_ORDER_KEY when it has
            more than one entry, otherwise DEFAULT_PSEUDO_HEADER_ORDER is.

    Returns:
        ``name -> [value]`` plus the sentinel entries. Content-Length is never
        included; the transport computes it.
    """
    order = [_strip_whitespace(h) for h in header_order or ()]

    pending = [
        _sanitize_header(name, value)
        for name, value in headers.items()
        if not _is_content_length(name)
    ]
    rank: dict[str, int] = {}
    for i, name in enumerate(order):
        rank.setdefault(name.lower(), i)
    # Stable sort: listed headers first in hint order, the rest as given.
    pending.sort(key=lambda item: rank.get(item[0].lower(), len(order)))

    ordered: dict[str, list[str]] = {name: [value] for name, value in pending}

    if len(order) > 1:
        ordered[HEADER_ORDER_KEY] = order

    pseudo = [_strip_whitespace(h) for h in pseudo_header_order or ()]
    if len(pseudo) > 1:
        ordered[PSEUDO_HEADER_ORDER_KEY] = pseudo
    else:
        ordered[PSEUDO_HEADER_ORDER_KEY] = list(DEFAULT_PSEUDO_HEADER_ORDER)
    return ordered
