from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from h2.settings import SettingCodes

from ..errors import InvalidAkamaiFingerprint
from ..headers import DEFAULT_PSEUDO_HEADER_ORDER
from .identities import DEFAULT_IDENTITY, ClientIdentity, resolve_identity

logger = logging.getLogger(__name__)

MAX_UINT32: Final[int] = 2**32 - 1
DEFAULT_CONNECTION_FLOW: Final[int] = 15663105
# Window increments and stream identifiers are 31-bit on the wire.
MAX_WINDOW_INCREMENT: Final[int] = 2**31 - 1
MAX_STREAM_ID: Final[int] = 2**31 - 1

# SETTINGS identifiers accepted from caller-supplied frame data.
KNOWN_SETTINGS: Final[dict[int, SettingCodes]] = {
    int(code): code
    for code in (
        SettingCodes.HEADER_TABLE_SIZE,
        SettingCodes.ENABLE_PUSH,
        SettingCodes.MAX_CONCURRENT_STREAMS,
        SettingCodes.INITIAL_WINDOW_SIZE,
        SettingCodes.MAX_FRAME_SIZE,
        SettingCodes.MAX_HEADER_LIST_SIZE,
    )
}

PSEUDO_HEADER_ABBREVIATIONS: Final[dict[str, str]] = {
    "m": ":method",
    "a": ":authority",
    "s": ":scheme",
    "p": ":path",
}


@dataclass(frozen=True)
class PriorityFrame:
    """A PRIORITY frame sent right after the connection preface."""

    stream_id: int
    depends_on: int = 0
    exclusive: bool = False
    weight: int = 0


@dataclass(frozen=True)
class ClientProfile:
    """
    HTTP/2 session parameters of one client.

    ``settings_items`` is the single source of truth for both the SETTINGS
    values and their order on the wire, so ``settings_order`` is always a
    permutation of ``settings``'s keys.
    """

    settings_items: tuple[tuple[SettingCodes, int], ...]
    pseudo_header_order: tuple[str, ...]
    connection_flow: int
    priorities: tuple[PriorityFrame, ...] = ()

    def __post_init__(self) -> None:
        ids = [setting for setting, _ in self.settings_items]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate SETTINGS identifiers in {ids}")
        for setting, value in self.settings_items:
            if not 0 <= value <= MAX_UINT32:
                raise ValueError(f"SETTINGS value {value} for {setting!r} is not a u32")
        if not 1 <= self.connection_flow <= MAX_WINDOW_INCREMENT:
            raise ValueError(
                f"connection window {self.connection_flow} is outside 1-{MAX_WINDOW_INCREMENT}"
            )
        for p in self.priorities:
            if not 1 <= p.stream_id <= MAX_STREAM_ID:
                raise ValueError(f"invalid PRIORITY stream id {p.stream_id}")
            if not 0 <= p.depends_on <= MAX_STREAM_ID:
                raise ValueError(f"invalid PRIORITY dependency {p.depends_on}")

    @property
    def settings(self) -> Mapping[SettingCodes, int]:
        return MappingProxyType(dict(self.settings_items))

    @property
    def settings_order(self) -> tuple[SettingCodes, ...]:
        return tuple(setting for setting, _ in self.settings_items)

    def to_akamai(self) -> str:
        """Render the profile as an Akamai HTTP/2 fingerprint string."""
        settings = ";".join(f"{int(k)}:{v}" for k, v in self.settings_items)
        priorities = ",".join(
            f"{p.stream_id}:{int(p.exclusive)}:{p.depends_on}:{p.weight + 1}"
            for p in self.priorities
        ) or "0"
        pseudo = ",".join(h[1] for h in self.pseudo_header_order)
        return f"{settings}|{self.connection_flow}|{priorities}|{pseudo}"


MASP: Final[tuple[str, ...]] = DEFAULT_PSEUDO_HEADER_ORDER
MSPA: Final[tuple[str, ...]] = (":method", ":scheme", ":path", ":authority")
MPAS: Final[tuple[str, ...]] = (":method", ":path", ":authority", ":scheme")

S = SettingCodes

CHROME_106 = ClientProfile(
    settings_items=(
        (S.HEADER_TABLE_SIZE, 65536),
        (S.ENABLE_PUSH, 0),
        (S.MAX_CONCURRENT_STREAMS, 1000),
        (S.INITIAL_WINDOW_SIZE, 6291456),
        (S.MAX_HEADER_LIST_SIZE, 262144),
    ),
    pseudo_header_order=MASP,
    connection_flow=15663105,
)

# Chrome 103-105 and Opera 89-91 do not send ENABLE_PUSH.
CHROME_103 = ClientProfile(
    settings_items=(
        (S.HEADER_TABLE_SIZE, 65536),
        (S.MAX_CONCURRENT_STREAMS, 1000),
        (S.INITIAL_WINDOW_SIZE, 6291456),
        (S.MAX_HEADER_LIST_SIZE, 262144),
    ),
    pseudo_header_order=MASP,
    connection_flow=15663105,
)

SAFARI_DESKTOP = ClientProfile(
    settings_items=(
        (S.INITIAL_WINDOW_SIZE, 4194304),
        (S.MAX_CONCURRENT_STREAMS, 100),
    ),
    pseudo_header_order=MSPA,
    connection_flow=10485760,
)

SAFARI_MOBILE = ClientProfile(
    settings_items=(
        (S.INITIAL_WINDOW_SIZE, 2097152),
        (S.MAX_CONCURRENT_STREAMS, 100),
    ),
    pseudo_header_order=MSPA,
    connection_flow=10485760,
)

FIREFOX = ClientProfile(
    settings_items=(
        (S.HEADER_TABLE_SIZE, 65536),
        (S.INITIAL_WINDOW_SIZE, 131072),
        (S.MAX_FRAME_SIZE, 16384),
    ),
    pseudo_header_order=MPAS,
    connection_flow=12517377,
    priorities=(
        PriorityFrame(stream_id=3, depends_on=0, weight=200),
        PriorityFrame(stream_id=5, depends_on=0, weight=100),
        PriorityFrame(stream_id=7, depends_on=0, weight=0),
        PriorityFrame(stream_id=9, depends_on=7, weight=0),
        PriorityFrame(stream_id=11, depends_on=3, weight=0),
        PriorityFrame(stream_id=13, depends_on=0, weight=240),
    ),
)

# OkHttp-based Android apps advertise effectively unbounded limits.
ANDROID_APP = ClientProfile(
    settings_items=(
        (S.HEADER_TABLE_SIZE, 4096),
        (S.MAX_CONCURRENT_STREAMS, MAX_UINT32),
        (S.INITIAL_WINDOW_SIZE, 16777216),
        (S.MAX_FRAME_SIZE, 16384),
        (S.MAX_HEADER_LIST_SIZE, MAX_UINT32),
    ),
    pseudo_header_order=MPAS,
    connection_flow=15663105,
)

IOS_APP_SETTINGS: Final[tuple[tuple[SettingCodes, int], ...]] = (
    (S.HEADER_TABLE_SIZE, 4096),
    (S.MAX_CONCURRENT_STREAMS, 100),
    (S.INITIAL_WINDOW_SIZE, 2097152),
    (S.MAX_FRAME_SIZE, 16384),
    (S.MAX_HEADER_LIST_SIZE, MAX_UINT32),
)

PROFILES: dict[str, ClientProfile] = {
    "Chrome-103": CHROME_103,
    "Chrome-104": CHROME_103,
    "Chrome-105": CHROME_103,
    "Chrome-106": CHROME_106,
    "Safari-15.6.1": SAFARI_DESKTOP,
    "Safari-16.0": SAFARI_DESKTOP,
    "iPad-15.6": SAFARI_MOBILE,
    "iOS-15.5": SAFARI_MOBILE,
    "iOS-15.6": SAFARI_MOBILE,
    "iOS-16.0": SAFARI_MOBILE,
    "Firefox-102": FIREFOX,
    "Firefox-104": FIREFOX,
    "Firefox-105": FIREFOX,
    "Firefox-106": FIREFOX,
    "Opera-89": CHROME_103,
    "Opera-90": CHROME_103,
    "Opera-91": CHROME_103,
    "zalando_android_mobile": ANDROID_APP,
    "zalando_ios_mobile": ClientProfile(
        settings_items=IOS_APP_SETTINGS,
        pseudo_header_order=MPAS,
        connection_flow=15663105,
    ),
    "nike_ios_mobile": ClientProfile(
        settings_items=IOS_APP_SETTINGS,
        pseudo_header_order=MSPA,
        connection_flow=15663105,
    ),
    "nike_android_mobile": ANDROID_APP,
    # HTTP/1-only client; the HTTP/2 values are never sent.
    "cloudflare_custom": ANDROID_APP,
}

DEFAULT_PROFILE: Final[ClientProfile] = PROFILES[DEFAULT_IDENTITY.token]


def profile_for(identity: ClientIdentity | str) -> ClientProfile:
    """
    Return the HTTP/2 profile for an identity.

    Accepts a ClientIdentity or any name resolve_identity understands. Identities
    without a dedicated profile get DEFAULT_PROFILE; this never raises.
    """
    if not isinstance(identity, ClientIdentity):
        identity = resolve_identity(identity)
    profile = PROFILES.get(identity.token)
    if profile is None:
        logger.debug("No HTTP/2 profile for %s, using %s", identity, DEFAULT_IDENTITY)
        return DEFAULT_PROFILE
    return profile


def _coerce_settings(
    settings: Mapping[int, int] | Iterable[tuple[int, int]],
) -> list[tuple[SettingCodes, int]]:
    items = settings.items() if isinstance(settings, Mapping) else settings
    merged: dict[SettingCodes, int] = {}
    for setting_id, value in items:
        code = KNOWN_SETTINGS.get(int(setting_id))
        if code is None:
            logger.debug("Skipping unsupported SETTINGS id %s", setting_id)
            continue
        merged[code] = int(value)
    return list(merged.items())


def _coerce_priority(priority) -> PriorityFrame:
    if isinstance(priority, PriorityFrame):
        stream_id, depends_on = priority.stream_id, priority.depends_on
        exclusive, weight = priority.exclusive, priority.weight
    else:
        stream_id, depends_on, exclusive, weight = priority
    # Weights arrive as 1-256; the frame stores 0-255.
    wire_weight = min(max(int(weight) - 1, 0), 255)
    return PriorityFrame(
        stream_id=int(stream_id),
        depends_on=int(depends_on),
        exclusive=bool(exclusive),
        weight=wire_weight,
    )


def profile_from_frames(
    settings: Mapping[int, int] | Iterable[tuple[int, int]] | None = None,
    priorities: Iterable[PriorityFrame | tuple[int, int, bool, int]] | None = None,
    connection_flow: int | None = None,
    pseudo_header_order: Iterable[str] | None = None,
    default_pseudo_header_order: Iterable[str] | None = None,
) -> ClientProfile:
    """
    Build a profile from explicit HTTP/2 frame data.

    Args:
        settings: ``id -> value`` entries; ids outside 1-6 are skipped. When
            nothing usable is given, the default profile's SETTINGS are used.
        priorities: PriorityFrame objects or ``(stream_id, depends_on,
            exclusive, weight)`` tuples. Weights are one greater than the wire
            value and are corrected here.
        connection_flow: WINDOW_UPDATE increment; ``None`` or values <= 1 fall
            back to DEFAULT_CONNECTION_FLOW.
        pseudo_header_order: used only when it has more than one entry.
        default_pseudo_header_order: order used otherwise; defaults to the
            baseline profile's.

    Returns:
        A new ClientProfile.

    Raises:
        ValueError: if a SETTINGS value is not a u32, the window exceeds
            MAX_WINDOW_INCREMENT, or a PRIORITY stream id is out of range.
    """
    items = _coerce_settings(settings) if settings else []
    if not items:
        items = list(DEFAULT_PROFILE.settings_items)

    if connection_flow is None or connection_flow <= 1:
        connection_flow = DEFAULT_CONNECTION_FLOW

    order = [h.strip() for h in pseudo_header_order or ()]
    if len(order) > 1:
        pseudo = tuple(order)
    elif default_pseudo_header_order is not None:
        pseudo = tuple(default_pseudo_header_order)
    else:
        pseudo = DEFAULT_PROFILE.pseudo_header_order

    return ClientProfile(
        settings_items=tuple(items),
        pseudo_header_order=pseudo,
        connection_flow=connection_flow,
        priorities=tuple(_coerce_priority(p) for p in priorities or ()),
    )


def _akamai_int(token: str, text: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise InvalidAkamaiFingerprint(
            f"invalid number {token!r} in Akamai fingerprint {text!r}"
        ) from exc


def parse_akamai(text: str) -> ClientProfile:
    """
    Parse an Akamai HTTP/2 fingerprint, e.g.
    ``1:65536;2:0;3:1000;4:6291456;6:262144|15663105|0|m,a,s,p``.

    Priority entries are ``stream:exclusive:depends_on:weight`` with the weight
    one greater than the wire value; ``0`` means no PRIORITY frames.
    """
    parts = text.strip().split("|")
    if len(parts) != 4:
        raise InvalidAkamaiFingerprint(
            f"expected 4 '|'-separated sections, got {len(parts)}: {text!r}"
        )
    settings_part, window_part, priority_part, pseudo_part = parts

    settings = []
    for entry in filter(None, settings_part.split(";")):
        key, sep, value = entry.partition(":")
        if not sep:
            raise InvalidAkamaiFingerprint(f"invalid setting {entry!r} in {text!r}")
        settings.append((_akamai_int(key, text), _akamai_int(value, text)))

    priorities = []
    if priority_part not in ("", "0"):
        for entry in priority_part.split(","):
            fields = entry.split(":")
            if len(fields) != 4:
                raise InvalidAkamaiFingerprint(
                    f"invalid priority {entry!r} in {text!r}"
                )
            stream_id, exclusive, depends_on, weight = (
                _akamai_int(f, text) for f in fields
            )
            priorities.append((stream_id, depends_on, bool(exclusive), weight))

    pseudo = []
    for abbrev in filter(None, pseudo_part.split(",")):
        header = PSEUDO_HEADER_ABBREVIATIONS.get(abbrev.strip().lower())
        if header is None:
            raise InvalidAkamaiFingerprint(
                f"unknown pseudo-header {abbrev!r} in {text!r}"
            )
        pseudo.append(header)

    window = _akamai_int(window_part, text) if window_part else None
    try:
        return profile_from_frames(
            settings=settings,
            priorities=priorities,
            connection_flow=window,
            pseudo_header_order=pseudo,
        )
    except ValueError as exc:
        raise InvalidAkamaiFingerprint(f"{exc} in Akamai fingerprint {text!r}") from exc
