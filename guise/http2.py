from __future__ import annotations

from typing import Final

from hyperframe import frame as h2frame

from .impersonation.profiles import ClientProfile

CONNECTION_PREFACE: Final[bytes] = b"PRI * HTTP/2.0\r\n\r\nSM\r\n\r\n"


def pseudo_headers(
    profile: ClientProfile,
    method: str,
    authority: str,
    scheme: str,
    path: str,
) -> list[tuple[str, str]]:
    """Return the request pseudo-headers in the profile's order."""
    values = {
        ":method": method,
        ":authority": authority,
        ":scheme": scheme,
        ":path": path,
    }
    return [(name, values[name]) for name in profile.pseudo_header_order if name in values]


def preface_frames(profile: ClientProfile) -> list[h2frame.Frame]:
    """
    Frames a client with this profile sends right after the connection preface:
    SETTINGS (in settings_order), the connection WINDOW_UPDATE, then any
    PRIORITY frames.
    """
    frames: list[h2frame.Frame] = [
        h2frame.SettingsFrame(0, settings=dict(profile.settings_items)),
        h2frame.WindowUpdateFrame(0, window_increment=profile.connection_flow),
    ]
    for priority in profile.priorities:
        frames.append(
            h2frame.PriorityFrame(
                priority.stream_id,
                depends_on=priority.depends_on,
                stream_weight=priority.weight,
                exclusive=priority.exclusive,
            )
        )
    return frames


def encode_preface(profile: ClientProfile) -> bytes:
    """Serialize the client preface magic followed by preface_frames()."""
    return CONNECTION_PREFACE + b"".join(f.serialize() for f in preface_frames(profile))
