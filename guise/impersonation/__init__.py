from .extensions import (
    EXTENSIONS,
    GREASE_PLACEHOLDER,
    Extension,
    ExtensionContext,
    GenericExtension,
    TLSVersion,
    map_extension,
    register_extension,
)
from .ja3 import FingerprintSpec, parse_ja3
from .identities import DEFAULT_IDENTITY, ClientIdentity, resolve_identity
from .profiles import (
    DEFAULT_PROFILE,
    PROFILES,
    ClientProfile,
    PriorityFrame,
    parse_akamai,
    profile_for,
    profile_from_frames,
)

__all__ = [
    "EXTENSIONS",
    "GREASE_PLACEHOLDER",
    "Extension",
    "ExtensionContext",
    "GenericExtension",
    "TLSVersion",
    "map_extension",
    "register_extension",
    "FingerprintSpec",
    "parse_ja3",
    "DEFAULT_IDENTITY",
    "ClientIdentity",
    "resolve_identity",
    "DEFAULT_PROFILE",
    "PROFILES",
    "ClientProfile",
    "PriorityFrame",
    "parse_akamai",
    "profile_for",
    "profile_from_frames",
]
