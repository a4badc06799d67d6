from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientIdentity:
    """A concrete client to impersonate, e.g. Chrome 106 or the Nike iOS app."""

    client: str
    version: str = ""

    @property
    def token(self) -> str:
        return f"{self.client}-{self.version}" if self.version else self.client

    def __str__(self) -> str:
        return self.token


IDENTITIES: dict[str, ClientIdentity] = {
    "HelloCustom": ClientIdentity("Custom", "0"),
    "HelloGolang": ClientIdentity("Golang", "0"),
    "HelloRandomized": ClientIdentity("Randomized", "0"),
    "HelloRandomizedALPN": ClientIdentity("Randomized-ALPN", "0"),
    "HelloRandomizedNoALPN": ClientIdentity("Randomized-NoALPN", "0"),
    # Chrome
    "HelloChrome_58": ClientIdentity("Chrome", "58"),
    "HelloChrome_62": ClientIdentity("Chrome", "62"),
    "HelloChrome_70": ClientIdentity("Chrome", "70"),
    "HelloChrome_72": ClientIdentity("Chrome", "72"),
    "HelloChrome_83": ClientIdentity("Chrome", "83"),
    "HelloChrome_87": ClientIdentity("Chrome", "87"),
    "HelloChrome_96": ClientIdentity("Chrome", "96"),
    "HelloChrome_100": ClientIdentity("Chrome", "100"),
    "HelloChrome_103": ClientIdentity("Chrome", "103"),
    "HelloChrome_104": ClientIdentity("Chrome", "104"),
    "HelloChrome_105": ClientIdentity("Chrome", "105"),
    "HelloChrome_106": ClientIdentity("Chrome", "106"),
    "HelloChrome_107": ClientIdentity("Chrome", "107"),
    # Firefox
    "HelloFirefox_55": ClientIdentity("Firefox", "55"),
    "HelloFirefox_56": ClientIdentity("Firefox", "56"),
    "HelloFirefox_63": ClientIdentity("Firefox", "63"),
    "HelloFirefox_65": ClientIdentity("Firefox", "65"),
    "HelloFirefox_102": ClientIdentity("Firefox", "102"),
    "HelloFirefox_104": ClientIdentity("Firefox", "104"),
    "HelloFirefox_105": ClientIdentity("Firefox", "105"),
    "HelloFirefox_106": ClientIdentity("Firefox", "106"),
    # Apple
    "HelloIOS_11_1": ClientIdentity("iOS", "11.1"),
    "HelloIOS_12_1": ClientIdentity("iOS", "12.1"),
    "HelloIOS_13": ClientIdentity("iOS", "13"),
    "HelloIOS_14": ClientIdentity("iOS", "14"),
    "HelloIOS_15_5": ClientIdentity("iOS", "15.5"),
    "HelloIOS_15_6": ClientIdentity("iOS", "15.6"),
    "HelloIOS_16_0": ClientIdentity("iOS", "16.0"),
    "HelloSafari_15_6_1": ClientIdentity("Safari", "15.6.1"),
    "HelloSafari_16_0": ClientIdentity("Safari", "16.0"),
    "HelloIPad_15_6": ClientIdentity("iPad", "15.6"),
    # Opera
    "HelloOpera_89": ClientIdentity("Opera", "89"),
    "HelloOpera_90": ClientIdentity("Opera", "90"),
    "HelloOpera_91": ClientIdentity("Opera", "91"),
    # Android stock stack
    "HelloAndroid_11_OkHttp": ClientIdentity("Android", "11"),
    # Mobile apps, identified by their own HTTP/2 profiles
    "zalando_android_mobile": ClientIdentity("zalando_android_mobile"),
    "zalando_ios_mobile": ClientIdentity("zalando_ios_mobile"),
    "nike_ios_mobile": ClientIdentity("nike_ios_mobile"),
    "nike_android_mobile": ClientIdentity("nike_android_mobile"),
    "cloudflare_custom": ClientIdentity("cloudflare_custom"),
}

# Each *_Auto name points at the newest dated variant of its own family.
AUTO_ALIASES: Final[dict[str, str]] = {
    "HelloChrome_Auto": "HelloChrome_106",
    "HelloFirefox_Auto": "HelloFirefox_106",
    "HelloIOS_Auto": "HelloIOS_16_0",
    "HelloSafari_Auto": "HelloSafari_16_0",
    "HelloIPad_Auto": "HelloIPad_15_6",
    "HelloOpera_Auto": "HelloOpera_91",
}

for alias, target in AUTO_ALIASES.items():
    IDENTITIES[alias] = IDENTITIES[target]

DEFAULT_IDENTITY: Final[ClientIdentity] = IDENTITIES["HelloChrome_Auto"]

# Names and canonical tokens, upper-cased for case-insensitive lookup.
_LOOKUP: dict[str, ClientIdentity] = {}
for name, identity in IDENTITIES.items():
    _LOOKUP.setdefault(identity.token.upper(), identity)
for name, identity in IDENTITIES.items():
    _LOOKUP[name.upper()] = identity


def resolve_identity(name: str) -> ClientIdentity:
    """
    Resolve an identity name such as ``"HelloChrome_106"`` (any casing) or a
    canonical token such as ``"Chrome-106"``.

    Unknown names resolve to DEFAULT_IDENTITY; this never raises.
    """
    identity = _LOOKUP.get(name.upper())
    if identity is None:
        logger.debug("Unknown client identity %r, using %s", name, DEFAULT_IDENTITY)
        return DEFAULT_IDENTITY
    return identity
