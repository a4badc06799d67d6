"""
TLS extension descriptors and the JA3 extension-id dispatch table.

Every descriptor is an immutable value that the TLS engine turns into the
matching ClientHello extension. Fixed payloads (signature algorithms, key share
groups, ...) are kept in the constant tables at the top of this module so new
identities can be supported by editing data rather than parsing code.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Final

from ..errors import InvalidExtensionID
from ..utils import parse_uint

GREASE_PLACEHOLDER: Final[int] = 0x0A0A


class TLSVersion(IntEnum):
    TLS10 = 0x0301
    TLS11 = 0x0302
    TLS12 = 0x0303
    TLS13 = 0x0304


# SignatureScheme values, in the order Chrome advertises them.
SIGNATURE_ALGORITHMS: Final[tuple[int, ...]] = (
    0x0403,  # ecdsa_secp256r1_sha256
    0x0804,  # rsa_pss_rsae_sha256
    0x0401,  # rsa_pkcs1_sha256
    0x0503,  # ecdsa_secp384r1_sha384
    0x0805,  # rsa_pss_rsae_sha384
    0x0501,  # rsa_pkcs1_sha384
    0x0806,  # rsa_pss_rsae_sha512
    0x0601,  # rsa_pkcs1_sha512
)

SIGNATURE_ALGORITHM_NAMES: Final[dict[int, str]] = {
    0x0403: "ecdsa_secp256r1_sha256",
    0x0804: "rsa_pss_rsae_sha256",
    0x0401: "rsa_pkcs1_sha256",
    0x0503: "ecdsa_secp384r1_sha384",
    0x0805: "rsa_pss_rsae_sha384",
    0x0501: "rsa_pkcs1_sha384",
    0x0806: "rsa_pss_rsae_sha512",
    0x0601: "rsa_pkcs1_sha512",
}

CERT_COMPRESSION_ZLIB: Final[int] = 1
CERT_COMPRESSION_BROTLI: Final[int] = 2
CERT_COMPRESSION_ALGORITHMS: Final[tuple[int, ...]] = (
    CERT_COMPRESSION_BROTLI,
    CERT_COMPRESSION_ZLIB,
)

PSK_MODE_DHE: Final[int] = 1
PSK_MODES: Final[tuple[int, ...]] = (PSK_MODE_DHE,)

# One-byte payloads are placeholders; the TLS engine generates the real keys.
KEY_SHARES: Final[tuple[tuple[int, bytes], ...]] = (
    (29, b"\x20"),  # X25519
    (23, b"\x41"),  # secp256r1
)

RENEGOTIATE_ONCE_AS_CLIENT: Final[int] = 1
BORING_PADDING_STYLE: Final[str] = "boring"

CHANNEL_ID_EXTENSION: Final[tuple[int, bytes]] = (0x7550, b"\x00")
EARLY_DATA_EXTENSION: Final[int] = 42


@dataclass(frozen=True)
class ExtensionContext:
    """
    Values an extension may embed, parsed from the other JA3 fields.

    Curves and points must be parsed before any extension is built, so they are
    passed in here rather than read from parser state.
    """

    protocol: str = "2"
    curves: tuple[int, ...] = ()
    points: tuple[int, ...] = ()
    version_max: int = TLSVersion.TLS13

    @property
    def alpn_protocols(self) -> tuple[str, ...]:
        return ("http/1.1",) if self.protocol == "1" else ("h2",)


@dataclass(frozen=True)
class Extension:
    kind: ClassVar[str] = "extension"
    extension_id: int


@dataclass(frozen=True)
class GreaseExtension(Extension):
    kind: ClassVar[str] = "grease"
    extension_id: int = field(default=GREASE_PLACEHOLDER, init=False)


@dataclass(frozen=True)
class SNIExtension(Extension):
    kind: ClassVar[str] = "sni"
    extension_id: int = field(default=0, init=False)


@dataclass(frozen=True)
class StatusRequestExtension(Extension):
    kind: ClassVar[str] = "status_request"
    extension_id: int = field(default=5, init=False)


@dataclass(frozen=True)
class SupportedCurvesExtension(Extension):
    kind: ClassVar[str] = "supported_curves"
    extension_id: int = field(default=10, init=False)
    curves: tuple[int, ...] = ()


@dataclass(frozen=True)
class SupportedPointsExtension(Extension):
    kind: ClassVar[str] = "supported_points"
    extension_id: int = field(default=11, init=False)
    points: tuple[int, ...] = ()


@dataclass(frozen=True)
class SignatureAlgorithmsExtension(Extension):
    kind: ClassVar[str] = "signature_algorithms"
    extension_id: int = field(default=13, init=False)
    algorithms: tuple[int, ...] = SIGNATURE_ALGORITHMS


@dataclass(frozen=True)
class ALPNExtension(Extension):
    kind: ClassVar[str] = "alpn"
    extension_id: int = field(default=16, init=False)
    protocols: tuple[str, ...] = ("h2",)


@dataclass(frozen=True)
class SCTExtension(Extension):
    kind: ClassVar[str] = "sct"
    extension_id: int = field(default=18, init=False)


@dataclass(frozen=True)
class PaddingExtension(Extension):
    kind: ClassVar[str] = "padding"
    extension_id: int = field(default=21, init=False)
    style: str = BORING_PADDING_STYLE


@dataclass(frozen=True)
class ExtendedMasterSecretExtension(Extension):
    kind: ClassVar[str] = "extended_master_secret"
    extension_id: int = field(default=23, init=False)


@dataclass(frozen=True)
class CompressCertificateExtension(Extension):
    kind: ClassVar[str] = "compress_certificate"
    extension_id: int = field(default=27, init=False)
    algorithms: tuple[int, ...] = CERT_COMPRESSION_ALGORITHMS


@dataclass(frozen=True)
class RecordSizeLimitExtension(Extension):
    kind: ClassVar[str] = "record_size_limit"
    extension_id: int = field(default=28, init=False)


@dataclass(frozen=True)
class DelegatedCredentialsExtension(Extension):
    kind: ClassVar[str] = "delegated_credentials"
    extension_id: int = field(default=34, init=False)
    algorithms: tuple[int, ...] = SIGNATURE_ALGORITHMS


@dataclass(frozen=True)
class SessionTicketExtension(Extension):
    kind: ClassVar[str] = "session_ticket"
    extension_id: int = field(default=35, init=False)


@dataclass(frozen=True)
class PreSharedKeyExtension(Extension):
    kind: ClassVar[str] = "pre_shared_key"
    extension_id: int = field(default=41, init=False)


@dataclass(frozen=True)
class SupportedVersionsExtension(Extension):
    kind: ClassVar[str] = "supported_versions"
    extension_id: int = field(default=43, init=False)
    versions: tuple[int, ...] = (TLSVersion.TLS13,)


@dataclass(frozen=True)
class CookieExtension(Extension):
    kind: ClassVar[str] = "cookie"
    extension_id: int = field(default=44, init=False)


@dataclass(frozen=True)
class PSKKeyExchangeModesExtension(Extension):
    kind: ClassVar[str] = "psk_key_exchange_modes"
    extension_id: int = field(default=45, init=False)
    modes: tuple[int, ...] = PSK_MODES


@dataclass(frozen=True)
class KeyShare:
    group: int
    data: bytes


@dataclass(frozen=True)
class KeyShareExtension(Extension):
    kind: ClassVar[str] = "key_share"
    extension_id: int = field(default=51, init=False)
    key_shares: tuple[KeyShare, ...] = ()


@dataclass(frozen=True)
class NPNExtension(Extension):
    kind: ClassVar[str] = "npn"
    extension_id: int = field(default=13172, init=False)


@dataclass(frozen=True)
class ALPSExtension(Extension):
    kind: ClassVar[str] = "alps"
    extension_id: int = field(default=17513, init=False)
    protocols: tuple[str, ...] = ("h2",)


@dataclass(frozen=True)
class RenegotiationInfoExtension(Extension):
    kind: ClassVar[str] = "renegotiation_info"
    extension_id: int = field(default=65281, init=False)
    renegotiation: int = RENEGOTIATE_ONCE_AS_CLIENT


@dataclass(frozen=True)
class GenericExtension(Extension):
    """Opaque extension the TLS engine sends verbatim."""

    kind: ClassVar[str] = "generic"
    data: bytes = b""


ExtensionFactory = Callable[[ExtensionContext], Extension]

EXTENSIONS: dict[str, ExtensionFactory] = {
    "0": lambda ctx: SNIExtension(),
    "5": lambda ctx: StatusRequestExtension(),
    "10": lambda ctx: SupportedCurvesExtension(curves=ctx.curves),
    "11": lambda ctx: SupportedPointsExtension(points=ctx.points),
    "13": lambda ctx: SignatureAlgorithmsExtension(),
    "16": lambda ctx: ALPNExtension(protocols=ctx.alpn_protocols),
    "18": lambda ctx: SCTExtension(),
    "21": lambda ctx: PaddingExtension(),
    "22": lambda ctx: GenericExtension(22),
    "23": lambda ctx: ExtendedMasterSecretExtension(),
    "27": lambda ctx: CompressCertificateExtension(),
    "28": lambda ctx: RecordSizeLimitExtension(),
    "34": lambda ctx: DelegatedCredentialsExtension(),
    "35": lambda ctx: SessionTicketExtension(),
    "41": lambda ctx: PreSharedKeyExtension(),
    "42": lambda ctx: GenericExtension(EARLY_DATA_EXTENSION),
    "43": lambda ctx: SupportedVersionsExtension(versions=(ctx.version_max,)),
    "44": lambda ctx: CookieExtension(),
    "45": lambda ctx: PSKKeyExchangeModesExtension(),
    "49": lambda ctx: GenericExtension(49),
    "50": lambda ctx: GenericExtension(50),
    "51": lambda ctx: KeyShareExtension(
        key_shares=tuple(KeyShare(group, data) for group, data in KEY_SHARES)
    ),
    "13172": lambda ctx: NPNExtension(),
    "17513": lambda ctx: ALPSExtension(protocols=ctx.alpn_protocols),
    "30032": lambda ctx: GenericExtension(*CHANNEL_ID_EXTENSION),
    "65281": lambda ctx: RenegotiationInfoExtension(),
}


def register_extension(token: str, factory: ExtensionFactory) -> None:
    """
    Add or replace a dispatch entry. Meant to be called at import/startup time,
    before requests are being built.
    """
    EXTENSIONS[token] = factory


def map_extension(token: str, context: ExtensionContext | None = None) -> Extension:
    """
    Resolve one JA3 extension token to its descriptor.

    Tokens are matched as strings against EXTENSIONS. Anything else that is a
    valid 16-bit number becomes a GenericExtension with that id and no payload.

    Raises:
        InvalidExtensionID: if the token is unknown and not numeric.
    """
    ctx = context or ExtensionContext()
    factory = EXTENSIONS.get(token)
    if factory is not None:
        return factory(ctx)
    try:
        ext_id = parse_uint(token, 16)
    except ValueError as exc:
        raise InvalidExtensionID(token) from exc
    return GenericExtension(ext_id)
