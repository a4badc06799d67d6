from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from ..errors import (
    InvalidCipher,
    InvalidCurve,
    InvalidPointFormat,
    InvalidVersion,
    JA3ParseError,
)
from ..utils import parse_uint
from .extensions import (
    GREASE_PLACEHOLDER,
    Extension,
    ExtensionContext,
    GreaseExtension,
    PaddingExtension,
    TLSVersion,
    map_extension,
)

logger = logging.getLogger(__name__)

JA3_FIELDS = 5


@dataclass(frozen=True)
class FingerprintSpec:
    """
    TLS ClientHello template consumed by the TLS engine.

    Cipher suites and curves always start with GREASE_PLACEHOLDER; extensions
    always start with a GreaseExtension, and every PaddingExtension is
    preceded by another one.
    """

    version_min: int
    version_max: int
    cipher_suites: tuple[int, ...]
    extensions: tuple[Extension, ...]
    supported_curves: tuple[int, ...]
    supported_points: tuple[int, ...]

    def to_ja3(self) -> str:
        """Render the canonical JA3 string (GREASE values omitted)."""

        def join(values) -> str:
            return "-".join(str(v) for v in values if v != GREASE_PLACEHOLDER)

        return ",".join(
            [
                str(self.version_max),
                join(self.cipher_suites),
                join(
                    ext.extension_id
                    for ext in self.extensions
                    if not isinstance(ext, GreaseExtension)
                ),
                join(self.supported_curves),
                join(self.supported_points),
            ]
        )

    def ja3_digest(self) -> str:
        return hashlib.md5(self.to_ja3().encode("ascii")).hexdigest()


def _split(field: str) -> list[str]:
    # Present-but-empty fields are accepted and mean "no entries" rather than
    # a parse error; only a token inside a non-empty list must be numeric.
    return field.split("-") if field else []


def _parse_list(field: str, bits: int, error: type[JA3ParseError]) -> list[int]:
    values = []
    for token in _split(field):
        try:
            values.append(parse_uint(token, bits))
        except ValueError as exc:
            raise error(token) from exc
    return values


def parse_ja3(ja3: str, protocol: str = "2") -> FingerprintSpec:
    """
    Build a TLS handshake template from a JA3 string.

    Args:
        ja3: ``version,ciphers,extensions,curves,points`` with hyphen-separated
            decimal lists. Missing trailing fields count as empty; fields past
            the fifth are ignored.
        protocol: ``"1"`` advertises http/1.1 in ALPN/ALPS, anything else h2.

    Returns:
        The parsed FingerprintSpec.

    Raises:
        InvalidVersion, InvalidCipher, InvalidCurve, InvalidPointFormat,
        InvalidExtensionID: on the first malformed token.
    """
    fields = ja3.split(",")[:JA3_FIELDS]
    if len(fields) < JA3_FIELDS:
        logger.debug("JA3 string has %d of %d fields", len(fields), JA3_FIELDS)
        fields += [""] * (JA3_FIELDS - len(fields))
    version_field, cipher_field, extension_field, curve_field, point_field = fields

    try:
        version_max = parse_uint(version_field, 16)
    except ValueError as exc:
        raise InvalidVersion(version_field) from exc

    ciphers = [GREASE_PLACEHOLDER] + _parse_list(cipher_field, 16, InvalidCipher)
    curves = [GREASE_PLACEHOLDER] + _parse_list(curve_field, 16, InvalidCurve)
    points = _parse_list(point_field, 8, InvalidPointFormat)

    context = ExtensionContext(
        protocol=protocol,
        curves=tuple(curves),
        points=tuple(points),
        version_max=version_max,
    )
    extensions = build_extensions(_split(extension_field), context)

    return FingerprintSpec(
        version_min=TLSVersion.TLS10,
        version_max=version_max,
        cipher_suites=tuple(ciphers),
        extensions=extensions,
        supported_curves=tuple(curves),
        supported_points=tuple(points),
    )


def build_extensions(
    tokens: list[str], context: ExtensionContext
) -> tuple[Extension, ...]:
    """
    Map extension tokens in order, adding the leading GREASE extension and the
    GREASE extension that precedes padding.
    """
    extensions: list[Extension] = [GreaseExtension()]
    for token in tokens:
        ext = map_extension(token, context)
        if isinstance(ext, PaddingExtension):
            extensions.append(GreaseExtension())
        extensions.append(ext)
    return tuple(extensions)
