class GuiseError(Exception):
    """Base error for guise."""


class FingerprintError(GuiseError, ValueError):
    """Raised when fingerprint input supplied by the caller is malformed."""


class JA3ParseError(FingerprintError):
    """Raised when a JA3 string cannot be turned into a handshake template."""

    field = "ja3"

    def __init__(self, token: str, message: str | None = None) -> None:
        self.token = token
        super().__init__(message or f"invalid {self.field} value {token!r}")


class InvalidVersion(JA3ParseError):
    """Raised when the TLS version field is not a 16-bit integer."""

    field = "TLS version"


class InvalidCipher(JA3ParseError):
    """Raised when a cipher suite token is not a 16-bit integer."""

    field = "cipher suite"


class InvalidCurve(JA3ParseError):
    """Raised when a supported-group token is not a 16-bit integer."""

    field = "curve"


class InvalidPointFormat(JA3ParseError):
    """Raised when an EC point format token is not an 8-bit integer."""

    field = "point format"


class InvalidExtensionID(JA3ParseError):
    """Raised when an extension token is neither known nor numeric."""

    field = "extension id"


class InvalidAkamaiFingerprint(FingerprintError):
    """Raised when an Akamai HTTP/2 fingerprint string is malformed."""
