"""Error kinds raised while building, signing and verifying JWS tokens."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from compactjws.jws.types import Token


class JWSError(Exception):
    """Base class for all library errors.

    ``token`` holds the partially processed token when the failure happened
    after the compact serialization was parsed.
    """

    def __init__(self, message: str, token: "Token | None" = None) -> None:
        super().__init__(message)
        self.token = token


class ConfigError(JWSError):
    """Missing key or algorithm, or an algorithm that does not fit the key."""


class FormatError(JWSError):
    """Malformed compact serialization, base64url, JSON or signature length."""


class CryptoError(JWSError):
    """The underlying primitive failed for a reason other than a bad signature."""


class ClaimParseError(JWSError):
    """A time claim (``exp``, ``nbf``) is not a decimal integer."""
