"""Unpadded base64url coding and per-algorithm digests (RFC 7515 appendix C)."""

import base64
import binascii
import hashlib
import re
from collections.abc import Callable

from compactjws.core.errors import ConfigError, FormatError
from compactjws.crypto.algorithms import Algorithm

_BASE64URL_ALPHABET = re.compile(rb"[A-Za-z0-9_-]*")

_DIGESTS: dict[str, Callable[[bytes], "hashlib._Hash"]] = {
    Algorithm.RS256: hashlib.sha256,
    Algorithm.PS256: hashlib.sha256,
    Algorithm.ES256: hashlib.sha256,
    Algorithm.RS384: hashlib.sha384,
    Algorithm.PS384: hashlib.sha384,
    Algorithm.ES384: hashlib.sha384,
    Algorithm.RS512: hashlib.sha512,
    Algorithm.PS512: hashlib.sha512,
    Algorithm.ES512: hashlib.sha512,
    Algorithm.EDDSA: hashlib.sha512,
}


def base64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(data: str | bytes) -> bytes:
    """Decode an unpadded base64url string."""
    raw = data.encode("ascii", errors="replace") if isinstance(data, str) else bytes(data)
    if not _BASE64URL_ALPHABET.fullmatch(raw):
        raise FormatError("illegal base64url string: unexpected character")
    if len(raw) % 4 == 1:
        raise FormatError("illegal base64url string: invalid length")
    padded = raw + b"=" * (-len(raw) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded)
    except binascii.Error as exc:
        raise FormatError(f"illegal base64url string: {exc}") from exc
    # Unused trailing bits must be zero, so each byte string has exactly one encoding.
    if base64url_encode(decoded).encode("ascii") != raw:
        raise FormatError("illegal base64url string: non-canonical trailing bits")
    return decoded


def get_hash(alg: Algorithm | str, plaintext: bytes) -> bytes:
    """Return the digest of ``plaintext`` required by ``alg``."""
    digest = _DIGESTS.get(str(alg))
    if digest is None:
        raise ConfigError(f"cannot generate hash with the configured algorithm {alg}")
    return digest(plaintext).digest()
