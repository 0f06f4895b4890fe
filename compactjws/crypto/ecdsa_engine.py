"""ECDSA (ES256/ES384/ES512) signer and verifier.

Signatures use the raw JWS encoding: ``r`` and ``s`` as fixed-width big-endian
integers, concatenated. The ASN.1 DER form produced by the primitive is
converted on the way in and out.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec, utils

from compactjws.core.errors import ConfigError, CryptoError, FormatError
from compactjws.crypto.algorithms import (
    ECDSA_ALGORITHMS,
    Algorithm,
    curve_parameters,
    hash_algorithm,
    parse_algorithm,
)
from compactjws.crypto.codec import get_hash


def coordinate_size(curve: ec.EllipticCurve) -> int:
    """Byte width of one signature coordinate: ``ceil(bits / 8)``."""
    return (curve.key_size + 7) // 8


def validate_key_matches_algorithm(alg: Algorithm, key: ec.EllipticCurvePrivateKey) -> None:
    """Raise ``ConfigError`` unless ``key`` is on the curve ``alg`` requires."""
    expected = curve_parameters(alg)
    if key.curve.name != expected.curve.name:
        raise ConfigError(
            f"key does not match expected parameters for algorithm {alg}; "
            f"expected curve {expected.name} ({expected.curve.name}), "
            f"received {key.curve.name}"
        )


class ECDSASigner:
    """Signs JWS signing inputs with an EC private key."""

    def __init__(self, alg: Algorithm | str, key: ec.EllipticCurvePrivateKey) -> None:
        if key is None:
            raise ConfigError("cannot init ECDSASigner with empty key")
        algorithm = parse_algorithm(alg)
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise ConfigError(f"ECDSASigner requires an EC private key, got {type(key).__name__}")
        validate_key_matches_algorithm(algorithm, key)
        self._algorithm = algorithm
        self._hash = hash_algorithm(algorithm)
        self._key = key
        self._size = coordinate_size(key.curve)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def sign(self, plaintext: bytes) -> bytes:
        digest = get_hash(self._algorithm, plaintext)
        der = self._key.sign(digest, ec.ECDSA(utils.Prehashed(self._hash)))
        r, s = utils.decode_dss_signature(der)
        return r.to_bytes(self._size, "big") + s.to_bytes(self._size, "big")


class ECDSAVerifier:
    """Verifies raw ``r || s`` ECDSA signatures with an EC public key."""

    def __init__(self, alg: Algorithm | str, key: ec.EllipticCurvePublicKey) -> None:
        if key is None:
            raise ConfigError("cannot init ECDSAVerifier with empty key")
        algorithm = parse_algorithm(alg)
        if algorithm not in ECDSA_ALGORITHMS:
            raise ConfigError("signing algorithm unexpected, must be one of: ES256, ES384, ES512")
        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise ConfigError(
                f"ECDSAVerifier requires an EC public key, got {type(key).__name__}"
            )
        self._algorithm = algorithm
        self._hash = hash_algorithm(algorithm)
        self._key = key
        self._size = coordinate_size(key.curve)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def verify(self, plaintext: bytes, signature: bytes) -> bool:
        if len(signature) != 2 * self._size:
            raise FormatError(
                f"signature length invalid: expected {2 * self._size}, received {len(signature)}"
            )
        digest = get_hash(self._algorithm, plaintext)
        r = int.from_bytes(signature[: self._size], "big")
        s = int.from_bytes(signature[self._size :], "big")
        try:
            self._key.verify(
                utils.encode_dss_signature(r, s),
                digest,
                ec.ECDSA(utils.Prehashed(self._hash)),
            )
        except InvalidSignature:
            return False
        except ValueError as exc:
            raise CryptoError(f"error from verification: {exc}") from exc
        return True
