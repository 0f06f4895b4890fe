"""RSASSA-PKCS1-v1_5 (RS*) and RSASSA-PSS (PS*) signer and verifier."""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa, utils

from compactjws.core.errors import ConfigError, CryptoError
from compactjws.crypto.algorithms import (
    RSA_ALGORITHMS,
    RSA_PSS_ALGORITHMS,
    Algorithm,
    hash_algorithm,
    parse_algorithm,
)
from compactjws.crypto.codec import get_hash


def _check_algorithm(alg: Algorithm | str) -> Algorithm:
    algorithm = parse_algorithm(alg)
    if algorithm not in RSA_ALGORITHMS:
        raise ConfigError(
            "signing algorithm unexpected, must be one of: "
            "RS256, RS384, RS512, PS256, PS384, PS512"
        )
    return algorithm


def _padding_for(alg: Algorithm, digest: hashes.HashAlgorithm) -> padding.AsymmetricPadding:
    """PKCS1-v1_5 for RS*, PSS with MGF1 and a digest-sized salt for PS*."""
    if alg in RSA_PSS_ALGORITHMS:
        return padding.PSS(mgf=padding.MGF1(digest), salt_length=digest.digest_size)
    return padding.PKCS1v15()


class RSASigner:
    """Signs JWS signing inputs with an RSA private key."""

    def __init__(self, alg: Algorithm | str, key: rsa.RSAPrivateKey) -> None:
        if key is None:
            raise ConfigError("cannot init RSASigner with empty key")
        algorithm = _check_algorithm(alg)
        if not isinstance(key, rsa.RSAPrivateKey):
            raise ConfigError(f"RSASigner requires an RSA private key, got {type(key).__name__}")
        self._algorithm = algorithm
        self._hash = hash_algorithm(algorithm)
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def sign(self, plaintext: bytes) -> bytes:
        digest = get_hash(self._algorithm, plaintext)
        try:
            return self._key.sign(
                digest,
                _padding_for(self._algorithm, self._hash),
                utils.Prehashed(self._hash),
            )
        except (ValueError, TypeError) as exc:
            raise CryptoError(f"error from signing: {exc}") from exc


class RSAVerifier:
    """Verifies RS*/PS* signatures with an RSA public key."""

    def __init__(self, alg: Algorithm | str, key: rsa.RSAPublicKey) -> None:
        if key is None:
            raise ConfigError("cannot init RSAVerifier with empty key")
        algorithm = _check_algorithm(alg)
        if not isinstance(key, rsa.RSAPublicKey):
            raise ConfigError(f"RSAVerifier requires an RSA public key, got {type(key).__name__}")
        self._algorithm = algorithm
        self._hash = hash_algorithm(algorithm)
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def verify(self, plaintext: bytes, signature: bytes) -> bool:
        """Return ``True`` only when the primitive accepts the signature."""
        digest = get_hash(self._algorithm, plaintext)
        try:
            self._key.verify(
                bytes(signature),
                digest,
                _padding_for(self._algorithm, self._hash),
                utils.Prehashed(self._hash),
            )
        except InvalidSignature:
            return False
        except (ValueError, TypeError) as exc:
            raise CryptoError(f"error from verification: {exc}") from exc
        return True
