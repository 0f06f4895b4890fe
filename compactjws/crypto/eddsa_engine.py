"""Ed25519 signer and verifier for the ``EdDSA`` algorithm."""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519

from compactjws.core.errors import ConfigError
from compactjws.crypto.algorithms import Algorithm, parse_algorithm


def _check_algorithm(alg: Algorithm | str) -> Algorithm:
    algorithm = parse_algorithm(alg)
    if algorithm is not Algorithm.EDDSA:
        raise ConfigError("signing algorithm unexpected, must be: EdDSA")
    return algorithm


class EdDSASigner:
    """Signs the raw signing input with an Ed25519 private key."""

    def __init__(self, alg: Algorithm | str, key: ed25519.Ed25519PrivateKey) -> None:
        if key is None:
            raise ConfigError("cannot init EdDSASigner with empty key")
        self._algorithm = _check_algorithm(alg)
        if not isinstance(key, ed25519.Ed25519PrivateKey):
            raise ConfigError(
                f"EdDSASigner requires an Ed25519 private key, got {type(key).__name__}"
            )
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def sign(self, plaintext: bytes) -> bytes:
        return self._key.sign(bytes(plaintext))


class EdDSAVerifier:
    """Verifies Ed25519 signatures over the raw signing input."""

    def __init__(self, alg: Algorithm | str, key: ed25519.Ed25519PublicKey) -> None:
        if key is None:
            raise ConfigError("cannot init EdDSAVerifier with empty key")
        self._algorithm = _check_algorithm(alg)
        if not isinstance(key, ed25519.Ed25519PublicKey):
            raise ConfigError(
                f"EdDSAVerifier requires an Ed25519 public key, got {type(key).__name__}"
            )
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def verify(self, plaintext: bytes, signature: bytes) -> bool:
        try:
            self._key.verify(bytes(signature), bytes(plaintext))
        except InvalidSignature:
            return False
        return True
