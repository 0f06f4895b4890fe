"""HMAC signer/verifier for the HS256/HS384/HS512 family."""

import secrets

from cryptography.hazmat.primitives import hmac

from compactjws.core.errors import ConfigError, FormatError
from compactjws.crypto.algorithms import (
    HMAC_ALGORITHMS,
    Algorithm,
    hash_algorithm,
    parse_algorithm,
)


class HMACSignerVerifier:
    """Signs and verifies with a shared secret; one object serves both directions."""

    def __init__(self, alg: Algorithm | str, key: bytes) -> None:
        if not key:
            raise ConfigError("cannot initialize HMACSignerVerifier with an empty key")
        algorithm = parse_algorithm(alg)
        if algorithm not in HMAC_ALGORITHMS:
            raise ConfigError(
                "signing algorithm unexpected, must be one of: HS256, HS384, HS512"
            )
        self._algorithm = algorithm
        self._key = bytes(key)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def sign(self, plaintext: bytes) -> bytes:
        """Return the MAC of ``plaintext``."""
        if not plaintext:
            raise FormatError("payload cannot be empty")
        mac = hmac.HMAC(self._key, hash_algorithm(self._algorithm))
        mac.update(plaintext)
        return mac.finalize()

    def verify(self, plaintext: bytes, signature: bytes) -> bool:
        """Recompute the MAC and compare it to ``signature`` in constant time."""
        if not plaintext:
            raise FormatError("plaintext cannot be empty")
        if not signature:
            raise FormatError("signature cannot be empty")
        return secrets.compare_digest(self.sign(plaintext), bytes(signature))
