"""Engine for the unsigned ``none`` algorithm.

Nothing is signed and every signature verifies. It is only reachable through
the explicit insecure constructor.
"""

from compactjws.core.errors import ConfigError
from compactjws.crypto.algorithms import Algorithm, parse_algorithm


class NoneSignerVerifier:
    """Fall-through signer and verifier for unsigned tokens."""

    def __init__(self, alg: Algorithm | str) -> None:
        algorithm = parse_algorithm(alg)
        if algorithm is not Algorithm.NONE:
            raise ConfigError(f"expected alg to be none but received {algorithm}")
        self._algorithm = algorithm

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def sign(self, plaintext: bytes) -> bytes:
        return b""

    def verify(self, plaintext: bytes, signature: bytes) -> bool:
        return True
