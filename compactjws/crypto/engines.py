"""Capability protocols shared by the per-algorithm engines."""

from typing import Protocol, runtime_checkable

from compactjws.crypto.algorithms import Algorithm


@runtime_checkable
class TokenSigner(Protocol):
    """Produces a signature over a JWS signing input."""

    @property
    def algorithm(self) -> Algorithm: ...

    def sign(self, plaintext: bytes) -> bytes: ...


@runtime_checkable
class TokenVerifier(Protocol):
    """Checks a signature over a JWS signing input.

    Returns ``False`` when the signature is well formed but not authentic and
    raises when authenticity could not be evaluated.
    """

    @property
    def algorithm(self) -> Algorithm: ...

    def verify(self, plaintext: bytes, signature: bytes) -> bool: ...
