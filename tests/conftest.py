"""Shared test fixtures for compact-jws."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from rfc_vectors import (
    ED25519_TEST1_SEED,
    ES256_D,
    ES256_X,
    ES256_Y,
    ES512_D,
    ES512_X,
    ES512_Y,
    ec_private_key,
    ed25519_private_key,
    rsa_private_key,
)

from compactjws.crypto.algorithms import Algorithm, curve_parameters


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep validation settings independent of the outer environment."""
    for name in (
        "ISSUERS",
        "SUBJECTS",
        "AUDIENCES",
        "JWT_IDS",
        "EXPIRATION_LEEWAY_SECONDS",
        "NOT_BEFORE_LEEWAY_SECONDS",
    ):
        monkeypatch.delenv(f"JWS_VALIDATION_{name}", raising=False)


@pytest.fixture(scope="session")
def rfc_rsa_key() -> rsa.RSAPrivateKey:
    """RSA key from RFC 7515 appendix A.2."""
    return rsa_private_key()


@pytest.fixture(scope="session")
def rfc_es256_key() -> ec.EllipticCurvePrivateKey:
    """P-256 key from RFC 7515 appendix A.3."""
    return ec_private_key(ES256_X, ES256_Y, ES256_D, ec.SECP256R1())


@pytest.fixture(scope="session")
def rfc_es512_key() -> ec.EllipticCurvePrivateKey:
    """P-521 key from RFC 7515 appendix A.4."""
    return ec_private_key(ES512_X, ES512_Y, ES512_D, ec.SECP521R1())


@pytest.fixture(scope="session")
def rfc_ed25519_key() -> ed25519.Ed25519PrivateKey:
    """Ed25519 key from RFC 8032 section 7.1 TEST 1."""
    return ed25519_private_key(ED25519_TEST1_SEED)


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    """A freshly generated RSA-2048 key shared by the session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_keys() -> dict[Algorithm, ec.EllipticCurvePrivateKey]:
    """One freshly generated EC key per ES* algorithm."""
    return {
        alg: ec.generate_private_key(curve_parameters(alg).curve())
        for alg in (Algorithm.ES256, Algorithm.ES384, Algorithm.ES512)
    }
