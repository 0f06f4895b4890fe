"""Closed catalog of JWS algorithm identifiers (RFC 7518 section 3.1)."""

from enum import StrEnum
from typing import NamedTuple

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from compactjws.core.errors import ConfigError


class Algorithm(StrEnum):
    """The ``alg`` header values this library signs and verifies."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    EDDSA = "EdDSA"
    NONE = "none"


class Family(StrEnum):
    """Engine family an algorithm belongs to."""

    HMAC = "HMAC"
    RSA_PKCS1 = "RSA-PKCS1"
    RSA_PSS = "RSA-PSS"
    ECDSA = "ECDSA"
    EDDSA = "EdDSA"
    NONE = "None"


class CurveParameters(NamedTuple):
    """Curve bound to an ECDSA algorithm and its per-coordinate byte width."""

    name: str
    curve: type[ec.EllipticCurve]
    coordinate_size: int


HMAC_ALGORITHMS = frozenset({Algorithm.HS256, Algorithm.HS384, Algorithm.HS512})
RSA_PKCS1_ALGORITHMS = frozenset({Algorithm.RS256, Algorithm.RS384, Algorithm.RS512})
RSA_PSS_ALGORITHMS = frozenset({Algorithm.PS256, Algorithm.PS384, Algorithm.PS512})
RSA_ALGORITHMS = RSA_PKCS1_ALGORITHMS | RSA_PSS_ALGORITHMS
ECDSA_ALGORITHMS = frozenset({Algorithm.ES256, Algorithm.ES384, Algorithm.ES512})

_FAMILIES: dict[Algorithm, Family] = {
    **{alg: Family.HMAC for alg in HMAC_ALGORITHMS},
    **{alg: Family.RSA_PKCS1 for alg in RSA_PKCS1_ALGORITHMS},
    **{alg: Family.RSA_PSS for alg in RSA_PSS_ALGORITHMS},
    **{alg: Family.ECDSA for alg in ECDSA_ALGORITHMS},
    Algorithm.EDDSA: Family.EDDSA,
    Algorithm.NONE: Family.NONE,
}

# P-521 coordinates take ceil(521 / 8) = 66 bytes.
_CURVES: dict[Algorithm, CurveParameters] = {
    Algorithm.ES256: CurveParameters("P-256", ec.SECP256R1, 32),
    Algorithm.ES384: CurveParameters("P-384", ec.SECP384R1, 48),
    Algorithm.ES512: CurveParameters("P-521", ec.SECP521R1, 66),
}

_HASHES: dict[Algorithm, type[hashes.HashAlgorithm]] = {
    Algorithm.HS256: hashes.SHA256,
    Algorithm.RS256: hashes.SHA256,
    Algorithm.PS256: hashes.SHA256,
    Algorithm.ES256: hashes.SHA256,
    Algorithm.HS384: hashes.SHA384,
    Algorithm.RS384: hashes.SHA384,
    Algorithm.PS384: hashes.SHA384,
    Algorithm.ES384: hashes.SHA384,
    Algorithm.HS512: hashes.SHA512,
    Algorithm.RS512: hashes.SHA512,
    Algorithm.PS512: hashes.SHA512,
    Algorithm.ES512: hashes.SHA512,
}


def parse_algorithm(value: Algorithm | str | None) -> Algorithm:
    """Coerce ``value`` to an ``Algorithm``, rejecting empty or unknown names."""
    if not value:
        raise ConfigError("no algorithm provided")
    try:
        return Algorithm(value)
    except ValueError as exc:
        raise ConfigError(f"unsupported algorithm {value!r}") from exc


def family_of(alg: Algorithm) -> Family:
    """Return the engine family for ``alg``."""
    return _FAMILIES[alg]


def curve_parameters(alg: Algorithm) -> CurveParameters:
    """Return the curve parameters for an ES* algorithm."""
    try:
        return _CURVES[alg]
    except KeyError:
        raise ConfigError(
            f"no curve parameters for algorithm {alg}; expected one of ES256, ES384, ES512"
        ) from None


def hash_algorithm(alg: Algorithm) -> hashes.HashAlgorithm:
    """Return a fresh ``cryptography`` hash instance for ``alg``."""
    try:
        return _HASHES[alg]()
    except KeyError:
        raise ConfigError(f"no hash function for algorithm {alg}") from None
