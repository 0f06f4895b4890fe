"""Signing key generation per algorithm and public JWK export."""

import secrets
from typing import Any

import uuid_utils
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from pydantic import BaseModel, ConfigDict

from compactjws.core.errors import ConfigError
from compactjws.crypto.algorithms import (
    Algorithm,
    Family,
    curve_parameters,
    family_of,
    hash_algorithm,
    parse_algorithm,
)
from compactjws.crypto.codec import base64url_encode
from compactjws.jws.types import Header

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

PrivateKey = rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey | ed25519.Ed25519PrivateKey
PublicKey = rsa.RSAPublicKey | ec.EllipticCurvePublicKey | ed25519.Ed25519PublicKey


class SigningKey(BaseModel):
    """Key material for one algorithm, tagged with a key id."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kid: str
    algorithm: Algorithm
    key: PrivateKey | bytes

    def header(self, typ: str | None = "JWT") -> Header:
        """Build a JOSE header announcing this key's algorithm and kid."""
        return Header(alg=str(self.algorithm), kid=self.kid, typ=typ)


class JWK(BaseModel):
    """Public JSON Web Key (RFC 7517) for RSA, EC or OKP keys."""

    model_config = ConfigDict(extra="forbid")

    kty: str
    use: str = "sig"
    alg: str | None = None
    kid: str | None = None
    n: str | None = None
    e: str | None = None
    crv: str | None = None
    x: str | None = None
    y: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def generate_signing_key(alg: Algorithm | str) -> SigningKey:
    """Generate fresh key material suited to ``alg``.

    HMAC algorithms get a random secret as long as the digest; ``none`` has
    no key and is rejected.
    """
    algorithm = parse_algorithm(alg)
    family = family_of(algorithm)
    key: PrivateKey | bytes
    if family is Family.HMAC:
        key = secrets.token_bytes(hash_algorithm(algorithm).digest_size)
    elif family in (Family.RSA_PKCS1, Family.RSA_PSS):
        key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=RSA_KEY_SIZE,
        )
    elif family is Family.ECDSA:
        key = ec.generate_private_key(curve_parameters(algorithm).curve())
    elif family is Family.EDDSA:
        key = ed25519.Ed25519PrivateKey.generate()
    else:
        raise ConfigError(f"algorithm {algorithm} does not use a key")
    return SigningKey(kid=str(uuid_utils.uuid7()), algorithm=algorithm, key=key)


def _int_to_base64url(value: int, length: int | None = None) -> str:
    """Encode an integer as base64url without padding."""
    byte_length = length or (value.bit_length() + 7) // 8
    return base64url_encode(value.to_bytes(byte_length, byteorder="big"))


def _alg_name(alg: Algorithm | None) -> str | None:
    return str(alg) if alg is not None else None


def public_key_to_jwk(
    key: PublicKey, kid: str | None = None, alg: Algorithm | None = None
) -> JWK:
    """Convert a public key to its JWK form."""
    if isinstance(key, rsa.RSAPublicKey):
        numbers = key.public_numbers()
        return JWK(
            kty="RSA",
            alg=_alg_name(alg),
            kid=kid,
            n=_int_to_base64url(numbers.n),
            e=_int_to_base64url(numbers.e),
        )
    if isinstance(key, ec.EllipticCurvePublicKey):
        numbers = key.public_numbers()
        size = (key.curve.key_size + 7) // 8
        crv = {"secp256r1": "P-256", "secp384r1": "P-384", "secp521r1": "P-521"}.get(
            key.curve.name
        )
        if crv is None:
            raise ConfigError(f"unsupported curve {key.curve.name}")
        return JWK(
            kty="EC",
            alg=_alg_name(alg),
            kid=kid,
            crv=crv,
            x=_int_to_base64url(numbers.x, size),
            y=_int_to_base64url(numbers.y, size),
        )
    if isinstance(key, ed25519.Ed25519PublicKey):
        raw = key.public_bytes(encoding=Encoding.Raw, format=PublicFormat.Raw)
        return JWK(kty="OKP", kid=kid, crv="Ed25519", alg=_alg_name(alg), x=base64url_encode(raw))
    raise ConfigError(f"cannot export key type {type(key).__name__} as JWK")
