"""Compact JWS signing and verification with JWT claim validation."""

from compactjws.core.errors import (
    ClaimParseError,
    ConfigError,
    CryptoError,
    FormatError,
    JWSError,
)
from compactjws.core.logging import get_logger, setup_logging
from compactjws.core.settings import ValidationSettings
from compactjws.crypto.algorithms import Algorithm, Family
from compactjws.crypto.codec import base64url_decode, base64url_encode, get_hash
from compactjws.crypto.keys import JWK, SigningKey, generate_signing_key, public_key_to_jwk
from compactjws.jws.claims import ValidationParams, validate_registered_claims
from compactjws.jws.signer_verifier import (
    JWSSignerVerifier,
    create_insecure_signer_verifier,
    create_signer_verifier,
    get_claims,
    get_header,
    get_raw_token_parts,
)
from compactjws.jws.types import Claims, Header, Token, TokenStage

__all__ = [
    "JWK",
    "Algorithm",
    "ClaimParseError",
    "Claims",
    "ConfigError",
    "CryptoError",
    "Family",
    "FormatError",
    "Header",
    "JWSError",
    "JWSSignerVerifier",
    "SigningKey",
    "Token",
    "TokenStage",
    "ValidationParams",
    "ValidationSettings",
    "base64url_decode",
    "base64url_encode",
    "create_insecure_signer_verifier",
    "create_signer_verifier",
    "generate_signing_key",
    "get_claims",
    "get_hash",
    "get_header",
    "get_logger",
    "get_raw_token_parts",
    "public_key_to_jwk",
    "setup_logging",
    "validate_registered_claims",
]
