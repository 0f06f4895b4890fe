"""Compact JWS creation and verification for any supported algorithm and key."""

import json
from collections.abc import Mapping
from typing import Any, TypeVar

from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from pydantic import BaseModel, ValidationError

from compactjws.core.errors import ConfigError, FormatError, JWSError
from compactjws.core.logging import get_logger
from compactjws.crypto.algorithms import Algorithm, parse_algorithm
from compactjws.crypto.codec import base64url_decode, base64url_encode
from compactjws.crypto.ecdsa_engine import ECDSASigner, ECDSAVerifier
from compactjws.crypto.eddsa_engine import EdDSASigner, EdDSAVerifier
from compactjws.crypto.engines import TokenSigner, TokenVerifier
from compactjws.crypto.hmac_engine import HMACSignerVerifier
from compactjws.crypto.none_engine import NoneSignerVerifier
from compactjws.crypto.rsa_engine import RSASigner, RSAVerifier
from compactjws.jws.claims import ValidationParams, validate_registered_claims
from compactjws.jws.types import Claims, Header, Token, TokenStage

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SigningKeyInput = (
    rsa.RSAPrivateKey
    | rsa.RSAPublicKey
    | ec.EllipticCurvePrivateKey
    | ec.EllipticCurvePublicKey
    | ed25519.Ed25519PrivateKey
    | ed25519.Ed25519PublicKey
    | bytes
)


class JWSSignerVerifier:
    """Creates and verifies compact JWS tokens with one engine pair.

    Private and symmetric keys yield an instance that can sign and verify;
    public keys yield a verify-only instance. Instances are immutable and
    safe to share between threads.
    """

    def __init__(
        self,
        algorithm: Algorithm,
        verifier: TokenVerifier,
        signer: TokenSigner | None = None,
    ) -> None:
        self._algorithm = algorithm
        self._verifier = verifier
        self._signer = signer

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def can_sign(self) -> bool:
        return self._signer is not None

    def generate_token(
        self,
        header: Header | BaseModel | Mapping[str, Any],
        body: Claims | BaseModel | Mapping[str, Any],
    ) -> str:
        """Serialize, encode and sign ``header`` and ``body`` into a compact JWS."""
        if self._signer is None:
            raise ConfigError(
                "JWSSignerVerifier not configured for signing; "
                "did you provide the correct key type?"
            )

        header_fields = _as_json_object(header, "header")
        if not header_fields.get("alg"):
            raise ConfigError("JOSE header must carry an alg value")
        body_fields = _as_json_object(body, "body")

        signing_input = (
            base64url_encode(_dump_json(header_fields, "header"))
            + "."
            + base64url_encode(_dump_json(body_fields, "body"))
        )

        # Unsigned tokens keep the trailing dot with an empty signature segment.
        if self._algorithm is Algorithm.NONE:
            logger.debug("token_generated", alg=str(self._algorithm), signed=False)
            return signing_input + "."

        signature = self._signer.sign(signing_input.encode("ascii"))
        logger.debug(
            "token_generated",
            alg=str(self._algorithm),
            signed=True,
            signature_bytes=len(signature),
        )
        return signing_input + "." + base64url_encode(signature)

    def verify_signature(self, raw_token: str | bytes) -> tuple[Token, bool]:
        """Verify the signature only; header and claim values are not validated.

        Use ``verify_token`` unless custom header or claim validation follows.
        The header is only checked for well-formedness here since its content
        cannot be trusted before the signature is.
        """
        token = get_raw_token_parts(raw_token)
        token.alg = self._algorithm

        try:
            token.header = Header.model_validate_json(token.decoded_header)
        except ValidationError as exc:
            raise FormatError(f"malformed JOSE header: {exc}", token) from exc
        token.advance(TokenStage.HEADER_BOUND)

        try:
            signature_valid = self._verifier.verify(
                token.signing_input, token.decoded_signature
            )
        except JWSError as exc:
            exc.token = token
            raise
        token.signature_valid = signature_valid
        token.advance(TokenStage.SIG_CHECKED)

        logger.debug(
            "signature_checked", alg=str(self._algorithm), signature_valid=signature_valid
        )
        return token, signature_valid

    def verify_token(
        self, raw_token: str | bytes, params: ValidationParams | None = None
    ) -> tuple[Token, bool]:
        """Verify the signature, then validate the registered claims.

        Claims are neither parsed nor validated when the signature is not
        authentic.
        """
        token, signature_valid = self.verify_signature(raw_token)
        if not signature_valid:
            return token, False

        try:
            token.claims = Claims.model_validate_json(token.decoded_body)
        except ValidationError as exc:
            raise FormatError(f"malformed JWT claims: {exc}", token) from exc
        token.advance(TokenStage.CLAIMS_BOUND)

        try:
            claims_valid = validate_registered_claims(token.claims, params)
        except JWSError as exc:
            exc.token = token
            raise
        token.claims_valid = claims_valid
        token.advance(TokenStage.CLAIMS_CHECKED)

        logger.debug("claims_checked", alg=str(self._algorithm), claims_valid=claims_valid)
        return token, signature_valid and claims_valid


def create_signer_verifier(alg: Algorithm | str, key: SigningKeyInput) -> JWSSignerVerifier:
    """Build a signer/verifier from a symmetric or asymmetric key.

    HS* algorithms take the shared secret as ``bytes`` and can sign and
    verify. RS*, PS*, ES* and EdDSA take a private key (sign and verify) or
    a public key (verify only). The unsigned ``none`` algorithm is refused
    here; see ``create_insecure_signer_verifier``.
    """
    algorithm = parse_algorithm(alg)
    if algorithm is Algorithm.NONE:
        raise ConfigError(
            "the none algorithm is not accepted with a key; "
            "use create_insecure_signer_verifier for unsigned tokens"
        )

    signer: TokenSigner | None = None
    verifier: TokenVerifier
    if isinstance(key, rsa.RSAPrivateKey):
        verifier = RSAVerifier(algorithm, key.public_key())
        signer = RSASigner(algorithm, key)
    elif isinstance(key, rsa.RSAPublicKey):
        verifier = RSAVerifier(algorithm, key)
    elif isinstance(key, ec.EllipticCurvePrivateKey):
        verifier = ECDSAVerifier(algorithm, key.public_key())
        signer = ECDSASigner(algorithm, key)
    elif isinstance(key, ec.EllipticCurvePublicKey):
        verifier = ECDSAVerifier(algorithm, key)
    elif isinstance(key, ed25519.Ed25519PrivateKey):
        verifier = EdDSAVerifier(algorithm, key.public_key())
        signer = EdDSASigner(algorithm, key)
    elif isinstance(key, ed25519.Ed25519PublicKey):
        verifier = EdDSAVerifier(algorithm, key)
    elif isinstance(key, (bytes, bytearray)):
        # A symmetric key satisfies both signing and verification.
        engine = HMACSignerVerifier(algorithm, bytes(key))
        signer = verifier = engine
    else:
        raise ConfigError(f"cannot construct JWSSignerVerifier from key type {type(key).__name__}")

    logger.debug("signer_verifier_created", alg=str(algorithm), can_sign=signer is not None)
    return JWSSignerVerifier(algorithm, verifier, signer)


def create_insecure_signer_verifier(alg: Algorithm | str) -> JWSSignerVerifier:
    """Build a signer/verifier for unsigned (``none``) tokens.

    Not recommended: every token verifies. Provided to conform with RFC 7518.
    """
    algorithm = parse_algorithm(alg)
    if algorithm is not Algorithm.NONE:
        raise ConfigError(
            "cannot initialize an insecure JWSSignerVerifier without the algorithm 'none'; "
            "to use a key, call create_signer_verifier with the key and algorithm"
        )
    engine = NoneSignerVerifier(algorithm)
    logger.warning("insecure_signer_verifier_created", alg=str(algorithm))
    return JWSSignerVerifier(algorithm, engine, engine)


def get_raw_token_parts(raw_token: str | bytes) -> Token:
    """Split a compact JWS and base64url-decode its segments."""
    if isinstance(raw_token, str):
        try:
            raw = raw_token.encode("ascii")
        except UnicodeEncodeError as exc:
            raise FormatError("compact JWS must be ASCII") from exc
    else:
        raw = bytes(raw_token)

    parts = raw.split(b".")
    if len(parts) < 2 or len(parts) > 3:
        raise FormatError(
            "valid tokens must have at least one '.' character and at most two '.' characters"
        )

    token = Token(
        raw_token=raw,
        raw_header=parts[0],
        decoded_header=base64url_decode(parts[0]),
        raw_body=parts[1],
        decoded_body=base64url_decode(parts[1]),
    )
    if len(parts) == 3:
        token.raw_signature = parts[2]
        token.decoded_signature = base64url_decode(parts[2])

    token.advance(TokenStage.PARSED)
    return token


def get_claims(token: Token, model: type[ModelT]) -> ModelT:
    """Decode the token body into a caller-defined claims model.

    No signature or claim validation happens here; call it on a token
    returned by ``verify_token`` to read private claims with their own types.
    """
    try:
        return model.model_validate_json(token.decoded_body)
    except ValidationError as exc:
        raise FormatError(f"cannot decode claims as {model.__name__}: {exc}", token) from exc


def get_header(token: Token, model: type[ModelT]) -> ModelT:
    """Decode the JOSE header into a caller-defined header model."""
    try:
        return model.model_validate_json(token.decoded_header)
    except ValidationError as exc:
        raise FormatError(f"cannot decode header as {model.__name__}: {exc}", token) from exc


def _as_json_object(value: Header | BaseModel | Mapping[str, Any], part: str) -> dict[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, Mapping):
        return dict(value)
    raise FormatError(f"cannot serialize {part} of type {type(value).__name__} as a JSON object")


def _dump_json(fields: dict[str, Any], part: str) -> bytes:
    try:
        return json.dumps(fields, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise FormatError(f"cannot serialize {part} as JSON: {exc}") from exc
