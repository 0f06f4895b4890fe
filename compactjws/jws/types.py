"""Type definitions for the JOSE header, the JWT claim set and parsed tokens."""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from compactjws.crypto.algorithms import Algorithm

# exp, nbf and iat travel as decimal-integer strings; JSON integers are also accepted.
NumericDate = str | int | float


class Header(BaseModel):
    """JOSE header (RFC 7515 section 4.1). Only ``alg`` is required."""

    model_config = ConfigDict(extra="allow")

    alg: str
    jku: str | None = None
    jwk: str | dict[str, Any] | None = None
    kid: str | None = None
    typ: str | None = None
    cty: str | None = None


class Claims(BaseModel):
    """Registered claim names (RFC 7519 section 4.1), all optional."""

    model_config = ConfigDict(extra="allow", strict=True)

    iss: str | None = None
    sub: str | None = None
    aud: str | list[str] | None = None
    exp: NumericDate | None = None
    nbf: NumericDate | None = None
    iat: NumericDate | None = None
    jti: str | None = None


class TokenStage(IntEnum):
    """Processing stages a token moves through, in order."""

    NEW = 0
    PARSED = 1
    HEADER_BOUND = 2
    SIG_CHECKED = 3
    CLAIMS_BOUND = 4
    CLAIMS_CHECKED = 5


class Token(BaseModel):
    """A compact JWS split into its raw and decoded segments."""

    alg: Algorithm | None = None
    header: Header | None = None
    claims: Claims | None = None

    # base64url-encoded source
    raw_token: bytes = b""
    raw_header: bytes = b""
    raw_body: bytes = b""
    raw_signature: bytes = b""

    # base64url-decoded
    decoded_header: bytes = b""
    decoded_body: bytes = b""
    decoded_signature: bytes = b""

    signature_valid: bool = False
    claims_valid: bool = False
    stage: TokenStage = TokenStage.NEW

    @property
    def signing_input(self) -> bytes:
        """The still-encoded ``header.body`` the signature covers."""
        return self.raw_header + b"." + self.raw_body

    def advance(self, stage: TokenStage) -> None:
        """Move to ``stage``; earlier stages are never re-entered."""
        if stage <= self.stage:
            raise ValueError(f"token already at {self.stage.name}, cannot move to {stage.name}")
        self.stage = stage
