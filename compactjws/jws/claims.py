"""Server-side validation of registered JWT claims."""

import math
import re
from collections.abc import Collection
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, field_validator

from compactjws.core.errors import ClaimParseError
from compactjws.core.logging import get_logger
from compactjws.jws.types import Claims, NumericDate

logger = get_logger(__name__)

_DECIMAL_INTEGER = re.compile(r"[+-]?[0-9]+")


class ValidationParams(BaseModel):
    """Accepted claim values and the reference clock for validation.

    A ``None`` reference time means the wall clock at validation time. Leeway
    widens the accepted window to tolerate clock skew and may not be negative.
    """

    jwt_ids: frozenset[str] = frozenset()
    issuers: frozenset[str] = frozenset()
    subjects: frozenset[str] = frozenset()
    audiences: frozenset[str] = frozenset()

    expiration: datetime | None = None
    expiration_leeway: timedelta = timedelta(0)

    not_before: datetime | None = None
    not_before_leeway: timedelta = timedelta(0)

    @field_validator("expiration_leeway", "not_before_leeway")
    @classmethod
    def _leeway_non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("leeway must be non-negative")
        return value


def parse_numeric_date(value: NumericDate, claim: str) -> int:
    """Parse a time claim as whole seconds since the Unix epoch."""
    if isinstance(value, (bool, float)):
        raise ClaimParseError(f"{claim} claim must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if not _DECIMAL_INTEGER.fullmatch(value):
        raise ClaimParseError(f"{claim} claim is not a decimal integer: {value!r}")
    return int(value)


def _reference_seconds(reference: datetime | None, offset: timedelta) -> int:
    now = reference or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    # Offset in plain seconds; shifting the datetime itself overflows near its range limits.
    return math.floor(now.timestamp() + offset.total_seconds())


def verify_not_before(
    claims: Claims, current_time: datetime | None = None, leeway: timedelta = timedelta(0)
) -> bool:
    """Check ``nbf``; an absent claim passes."""
    if claims.nbf is None or claims.nbf == "":
        return True
    nbf = parse_numeric_date(claims.nbf, "nbf")
    return _reference_seconds(current_time, leeway) > nbf


def verify_expiration(
    claims: Claims, current_time: datetime | None = None, leeway: timedelta = timedelta(0)
) -> bool:
    """Check ``exp``; an absent claim passes."""
    if claims.exp is None or claims.exp == "":
        return True
    exp = parse_numeric_date(claims.exp, "exp")
    return _reference_seconds(current_time, -leeway) < exp


def _any_equals(accepted: Collection[str], value: str | None) -> bool:
    if not value:
        return True
    return value in accepted


def verify_issuer(claims: Claims, accepted: Collection[str]) -> bool:
    return _any_equals(accepted, claims.iss)


def verify_subject(claims: Claims, accepted: Collection[str]) -> bool:
    return _any_equals(accepted, claims.sub)


def verify_audience(claims: Claims, accepted: Collection[str]) -> bool:
    """Check ``aud``; a list passes when any member is accepted."""
    if isinstance(claims.aud, list):
        if not claims.aud:
            return True
        return any(audience in accepted for audience in claims.aud)
    return _any_equals(accepted, claims.aud)


def validate_registered_claims(claims: Claims, params: ValidationParams | None = None) -> bool:
    """Apply the registered-claim rules in order.

    Without ``params`` only ``nbf`` and ``exp`` are checked, against the wall
    clock with no leeway, so an expired token is still rejected.
    """
    check_values = params is not None
    params = params or ValidationParams()

    if not verify_not_before(claims, params.not_before, params.not_before_leeway):
        logger.debug("claim_rejected", claim="nbf")
        return False
    if not verify_expiration(claims, params.expiration, params.expiration_leeway):
        logger.debug("claim_rejected", claim="exp")
        return False
    if not check_values:
        return True

    for claim, check, accepted in (
        ("iss", verify_issuer, params.issuers),
        ("sub", verify_subject, params.subjects),
        ("aud", verify_audience, params.audiences),
    ):
        if not check(claims, accepted):
            logger.debug("claim_rejected", claim=claim)
            return False
    return True
