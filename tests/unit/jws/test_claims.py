"""Tests for registered claim validation."""

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from compactjws.core.errors import ClaimParseError
from compactjws.jws.claims import (
    ValidationParams,
    parse_numeric_date,
    validate_registered_claims,
    verify_audience,
    verify_expiration,
    verify_issuer,
    verify_not_before,
    verify_subject,
)
from compactjws.jws.types import Claims

EXP = 1300819380


def at(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, UTC)


def params_at(seconds: float, **kwargs: Any) -> ValidationParams:
    return ValidationParams(expiration=at(seconds), not_before=at(seconds), **kwargs)


class TestParseNumericDate:
    """Tests for the strict decimal parse of time claims."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1300819380", 1300819380), ("+5", 5), ("-5", -5), ("0", 0), (42, 42)],
    )
    def test_valid(self, value: str | int, expected: int) -> None:
        assert parse_numeric_date(value, "exp") == expected

    @pytest.mark.parametrize("value", ["not-a-number", "1.5", " 5", "5 ", "0x10", "", 1.5, True])
    def test_invalid(self, value: str | float) -> None:
        with pytest.raises(ClaimParseError):
            parse_numeric_date(value, "exp")


class TestScenarios:
    """End-to-end claim validation scenarios."""

    def test_accepted_before_expiry(self) -> None:
        claims = Claims(iss="joe", exp=str(EXP))
        params = params_at(1300819379, issuers=frozenset({"joe"}))
        assert validate_registered_claims(claims, params) is True

    def test_rejected_after_expiry(self) -> None:
        claims = Claims(iss="joe", exp=str(EXP))
        params = params_at(1300819381, issuers=frozenset({"joe"}))
        assert validate_registered_claims(claims, params) is False

    def test_rejected_at_expiry(self) -> None:
        claims = Claims(exp=str(EXP))
        assert validate_registered_claims(claims, params_at(EXP)) is False

    def test_ill_formed_exp(self) -> None:
        claims = Claims(exp="not-a-number")
        with pytest.raises(ClaimParseError):
            validate_registered_claims(claims, params_at(EXP))

    def test_no_params_rejects_expired(self) -> None:
        assert validate_registered_claims(Claims(exp=str(EXP))) is False

    def test_no_params_accepts_future_expiry(self) -> None:
        future = int(datetime.now(UTC).timestamp()) + 3600
        assert validate_registered_claims(Claims(exp=str(future))) is True

    def test_no_params_skips_value_checks(self) -> None:
        claims = Claims(iss="anyone", sub="someone", aud="elsewhere")
        assert validate_registered_claims(claims) is True

    def test_jti_not_enforced(self) -> None:
        params = params_at(EXP - 1, jwt_ids=frozenset({"expected"}))
        assert validate_registered_claims(Claims(jti="other"), params) is True

    def test_not_before_checked_first(self) -> None:
        claims = Claims(nbf=str(EXP + 100), exp="garbage")
        assert validate_registered_claims(claims, params_at(EXP)) is False

    def test_rejection_is_logged(self) -> None:
        with capture_logs() as logs:
            validate_registered_claims(Claims(iss="mallory"), params_at(EXP))
        assert {"event": "claim_rejected", "claim": "iss", "log_level": "debug"} in logs


class TestTimeRules:
    """Tests for nbf and exp comparisons."""

    def test_absent_claims_pass(self) -> None:
        assert verify_expiration(Claims(), at(EXP)) is True
        assert verify_not_before(Claims(), at(EXP)) is True

    def test_empty_string_is_absent(self) -> None:
        assert verify_expiration(Claims(exp=""), at(EXP)) is True
        assert verify_not_before(Claims(nbf=""), at(EXP)) is True

    def test_integer_claims(self) -> None:
        assert verify_expiration(Claims(exp=EXP), at(EXP - 1)) is True
        assert verify_expiration(Claims(exp=EXP), at(EXP)) is False

    def test_not_before_is_exclusive(self) -> None:
        claims = Claims(nbf=str(EXP))
        assert verify_not_before(claims, at(EXP)) is False
        assert verify_not_before(claims, at(EXP + 1)) is True

    def test_not_before_leeway(self) -> None:
        claims = Claims(nbf=str(EXP))
        assert verify_not_before(claims, at(EXP), timedelta(seconds=1)) is True

    def test_expiration_leeway(self) -> None:
        claims = Claims(exp=str(EXP))
        assert verify_expiration(claims, at(EXP + 5), timedelta(seconds=5)) is False
        assert verify_expiration(claims, at(EXP + 5), timedelta(seconds=6)) is True

    def test_fractional_reference_is_floored(self) -> None:
        claims = Claims(exp=str(EXP))
        assert verify_expiration(claims, at(EXP - 0.5)) is True

    def test_naive_reference_is_utc(self) -> None:
        naive = datetime(2011, 3, 22, 18, 42, 59)
        assert verify_expiration(Claims(exp=str(EXP)), naive) is True
        assert verify_expiration(Claims(exp=str(EXP)), naive + timedelta(seconds=2)) is False

    def test_float_claim_rejected(self) -> None:
        with pytest.raises(ClaimParseError):
            verify_expiration(Claims(exp=1300819380.5), at(EXP))

    def test_leeway_beyond_datetime_range(self) -> None:
        params = ValidationParams(
            expiration_leeway=timedelta(days=800_000),
            not_before_leeway=timedelta(days=3_000_000),
        )
        claims = Claims(exp=str(EXP), nbf=str(EXP + 3600))
        assert validate_registered_claims(claims, params) is True

    def test_reference_at_datetime_max(self) -> None:
        reference = datetime.max.replace(tzinfo=UTC)
        assert verify_expiration(Claims(exp=str(EXP)), reference, timedelta(days=1)) is False
        assert verify_not_before(Claims(nbf=str(EXP)), reference, timedelta(days=1)) is True


class TestValueRules:
    """Tests for issuer, subject and audience membership."""

    def test_absent_claim_passes(self) -> None:
        assert verify_issuer(Claims(), set()) is True
        assert verify_subject(Claims(), {"alice"}) is True
        assert verify_audience(Claims(), {"api"}) is True

    def test_present_claim_must_be_accepted(self) -> None:
        assert verify_issuer(Claims(iss="joe"), {"joe", "ann"}) is True
        assert verify_issuer(Claims(iss="joe"), set()) is False
        assert verify_subject(Claims(sub="bob"), {"alice"}) is False

    def test_audience_list(self) -> None:
        assert verify_audience(Claims(aud=["web", "api"]), {"api"}) is True
        assert verify_audience(Claims(aud=["web"]), {"api"}) is False
        assert verify_audience(Claims(aud=[]), {"api"}) is True

    def test_each_rule_applied(self) -> None:
        params = params_at(
            EXP - 1,
            issuers=frozenset({"joe"}),
            subjects=frozenset({"alice"}),
            audiences=frozenset({"api"}),
        )
        assert validate_registered_claims(Claims(iss="joe", sub="alice", aud="api"), params)
        assert not validate_registered_claims(Claims(iss="joe", sub="bob", aud="api"), params)
        assert not validate_registered_claims(Claims(iss="joe", sub="alice", aud="web"), params)


class TestValidationParams:
    """Tests for validation parameter construction."""

    def test_defaults(self) -> None:
        params = ValidationParams()
        assert params.expiration is None
        assert params.expiration_leeway == timedelta(0)
        assert params.issuers == frozenset()

    def test_negative_leeway_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValidationParams(expiration_leeway=timedelta(seconds=-1))
        with pytest.raises(ValidationError):
            ValidationParams(not_before_leeway=timedelta(seconds=-1))
