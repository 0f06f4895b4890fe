"""Validation settings loaded from environment variables."""

from datetime import datetime, timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict

from compactjws.jws.claims import ValidationParams

LEEWAY_SECONDS_DEFAULT = 0


def _split(value: str) -> frozenset[str]:
    """Parse a comma-separated list, ignoring blanks."""
    return frozenset(item.strip() for item in value.split(",") if item.strip())


class ValidationSettings(BaseSettings):
    """Accepted claim values and leeways for server-side token validation."""

    model_config = SettingsConfigDict(env_prefix="JWS_VALIDATION_")

    issuers: str = ""
    subjects: str = ""
    audiences: str = ""
    jwt_ids: str = ""
    expiration_leeway_seconds: int = LEEWAY_SECONDS_DEFAULT
    not_before_leeway_seconds: int = LEEWAY_SECONDS_DEFAULT

    def to_params(self, reference_time: datetime | None = None) -> ValidationParams:
        """Build validation parameters; ``None`` keeps the wall clock as reference."""
        return ValidationParams(
            issuers=_split(self.issuers),
            subjects=_split(self.subjects),
            audiences=_split(self.audiences),
            jwt_ids=_split(self.jwt_ids),
            expiration=reference_time,
            expiration_leeway=timedelta(seconds=self.expiration_leeway_seconds),
            not_before=reference_time,
            not_before_leeway=timedelta(seconds=self.not_before_leeway_seconds),
        )
