"""Authentication strategies applied to outbound API requests."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer


class NoAuth(BaseModel):
    """No authentication."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")
    auth_type: Literal["none"] = "none"

    def apply(self, headers: dict[str, str]) -> dict[str, str]:
        return headers

    def __hash__(self) -> int:
        return hash(self.auth_type)


class BearerAuth(BaseModel):
    """Bearer token authentication.

    Token is stored as SecretStr to prevent accidental logging/exposure.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")
    auth_type: Literal["bearer"] = "bearer"
    token: SecretStr = Field(..., description="Bearer token value")

    def apply(self, headers: dict[str, str]) -> dict[str, str]:
        headers["Authorization"] = f"Bearer {self.token.get_secret_value()}"
        return headers

    @field_serializer("token", when_used="json")
    def _mask_token(self, v: SecretStr) -> str:
        secret = v.get_secret_value()
        return f"{secret[:4]}...{secret[-4:]}" if len(secret) > 8 else "***"

    def __hash__(self) -> int:
        return hash((self.auth_type, self.token.get_secret_value()))


_NO_AUTH = NoAuth()


def auth_for(credential: SecretStr | None) -> NoAuth | BearerAuth:
    """Pick the strategy for a configured credential (absent -> no Authorization header)."""
    return BearerAuth(token=credential) if credential is not None else _NO_AUTH
