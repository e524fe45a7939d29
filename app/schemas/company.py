"""Company (tenant) API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, model_validator


class CompanyCreateRequest(BaseModel):
    """Request body for creating a company, optionally with its owner user.

    Domain is normalized to lowercase. Limits fall back to configured defaults.
    """

    name: str = Field(..., min_length=1, max_length=255)
    domain: str = Field(..., min_length=1, max_length=253, description="Unique company domain")
    user_limit: int | None = None
    manager_limit: int | None = None
    token_limit: int | None = None
    settings: dict[str, Any] | None = None
    owner_email: EmailStr | None = None
    owner_name: str | None = Field(default=None, max_length=255)
    owner_password: SecretStr | None = None

    @model_validator(mode="after")
    def owner_password_required(self) -> "CompanyCreateRequest":
        if self.owner_email and self.owner_password is None:
            raise ValueError("owner_password is required when owner_email is given")
        return self


class CompanyUpdateRequest(BaseModel):
    """Partial update; settings are merged into the existing settings."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    user_limit: int | None = None
    manager_limit: int | None = None
    token_limit: int | None = None
    settings: dict[str, Any] | None = None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    domain: str
    is_active: bool
    user_limit: int
    manager_limit: int
    token_limit: int
    settings: dict[str, Any]
    created_at: datetime | None = None


class CompanyStatsResponse(BaseModel):
    """Usage counts compared with the company's limits."""

    model_config = ConfigDict(from_attributes=True)

    company_id: str
    user_count: int
    user_limit: int
    manager_count: int
    manager_limit: int
    staff_count: int
    roster_count: int
