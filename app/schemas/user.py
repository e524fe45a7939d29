"""User API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr


class UserCreateRequest(BaseModel):
    """Request body for creating a login user in the requested company."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., description="owner, manager or staff")
    password: SecretStr = Field(..., description="Initial password (min 8 characters)")


class UserResponse(BaseModel):
    """User response (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    email: str
    name: str
    role: str
    is_active: bool
