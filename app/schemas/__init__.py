"""Pydantic request/response schemas for the API."""

from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyResponse,
    CompanyStatsResponse,
    CompanyUpdateRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.location import (
    StoreLocationCreateRequest,
    StoreLocationDetailResponse,
    StoreLocationResponse,
)
from app.schemas.notification import NotificationResponse
from app.schemas.roster import (
    RosterCreateRequest,
    RosterDetailResponse,
    RosterResponse,
    ShiftCreateRequest,
    ShiftResponse,
)
from app.schemas.staff import StaffCreateRequest, StaffDetailResponse, StaffResponse
from app.schemas.user import UserCreateRequest, UserResponse

__all__ = [
    "CompanyCreateRequest",
    "CompanyResponse",
    "CompanyStatsResponse",
    "CompanyUpdateRequest",
    "HealthResponse",
    "LoginRequest",
    "NotificationResponse",
    "RosterCreateRequest",
    "RosterDetailResponse",
    "RosterResponse",
    "ShiftCreateRequest",
    "ShiftResponse",
    "StaffCreateRequest",
    "StaffDetailResponse",
    "StaffResponse",
    "StoreLocationCreateRequest",
    "StoreLocationDetailResponse",
    "StoreLocationResponse",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
]
