"""Pydantic schemas for identity admin API requests/responses."""

from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from identity_admin.domain.shared import PageRequest, SortOrder

T = TypeVar("T")


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================


class RegisterRequest(BaseModel):
    """Request schema для реєстрації.

    Example:
        {
            "email": "jane@example.com",
            "password": "Secret#123",
            "username": "jane_doe1",
            "display_name": "Jane Doe"
        }
    """

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="8-20 chars, upper, lower, digit, special")
    username: str | None = Field(default=None, description="8-20 chars [A-Za-z0-9_]")
    display_name: str | None = Field(default=None, max_length=255)


class SignInRequest(BaseModel):
    identifier: str = Field(..., description="Email or username")
    password: str


class AccessTokenRequest(BaseModel):
    id_token: str = Field(..., description="Identity provider id token")


class UpdateProfileRequest(BaseModel):
    username: str | None = None
    display_name: str | None = None


class ToggleUserStatusRequest(BaseModel):
    enabled: bool


class CreateUserGroupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)


class UpdateUserGroupRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)


class PageParams(BaseModel):
    """Query parameters для paged list endpoints."""

    page_index: int = Field(default=0, ge=0)
    items_per_page: int | None = Field(default=None, ge=1)
    search_term: str | None = None
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC

    def to_page_request(self) -> PageRequest:
        return PageRequest(
            page_index=self.page_index,
            items_per_page=self.items_per_page,
            search_term=self.search_term,
            sort_field=self.sort_field,
            sort_order=self.sort_order,
        )


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================


class AuthTokensResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    id_token: str
    sign_in_token: str


class AccessTokenResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    token: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    sign_in_type: str
    username: str | None
    display_name: str | None
    status: str
    version: int
    created_at: datetime
    last_modified_at: datetime


class UserGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    version: int
    created_at: datetime
    last_modified_at: datetime


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    description: str | None


class CreatedResponse(BaseModel):
    id: UUID


class PageResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(from_attributes=True)

    data: list[T]
    count: int
    page_index: int


class ErrorResponse(BaseModel):
    """Error body для всіх domain / infrastructure errors."""

    error: str
    code: str | None = None
    message: str
    data: dict | None = None
