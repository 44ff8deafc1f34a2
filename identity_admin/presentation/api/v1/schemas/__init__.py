"""API v1 schemas."""

from .auth_schemas import (
    AccessTokenRequest,
    AccessTokenResponse,
    AuthTokensResponse,
    CreatedResponse,
    CreateUserGroupRequest,
    ErrorResponse,
    PageParams,
    PageResponse,
    RegisterRequest,
    RoleResponse,
    SignInRequest,
    ToggleUserStatusRequest,
    UpdateProfileRequest,
    UpdateUserGroupRequest,
    UserGroupResponse,
    UserResponse,
)

__all__ = [
    "RegisterRequest",
    "SignInRequest",
    "AccessTokenRequest",
    "UpdateProfileRequest",
    "ToggleUserStatusRequest",
    "CreateUserGroupRequest",
    "UpdateUserGroupRequest",
    "PageParams",
    "AuthTokensResponse",
    "AccessTokenResponse",
    "UserResponse",
    "UserGroupResponse",
    "RoleResponse",
    "CreatedResponse",
    "PageResponse",
    "ErrorResponse",
]
