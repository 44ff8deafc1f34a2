"""Account API routes - self-service registration, sign-in, profile."""

import logging

from fastapi import APIRouter, status

from identity_admin.application.auth.commands import (
    DeleteAccountCommand,
    RegisterCommand,
    RequestAccessTokenCommand,
    SignInCommand,
    UpdateProfileCommand,
)
from identity_admin.application.auth.queries import GetProfileQuery
from identity_admin.presentation.api.dependencies import AppContextDep, ContainerDep
from identity_admin.presentation.api.v1.schemas import (
    AccessTokenRequest,
    AccessTokenResponse,
    AuthTokensResponse,
    ErrorResponse,
    RegisterRequest,
    SignInRequest,
    UpdateProfileRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["Account"])


@router.post(
    "/register",
    response_model=AuthTokensResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register with email and password",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or email/username taken"},
        422: {"model": ErrorResponse, "description": "Provider password verification failed"},
    },
)
async def register(
    request: RegisterRequest, context: AppContextDep, container: ContainerDep
) -> AuthTokensResponse:
    tokens = await container.register.handle(
        RegisterCommand(
            email=request.email,
            password=request.password,
            username=request.username,
            display_name=request.display_name,
        ),
        context,
    )
    return AuthTokensResponse.model_validate(tokens)


@router.post(
    "/sign-in",
    response_model=AuthTokensResponse,
    summary="Sign in with email or username",
    responses={400: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def sign_in(
    request: SignInRequest, context: AppContextDep, container: ContainerDep
) -> AuthTokensResponse:
    tokens = await container.sign_in.handle(
        SignInCommand(identifier=request.identifier, password=request.password), context
    )
    return AuthTokensResponse.model_validate(tokens)


@router.post(
    "/access-token",
    response_model=AccessTokenResponse,
    summary="Exchange provider id token for access token",
    description="""
    Verifies the provider id token. On the first federated sign-in the local
    user is created from the provider profile. Returns a signed access token
    carrying the user's role codes.
    """,
    responses={401: {"model": ErrorResponse, "description": "Invalid id token"}},
)
async def request_access_token(
    request: AccessTokenRequest, context: AppContextDep, container: ContainerDep
) -> AccessTokenResponse:
    result = await container.request_access_token.handle(
        RequestAccessTokenCommand(id_token=request.id_token), context
    )
    return AccessTokenResponse.model_validate(result)


@router.get("/profile", response_model=UserResponse, summary="Get own profile")
async def get_profile(context: AppContextDep, container: ContainerDep) -> UserResponse:
    user = await container.get_profile.handle(GetProfileQuery(), context)
    return UserResponse.model_validate(user)


@router.patch("/profile", response_model=UserResponse, summary="Update own profile")
async def update_profile(
    request: UpdateProfileRequest, context: AppContextDep, container: ContainerDep
) -> UserResponse:
    user = await container.update_profile.handle(
        UpdateProfileCommand(username=request.username, display_name=request.display_name),
        context,
    )
    return UserResponse.model_validate(user)


@router.delete(
    "/profile",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own account (soft delete)",
)
async def delete_account(context: AppContextDep, container: ContainerDep) -> None:
    await container.delete_account.handle(DeleteAccountCommand(), context)
