"""User administration API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from identity_admin.application.auth.commands import (
    DeleteUserCommand,
    ToggleUserStatusCommand,
    UpdateUserCommand,
)
from identity_admin.application.auth.queries import FindUsersQuery, GetUserQuery
from identity_admin.presentation.api.dependencies import AppContextDep, ContainerDep
from identity_admin.presentation.api.v1.schemas import (
    PageParams,
    PageResponse,
    ToggleUserStatusRequest,
    UpdateProfileRequest,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=PageResponse[UserResponse], summary="Find users")
async def find_users(
    page: Annotated[PageParams, Depends()],
    context: AppContextDep,
    container: ContainerDep,
    user_group_id: str | None = None,
) -> PageResponse[UserResponse]:
    result = await container.find_users.handle(
        FindUsersQuery(page=page.to_page_request(), user_group_id=user_group_id), context
    )
    return PageResponse[UserResponse].model_validate(result)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(
    user_id: str, context: AppContextDep, container: ContainerDep
) -> UserResponse:
    user = await container.get_user.handle(GetUserQuery(user_id=user_id), context)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user(
    user_id: str,
    request: UpdateProfileRequest,
    context: AppContextDep,
    container: ContainerDep,
) -> UserResponse:
    user = await container.update_user.handle(
        UpdateUserCommand(
            user_id=user_id, username=request.username, display_name=request.display_name
        ),
        context,
    )
    return UserResponse.model_validate(user)


@router.put("/{user_id}/status", response_model=UserResponse, summary="Enable / disable user")
async def toggle_user_status(
    user_id: str,
    request: ToggleUserStatusRequest,
    context: AppContextDep,
    container: ContainerDep,
) -> UserResponse:
    user = await container.toggle_user_status.handle(
        ToggleUserStatusCommand(user_id=user_id, enabled=request.enabled), context
    )
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete user")
async def delete_user(user_id: str, context: AppContextDep, container: ContainerDep) -> None:
    await container.delete_user.handle(DeleteUserCommand(user_id=user_id), context)
