"""User group API routes - groups, membership, group roles."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from identity_admin.application.auth.commands import (
    AddRoleToUserGroupCommand,
    AddUserToUserGroupCommand,
    CreateUserGroupCommand,
    DeleteUserGroupCommand,
    RemoveRoleFromUserGroupCommand,
    RemoveUserFromUserGroupCommand,
    UpdateUserGroupCommand,
)
from identity_admin.application.auth.queries import FindUserGroupsQuery, GetUserGroupQuery
from identity_admin.presentation.api.dependencies import AppContextDep, ContainerDep
from identity_admin.presentation.api.v1.schemas import (
    CreatedResponse,
    CreateUserGroupRequest,
    PageParams,
    PageResponse,
    UpdateUserGroupRequest,
    UserGroupResponse,
)

router = APIRouter(prefix="/user-groups", tags=["User groups"])


# ============================================================================
# USER GROUPS
# ============================================================================


@router.get("", response_model=PageResponse[UserGroupResponse], summary="Find user groups")
async def find_user_groups(
    page: Annotated[PageParams, Depends()],
    context: AppContextDep,
    container: ContainerDep,
) -> PageResponse[UserGroupResponse]:
    result = await container.find_user_groups.handle(
        FindUserGroupsQuery(page=page.to_page_request()), context
    )
    return PageResponse[UserGroupResponse].model_validate(result)


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user group",
)
async def create_user_group(
    request: CreateUserGroupRequest, context: AppContextDep, container: ContainerDep
) -> CreatedResponse:
    group_id = await container.create_user_group.handle(
        CreateUserGroupCommand(name=request.name, description=request.description), context
    )
    return CreatedResponse(id=group_id)


@router.get("/{user_group_id}", response_model=UserGroupResponse, summary="Get user group")
async def get_user_group(
    user_group_id: str, context: AppContextDep, container: ContainerDep
) -> UserGroupResponse:
    group = await container.get_user_group.handle(
        GetUserGroupQuery(user_group_id=user_group_id), context
    )
    return UserGroupResponse.model_validate(group)


@router.patch("/{user_group_id}", response_model=UserGroupResponse, summary="Update user group")
async def update_user_group(
    user_group_id: str,
    request: UpdateUserGroupRequest,
    context: AppContextDep,
    container: ContainerDep,
) -> UserGroupResponse:
    group = await container.update_user_group.handle(
        UpdateUserGroupCommand(
            user_group_id=user_group_id, name=request.name, description=request.description
        ),
        context,
    )
    return UserGroupResponse.model_validate(group)


@router.delete(
    "/{user_group_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete user group"
)
async def delete_user_group(
    user_group_id: str, context: AppContextDep, container: ContainerDep
) -> None:
    await container.delete_user_group.handle(
        DeleteUserGroupCommand(user_group_id=user_group_id), context
    )


# ============================================================================
# MEMBERSHIP
# ============================================================================


@router.put(
    "/{user_group_id}/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Add user to group",
)
async def add_user_to_user_group(
    user_group_id: str, user_id: str, context: AppContextDep, container: ContainerDep
) -> None:
    await container.add_user_to_user_group.handle(
        AddUserToUserGroupCommand(user_group_id=user_group_id, user_id=user_id), context
    )


@router.delete(
    "/{user_group_id}/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove user from group",
)
async def remove_user_from_user_group(
    user_group_id: str, user_id: str, context: AppContextDep, container: ContainerDep
) -> None:
    await container.remove_user_from_user_group.handle(
        RemoveUserFromUserGroupCommand(user_group_id=user_group_id, user_id=user_id), context
    )


# ============================================================================
# GROUP ROLES
# ============================================================================


@router.put(
    "/{user_group_id}/roles/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Grant role to group",
)
async def add_role_to_user_group(
    user_group_id: str, role_id: str, context: AppContextDep, container: ContainerDep
) -> None:
    await container.add_role_to_user_group.handle(
        AddRoleToUserGroupCommand(user_group_id=user_group_id, role_id=role_id), context
    )


@router.delete(
    "/{user_group_id}/roles/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke role from group",
)
async def remove_role_from_user_group(
    user_group_id: str, role_id: str, context: AppContextDep, container: ContainerDep
) -> None:
    await container.remove_role_from_user_group.handle(
        RemoveRoleFromUserGroupCommand(user_group_id=user_group_id, role_id=role_id), context
    )
