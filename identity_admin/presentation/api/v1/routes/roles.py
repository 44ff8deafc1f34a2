"""Role API routes (read-only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from identity_admin.application.auth.queries import FindRolesQuery, GetRoleQuery
from identity_admin.presentation.api.dependencies import AppContextDep, ContainerDep
from identity_admin.presentation.api.v1.schemas import PageParams, PageResponse, RoleResponse

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("", response_model=PageResponse[RoleResponse], summary="Find roles")
async def find_roles(
    page: Annotated[PageParams, Depends()],
    context: AppContextDep,
    container: ContainerDep,
    user_group_id: str | None = None,
) -> PageResponse[RoleResponse]:
    result = await container.find_roles.handle(
        FindRolesQuery(page=page.to_page_request(), user_group_id=user_group_id), context
    )
    return PageResponse[RoleResponse].model_validate(result)


@router.get("/{role_id}", response_model=RoleResponse, summary="Get role")
async def get_role(role_id: str, context: AppContextDep, container: ContainerDep) -> RoleResponse:
    role = await container.get_role.handle(GetRoleQuery(role_id=role_id), context)
    return RoleResponse.model_validate(role)
