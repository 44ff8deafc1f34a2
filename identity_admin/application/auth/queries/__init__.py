"""Auth queries (read operations)."""

from dataclasses import dataclass
from typing import Optional

from identity_admin.application.shared import PageRequest, Query


@dataclass(frozen=True)
class GetProfileQuery(Query):
    pass


@dataclass(frozen=True)
class GetUserQuery(Query):
    user_id: str


@dataclass(frozen=True)
class FindUsersQuery(Query):
    page: PageRequest = PageRequest()
    user_group_id: Optional[str] = None


@dataclass(frozen=True)
class GetUserGroupQuery(Query):
    user_group_id: str


@dataclass(frozen=True)
class FindUserGroupsQuery(Query):
    page: PageRequest = PageRequest()


@dataclass(frozen=True)
class GetRoleQuery(Query):
    role_id: str


@dataclass(frozen=True)
class FindRolesQuery(Query):
    page: PageRequest = PageRequest()
    user_group_id: Optional[str] = None


__all__ = [
    "GetProfileQuery",
    "GetUserQuery",
    "FindUsersQuery",
    "GetUserGroupQuery",
    "FindUserGroupsQuery",
    "GetRoleQuery",
    "FindRolesQuery",
]
