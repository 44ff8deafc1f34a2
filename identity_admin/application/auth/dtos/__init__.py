"""Data Transfer Objects for application layer."""

from .token_dto import AccessTokenDTO, AuthTokensDTO
from .user_dto import UserDTO
from .user_group_dto import RoleDTO, UserGroupDTO

__all__ = ["UserDTO", "UserGroupDTO", "RoleDTO", "AuthTokensDTO", "AccessTokenDTO"]
