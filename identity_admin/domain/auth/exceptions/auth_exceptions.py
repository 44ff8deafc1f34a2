"""Exception codes для Auth bounded context."""

from enum import Enum


class AuthExceptionCode(str, Enum):
    """Machine-readable codes для ValidationException / BusinessException."""

    EMAIL_ALREADY_TAKEN = "EMAIL_ALREADY_TAKEN"
    USERNAME_ALREADY_TAKEN = "USERNAME_ALREADY_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    PASSWORD_VERIFICATION_FAILED = "PASSWORD_VERIFICATION_FAILED"
    NO_UPDATES_PROVIDED = "NO_UPDATES_PROVIDED"

    # User state
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_DELETED = "USER_DELETED"
    USER_ALREADY_DELETED = "USER_ALREADY_DELETED"
    USER_MUST_BE_ACTIVE = "USER_MUST_BE_ACTIVE"
    USER_MUST_BE_DISABLED = "USER_MUST_BE_DISABLED"

    # User groups
    USER_GROUP_NOT_FOUND = "USER_GROUP_NOT_FOUND"
    USER_GROUP_NAME_ALREADY_TAKEN = "USER_GROUP_NAME_ALREADY_TAKEN"
    USER_ALREADY_IN_GROUP = "USER_ALREADY_IN_GROUP"
    USER_NOT_IN_GROUP = "USER_NOT_IN_GROUP"

    # Roles
    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    ROLE_ALREADY_IN_GROUP = "ROLE_ALREADY_IN_GROUP"
    ROLE_NOT_IN_GROUP = "ROLE_NOT_IN_GROUP"
