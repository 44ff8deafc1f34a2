"""Account handlers - self-service registration, sign-in, profile."""

import logging
from typing import Optional

from identity_admin.application.auth.commands import (
    DeleteAccountCommand,
    RegisterCommand,
    RequestAccessTokenCommand,
    SignInCommand,
    UpdateProfileCommand,
)
from identity_admin.application.auth.dtos import AccessTokenDTO, AuthTokensDTO, UserDTO
from identity_admin.application.shared import (
    AppContext,
    AuthorizationService,
    CommandHandler,
)
from identity_admin.domain.auth.entities import User
from identity_admin.domain.auth.exceptions import AuthExceptionCode
from identity_admin.domain.auth.ports import (
    ExternalUser,
    IdentityProvider,
    TokenSigner,
    UserIdGenerator,
)
from identity_admin.domain.auth.repositories import UserGroupRepository, UserRepository
from identity_admin.domain.auth.services import UserValidatorService
from identity_admin.domain.auth.value_objects import Email, Password, SignInType, Username
from identity_admin.domain.shared import (
    BusinessException,
    CommonExceptionCode,
    ValidationException,
)
from identity_admin.infrastructure.messaging import EventDispatcher

from .base import save_and_dispatch

logger = logging.getLogger(__name__)

# Provider id -> sign-in type. None / "" теж означає password sign-in.
PROVIDER_SIGN_IN_TYPES = {
    "password": SignInType.EMAIL,
    "google.com": SignInType.GOOGLE,
    "apple.com": SignInType.APPLE,
}


def sign_in_type_for_provider(provider_id: Optional[str]) -> SignInType:
    """Map provider id на SignInType.

    >>> sign_in_type_for_provider("google.com")
    <SignInType.GOOGLE: 'GOOGLE'>
    """
    if not provider_id:
        return SignInType.EMAIL
    try:
        return PROVIDER_SIGN_IN_TYPES[provider_id]
    except KeyError:
        raise ValidationException(
            CommonExceptionCode.FIELD_IS_INVALID,
            field="provider_id",
            provider_id=provider_id,
        ) from None


async def apply_profile_changes(
    user: User,
    username: Optional[str],
    display_name: Optional[str],
    user_validator: UserValidatorService,
) -> None:
    """Спільна логіка UpdateProfile / UpdateUser (mutation only, без save)."""
    if username is None and display_name is None:
        raise ValidationException(AuthExceptionCode.NO_UPDATES_PROVIDED)

    if username is not None:
        new_username = Username.create(username)
        await user_validator.validate_username_uniqueness(new_username, exclude_user_id=user.id)
        user.set_username(new_username)

    if display_name is not None:
        user.set_display_name(display_name)


class RegisterHandler(CommandHandler[RegisterCommand, AuthTokensDTO]):
    """Register user in provider + locally, then sign in.

    Flow:
    1. Validate input (email, password, username) та uniqueness
    2. Deterministic id з email
    3. Create credentials у provider
    4. ``User.register`` -> save -> dispatch REGISTERED
    5. Verify password у provider, видати sign-in token
    """

    def __init__(
        self,
        user_repository: UserRepository,
        user_validator: UserValidatorService,
        user_id_generator: UserIdGenerator,
        identity_provider: IdentityProvider,
        dispatcher: EventDispatcher,
    ) -> None:
        self.user_repository = user_repository
        self.user_validator = user_validator
        self.user_id_generator = user_id_generator
        self.identity_provider = identity_provider
        self.dispatcher = dispatcher

    async def handle(self, command: RegisterCommand, context: AppContext) -> AuthTokensDTO:
        email = Email.create(command.email)
        password = Password.create(command.password)
        username = Username.create(command.username) if command.username else None

        await self.user_validator.validate_email_uniqueness(email)
        if username is not None:
            await self.user_validator.validate_username_uniqueness(username)

        user_id = self.user_id_generator.generate_user_id(email)
        external_id = await self.identity_provider.create_user(
            email.value, password.value, command.display_name
        )

        user = User.register(
            id=user_id,
            email=email,
            sign_in_type=SignInType.EMAIL,
            external_id=external_id,
            username=username,
            display_name=command.display_name,
        )
        await save_and_dispatch(self.user_repository, user, self.dispatcher)

        verification = await self.identity_provider.verify_password(email.value, password.value)
        if verification is None:
            raise BusinessException(
                AuthExceptionCode.PASSWORD_VERIFICATION_FAILED, user_id=str(user.id)
            )

        sign_in_token = await self.identity_provider.create_sign_in_token(external_id)

        logger.info("account.registered", extra={"user_id": str(user.id)})
        return AuthTokensDTO(
            id=user.id, id_token=verification.id_token, sign_in_token=sign_in_token
        )


class SignInHandler(CommandHandler[SignInCommand, AuthTokensDTO]):
    def __init__(
        self,
        user_repository: UserRepository,
        identity_provider: IdentityProvider,
    ) -> None:
        self.user_repository = user_repository
        self.identity_provider = identity_provider

    async def handle(self, command: SignInCommand, context: AppContext) -> AuthTokensDTO:
        user = await self._find_user(command.identifier)
        if user is None:
            raise ValidationException(AuthExceptionCode.INVALID_CREDENTIALS)

        user.ensure_active()

        verification = await self.identity_provider.verify_password(
            user.email.value, command.password
        )
        if verification is None:
            logger.warning("account.sign_in_failed", extra={"user_id": str(user.id)})
            raise ValidationException(AuthExceptionCode.INVALID_CREDENTIALS)

        sign_in_token = await self.identity_provider.create_sign_in_token(user.external_id)
        return AuthTokensDTO(
            id=user.id, id_token=verification.id_token, sign_in_token=sign_in_token
        )

    async def _find_user(self, identifier: str) -> Optional[User]:
        identifier = (identifier or "").strip()
        if "@" in identifier:
            email = Email.try_create(identifier)
            if isinstance(email, ValidationException):
                return None
            return await self.user_repository.find_by_email(email)

        try:
            username = Username.create(identifier)
        except ValidationException:
            return None
        return await self.user_repository.find_by_username(username)


class RequestAccessTokenHandler(CommandHandler[RequestAccessTokenCommand, AccessTokenDTO]):
    """Exchange provider id token for access token.

    Якщо user ще не існує локально (перший federated sign-in), він
    створюється з profile провайдера.

    Example:
        >>> result = await handler.handle(
        ...     RequestAccessTokenCommand(id_token=id_token), AppContext.anonymous()
        ... )
        >>> signer.verify_token(result.token)["roles"]
        ['AUTH_VIEWER']
    """

    def __init__(
        self,
        user_repository: UserRepository,
        user_group_repository: UserGroupRepository,
        user_id_generator: UserIdGenerator,
        identity_provider: IdentityProvider,
        token_signer: TokenSigner,
        dispatcher: EventDispatcher,
    ) -> None:
        self.user_repository = user_repository
        self.user_group_repository = user_group_repository
        self.user_id_generator = user_id_generator
        self.identity_provider = identity_provider
        self.token_signer = token_signer
        self.dispatcher = dispatcher

    async def handle(
        self, command: RequestAccessTokenCommand, context: AppContext
    ) -> AccessTokenDTO:
        verification = await self.identity_provider.verify_token(command.id_token)
        external_id = verification.external_id

        user = await self.user_repository.find_by_external_id(external_id)
        if user is None:
            user = await self._create_from_provider(external_id)

        user.ensure_active()

        roles = await self.user_group_repository.get_user_role_codes(user.id)
        token = self.token_signer.sign_token({"user_id": str(user.id), "roles": roles})

        logger.info(
            "account.access_token_issued",
            extra={"user_id": str(user.id), "roles": roles},
        )
        return AccessTokenDTO(token=token)

    async def _create_from_provider(self, external_id: str) -> User:
        external_user = await self.identity_provider.find_user_by_id(external_id)
        if external_user is None:
            raise ValidationException(
                AuthExceptionCode.USER_NOT_FOUND, external_id=external_id
            )
        if not external_user.email:
            raise ValidationException(CommonExceptionCode.FIELD_IS_REQUIRED, field="email")

        email = Email.create(external_user.email)
        sign_in_type = sign_in_type_for_provider(external_user.provider_id)

        # Provider сам знає цей email, тому перевіряємо тільки локальні rows
        existing = await self.user_repository.find_by_email(email)
        if existing is not None:
            if existing.external_id == external_id:
                return existing
            raise ValidationException(AuthExceptionCode.EMAIL_ALREADY_TAKEN, field="email")

        return await self._register(external_user, email, sign_in_type)

    async def _register(
        self, external_user: ExternalUser, email: Email, sign_in_type: SignInType
    ) -> User:
        user = User.register(
            id=self.user_id_generator.generate_user_id(email),
            email=email,
            sign_in_type=sign_in_type,
            external_id=external_user.external_id,
            display_name=external_user.display_name,
        )
        await save_and_dispatch(self.user_repository, user, self.dispatcher)

        logger.info(
            "account.created_from_provider",
            extra={"user_id": str(user.id), "sign_in_type": sign_in_type.value},
        )
        return user


class UpdateProfileHandler(CommandHandler[UpdateProfileCommand, UserDTO]):
    def __init__(
        self,
        authorization: AuthorizationService,
        user_repository: UserRepository,
        user_validator: UserValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_repository = user_repository
        self.user_validator = user_validator
        self.dispatcher = dispatcher

    async def handle(self, command: UpdateProfileCommand, context: AppContext) -> UserDTO:
        caller = self.authorization.require_authenticated(context)
        user = await self.user_validator.validate_user_active_by_id(caller.user_id)

        user.prepare_update(caller.user_id)
        await apply_profile_changes(
            user, command.username, command.display_name, self.user_validator
        )

        if user.has_domain_events:
            await save_and_dispatch(self.user_repository, user, self.dispatcher)
        return UserDTO.from_entity(user)


class DeleteAccountHandler(CommandHandler[DeleteAccountCommand, None]):
    """Soft-delete власного акаунта (pending deletion row)."""

    def __init__(
        self,
        authorization: AuthorizationService,
        user_repository: UserRepository,
        user_validator: UserValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_repository = user_repository
        self.user_validator = user_validator
        self.dispatcher = dispatcher

    async def handle(self, command: DeleteAccountCommand, context: AppContext) -> None:
        caller = self.authorization.require_authenticated(context)
        user = await self.user_validator.validate_user_not_deleted_by_id(caller.user_id)

        user.prepare_update(caller.user_id)
        user.mark_for_deletion()
        await save_and_dispatch(self.user_repository, user, self.dispatcher)

        logger.info("account.deleted", extra={"user_id": str(user.id)})
