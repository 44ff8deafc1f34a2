"""Integration tests for UserRepository."""

from uuid import uuid4

import pytest
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from identity_admin.domain.auth.entities import Role, User, UserGroup
from identity_admin.domain.auth.value_objects import Email, SignInType, UserStatus, Username
from identity_admin.domain.shared import (
    CommonExceptionCode,
    PageRequest,
    SortOrder,
    ValidationException,
)
from identity_admin.infrastructure.persistence.sqlalchemy import SQLAlchemyUserRepository
from identity_admin.infrastructure.persistence.sqlalchemy.models import UserModel


def _user(email: str, username: str | None = None, display_name: str | None = None) -> User:
    return User.register(
        id=uuid4(),
        email=Email.create(email),
        sign_in_type=SignInType.EMAIL,
        external_id=f"ext-{email}",
        username=Username.create(username) if username else None,
        display_name=display_name,
    )


class TestUserRepository:
    """Integration tests для UserRepository."""

    @pytest.mark.asyncio
    async def test_save_and_find(self, user_repository, sample_user_data):
        # Arrange
        user = User.register(**sample_user_data)

        # Act
        await user_repository.save(user)

        # Assert
        by_email = await user_repository.find_by_email(Email.create("JANE@example.com"))
        by_external = await user_repository.find_by_external_id("ext-jane")
        by_username = await user_repository.find_by_username(Username.create("jane_doe1"))
        assert by_email.id == by_external.id == by_username.id == user.id
        assert by_email.status == UserStatus.ACTIVE
        assert by_email.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_duplicate_external_id_surfaces_integrity_error(
        self, user_repository, sample_user_data
    ):
        """Test: concurrent registration race -> storage constraint violation як є."""
        await user_repository.save(User.register(**sample_user_data))

        duplicate = User.register(
            **{
                **sample_user_data,
                "id": uuid4(),
                "email": Email.create("other@example.com"),
                "username": None,
            }
        )
        with pytest.raises(IntegrityError):
            await user_repository.save(duplicate)

    @pytest.mark.asyncio
    async def test_mark_for_deletion_records_pending_row_atomically(
        self, user_repository, event_repository, sample_user_data
    ):
        # Arrange
        user = User.register(**sample_user_data)
        await user_repository.save(user)
        assert not await user_repository.is_pending_deletion(user.id)

        # Act
        user.prepare_update(user.id)
        user.mark_for_deletion()
        await user_repository.save(user)

        # Assert
        assert await user_repository.is_pending_deletion(user.id)
        stored = await user_repository.find_by_id(user.id)
        assert stored.status == UserStatus.DELETED
        assert stored.version == 1

        events = await event_repository.list_for_aggregate(user.id)
        assert [e.event_type for e in events] == ["REGISTERED", "DELETED"]

    @pytest.mark.asyncio
    async def test_pending_row_not_written_when_save_fails(
        self, user_repository, sample_user_data
    ):
        user = User.register(**sample_user_data)
        await user_repository.save(user)

        async def failing_callback(tx) -> None:
            raise RuntimeError("boom")

        user.mark_for_deletion()
        with pytest.raises(RuntimeError):
            await user_repository.save(user, post_save=failing_callback)

        assert not await user_repository.is_pending_deletion(user.id)
        assert (await user_repository.find_by_id(user.id)).status == UserStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_delete_is_not_supported(self, user_repository, sample_user_data):
        user = User.register(**sample_user_data)
        await user_repository.save(user)

        with pytest.raises(NotImplementedError):
            await user_repository.delete(user)

    @pytest.mark.asyncio
    async def test_email_exists_checks_identity_provider(
        self, user_repository, identity_provider
    ):
        identity_provider.add_external_user("known@example.com")

        assert await user_repository.email_exists(Email.create("known@example.com"))
        assert not await user_repository.email_exists(Email.create("new@example.com"))

    @pytest.mark.asyncio
    async def test_username_exists_excludes_self(self, user_repository, sample_user_data):
        user = User.register(**sample_user_data)
        await user_repository.save(user)
        username = Username.create("jane_doe1")

        assert await user_repository.username_exists(username)
        assert not await user_repository.username_exists(username, exclude_user_id=user.id)


class TestStoredDataDrift:
    """Rows, що більше не проходять поточні правила, читаються з помилкою, а не ремонтуються."""

    async def _corrupt(self, session_factory, user_id, **values) -> None:
        async with session_factory() as session:
            await session.execute(update(UserModel).where(UserModel.id == user_id).values(**values))
            await session.commit()

    @pytest.mark.asyncio
    async def test_invalid_stored_username_raises(
        self, user_repository, session_factory, sample_user_data
    ):
        # Arrange
        user = User.register(**sample_user_data)
        await user_repository.save(user)
        await self._corrupt(session_factory, user.id, username="bad")

        # Act & Assert
        with pytest.raises(ValidationException) as exc_info:
            await user_repository.find_by_id(user.id)

        assert exc_info.value.code == CommonExceptionCode.FIELD_IS_INVALID
        assert exc_info.value.data["field"] == "username"

    @pytest.mark.asyncio
    async def test_empty_stored_username_raises(
        self, user_repository, session_factory, sample_user_data
    ):
        user = User.register(**sample_user_data)
        await user_repository.save(user)
        await self._corrupt(session_factory, user.id, username="")

        with pytest.raises(ValidationException) as exc_info:
            await user_repository.find_by_id(user.id)

        assert exc_info.value.code == CommonExceptionCode.FIELD_IS_REQUIRED

    @pytest.mark.asyncio
    async def test_invalid_stored_email_raises(
        self, user_repository, session_factory, sample_user_data
    ):
        user = User.register(**sample_user_data)
        await user_repository.save(user)
        await self._corrupt(session_factory, user.id, email="not-an-email")

        with pytest.raises(ValidationException) as exc_info:
            await user_repository.find_by_external_id("ext-jane")

        assert exc_info.value.code == CommonExceptionCode.FIELD_IS_INVALID
        assert exc_info.value.data["field"] == "email"


class TestUserMembership:
    @pytest.mark.asyncio
    async def test_role_codes_follow_group_membership(
        self, user_repository, user_group_repository, role_repository, sample_user_data
    ):
        # Arrange
        user = User.register(**sample_user_data)
        await user_repository.save(user)
        viewer = Role(id=uuid4(), code="AUTH_VIEWER", name="Auth viewer")
        manager = Role(id=uuid4(), code="AUTH_MANAGER", name="Auth manager")
        await role_repository.save(viewer)
        await role_repository.save(manager)

        first = UserGroup.create(id=uuid4(), name="Viewers")
        second = UserGroup.create(id=uuid4(), name="Managers")
        await user_group_repository.save(first)
        await user_group_repository.save(second)
        await user_group_repository.add_role(first.id, viewer.id)
        await user_group_repository.add_role(second.id, viewer.id)
        await user_group_repository.add_role(second.id, manager.id)

        # Act
        await user_repository.add_to_group(user.id, first.id)
        only_viewer = await user_group_repository.get_user_role_codes(user.id)
        await user_repository.add_to_group(user.id, second.id)
        both = await user_group_repository.get_user_role_codes(user.id)
        await user_repository.remove_from_group(user.id, second.id)
        after_removal = await user_group_repository.get_user_role_codes(user.id)

        # Assert
        assert only_viewer == ["AUTH_VIEWER"]
        assert both == ["AUTH_MANAGER", "AUTH_VIEWER"]
        assert after_removal == ["AUTH_VIEWER"]
        assert await user_group_repository.user_in_group(first.id, user.id)
        assert not await user_group_repository.user_in_group(second.id, user.id)

    @pytest.mark.asyncio
    async def test_find_filters_by_group(
        self, user_repository, user_group_repository
    ):
        member = _user("a@example.com")
        outsider = _user("b@example.com")
        await user_repository.save(member)
        await user_repository.save(outsider)
        group = UserGroup.create(id=uuid4(), name="Team")
        await user_group_repository.save(group)
        await user_repository.add_to_group(member.id, group.id)

        result = await user_repository.find(PageRequest(), user_group_id=group.id)

        assert result.count == 1
        assert [u.id for u in result.data] == [member.id]


class TestUserPagination:
    @pytest.fixture
    async def users(self, user_repository):
        users = [
            _user("carol@example.com", "carol_c1", "Carol"),
            _user("alice@example.com", "alice_a1", "Alice"),
            _user("bob@example.com", "bob_b123", "Bob"),
        ]
        for user in users:
            await user_repository.save(user)
        return users

    @pytest.mark.asyncio
    async def test_default_sort_is_email_asc(self, user_repository, users):
        result = await user_repository.find(PageRequest())

        assert result.count == 3
        assert [u.email.value for u in result.data] == [
            "alice@example.com",
            "bob@example.com",
            "carol@example.com",
        ]

    @pytest.mark.asyncio
    async def test_paging_and_desc_sort(self, user_repository, users):
        result = await user_repository.find(
            PageRequest(
                page_index=1,
                items_per_page=2,
                sort_field="display_name",
                sort_order=SortOrder.DESC,
            )
        )

        assert result.count == 3
        assert result.page_index == 1
        assert [u.display_name for u in result.data] == ["Alice"]

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, user_repository, users):
        result = await user_repository.find(PageRequest(search_term="  BOB "))

        assert result.count == 1
        assert result.data[0].username.value == "bob_b123"

    @pytest.mark.asyncio
    async def test_search_wildcards_match_literally(self, user_repository, users):
        # "l_c" як pattern матчив би і "alice"
        underscore = await user_repository.find(PageRequest(search_term="l_c"))
        percent = await user_repository.find(PageRequest(search_term="a%1"))

        assert [u.username.value for u in underscore.data] == ["carol_c1"]
        assert percent.count == 0

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self, user_repository, users):
        with pytest.raises(ValidationException) as exc_info:
            await user_repository.find(PageRequest(sort_field="password"))

        assert exc_info.value.code == CommonExceptionCode.FIELD_IS_INVALID
        assert exc_info.value.data["field"] == "sort_field"

    @pytest.mark.asyncio
    async def test_page_size_is_capped(
        self, session_factory, event_repository, identity_provider, users
    ):
        repository = SQLAlchemyUserRepository(
            session_factory, event_repository, identity_provider, max_page_size=2
        )

        result = await repository.find(PageRequest(items_per_page=50))

        assert len(result.data) == 2
        assert result.count == 3
