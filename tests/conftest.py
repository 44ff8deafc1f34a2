"""Pytest configuration and fixtures."""

from uuid import uuid4

import pytest

from identity_admin.application.shared import AppContext
from identity_admin.domain.auth.value_objects import AuthRole


@pytest.fixture
def sample_user_data():
    """Sample data для створення users в tests."""
    from identity_admin.domain.auth.value_objects import Email, SignInType, Username

    return {
        "id": uuid4(),
        "email": Email.create("jane@example.com"),
        "sign_in_type": SignInType.EMAIL,
        "external_id": "ext-jane",
        "username": Username.create("jane_doe1"),
        "display_name": "Jane Doe",
    }


@pytest.fixture
def manager_context():
    return AppContext.for_user(uuid4(), {AuthRole.AUTH_MANAGER.value})


@pytest.fixture
def viewer_context():
    return AppContext.for_user(uuid4(), {AuthRole.AUTH_VIEWER.value})


@pytest.fixture
def anonymous_context():
    return AppContext.anonymous()
