"""Reacts to User.REGISTERED after commit."""

import logging

from identity_admin.domain.shared import DomainEvent

logger = logging.getLogger(__name__)


class UserRegisteredHandler:
    event_types = ("User.REGISTERED",)

    async def handle(self, event: DomainEvent) -> None:
        logger.info(
            "user.registered",
            extra={
                "user_id": str(event.aggregate_id),
                "email": event.data.get("email"),
                "username": event.data.get("username"),
            },
        )
