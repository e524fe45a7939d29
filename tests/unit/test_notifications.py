"""Unit tests for NotificationService and NotificationDispatcher."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.notification import NotificationCreate
from app.application.use_cases.notifications.notification_operations import (
    NotificationService,
)
from app.domain.enums import NotificationEvent
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.services.notification_dispatcher import NotificationDispatcher
from tests.fakes import (
    FakeNotificationRepository,
    FakeRoleRepository,
    FakeRosterRepository,
    FakeStaffRepository,
    FakeUserRepository,
    utc,
)

TENANT = "t1"


class TestNotificationService:
    @pytest.fixture
    def repo(self) -> FakeNotificationRepository:
        return FakeNotificationRepository()

    async def _seed(self, repo: FakeNotificationRepository, user_id: str, count: int):
        items = [
            NotificationCreate(user_id, "system", f"Title {i}", "Body") for i in range(count)
        ]
        return await repo.create_many(TENANT, items)

    async def test_list_newest_first_and_unread_only(self, repo) -> None:
        created = await self._seed(repo, "u1", 3)
        service = NotificationService(repo)
        await service.mark_as_read(TENANT, "u1", created[0].id)

        listed = await service.list_notifications(TENANT, "u1")
        assert [n.id for n in listed] == [n.id for n in reversed(created)]
        unread = await service.list_notifications(TENANT, "u1", unread_only=True)
        assert len(unread) == 2
        assert await service.unread_count(TENANT, "u1") == 2

    async def test_cannot_mark_another_users_notification(self, repo) -> None:
        created = await self._seed(repo, "u1", 1)
        service = NotificationService(repo)
        with pytest.raises(ResourceNotFoundException, match="Notification not found"):
            await service.mark_as_read(TENANT, "u2", created[0].id)
        with pytest.raises(ResourceNotFoundException):
            await service.mark_as_read("t2", "u1", created[0].id)

    async def test_mark_all_read_counts_updates(self, repo) -> None:
        await self._seed(repo, "u1", 2)
        await self._seed(repo, "u2", 1)
        service = NotificationService(repo)
        assert await service.mark_all_as_read(TENANT, "u1") == 2
        assert await service.unread_count(TENANT, "u1") == 0
        assert await service.unread_count(TENANT, "u2") == 1


class TestNotificationDispatcher:
    @pytest.fixture
    def dispatcher(self) -> NotificationDispatcher:
        dispatcher = NotificationDispatcher(MagicMock(), email_sender=AsyncMock())
        dispatcher.staff_repo = FakeStaffRepository()
        dispatcher.user_repo = FakeUserRepository(FakeRoleRepository())
        dispatcher.roster_repo = FakeRosterRepository()
        dispatcher.notification_repo = FakeNotificationRepository()
        return dispatcher

    async def test_staff_linked_to_users_by_email(self, dispatcher) -> None:
        roster = await dispatcher.roster_repo.create_roster(
            TENANT, "Week 1", utc(2025, 1, 6), utc(2025, 1, 12)
        )
        alice = dispatcher.staff_repo.add(TENANT, "Alice", email="alice@acme.ie")
        bob = dispatcher.staff_repo.add(TENANT, "Bob", email="bob@acme.ie")
        user = dispatcher.user_repo.add(TENANT, "staff", email="alice@acme.ie")

        await dispatcher.dispatch(
            TENANT, NotificationEvent.ROSTER_PUBLISHED, roster.id, [alice.id, bob.id, alice.id]
        )

        rows = list(dispatcher.notification_repo.items.values())
        assert len(rows) == 1
        assert rows[0].user_id == user.id
        assert rows[0].title == "Roster published"
        assert rows[0].message == "Roster 'Week 1' has been published."
        assert rows[0].data == {"roster_id": roster.id, "event": "roster_published"}
        dispatcher.email_sender.send.assert_not_awaited()

    async def test_email_sent_when_enabled(self, dispatcher) -> None:
        dispatcher.email_enabled = True
        staff = dispatcher.staff_repo.add(TENANT, "Alice", email="alice@acme.ie")
        dispatcher.user_repo.add(TENANT, "staff", email="alice@acme.ie")

        await dispatcher.dispatch(TENANT, NotificationEvent.SHIFT_CREATED, "ro-x", [staff.id])

        dispatcher.email_sender.send.assert_awaited_once_with(
            ["alice@acme.ie"], "New shift assigned", "You have a new shift in roster 'ro-x'."
        )

    async def test_failures_are_logged_not_raised(self, dispatcher) -> None:
        staff = dispatcher.staff_repo.add(TENANT, "Alice", email="alice@acme.ie")
        dispatcher.user_repo.add(TENANT, "staff", email="alice@acme.ie")
        dispatcher.notification_repo.create_many = AsyncMock(side_effect=RuntimeError("db"))

        await dispatcher.dispatch(TENANT, NotificationEvent.SHIFT_UPDATED, "ro-x", [staff.id])

    async def test_no_linked_users_writes_nothing(self, dispatcher) -> None:
        staff = dispatcher.staff_repo.add(TENANT, "Alice")
        await dispatcher.dispatch(TENANT, NotificationEvent.SHIFT_DELETED, "ro-x", [staff.id])
        assert dispatcher.notification_repo.items == {}
