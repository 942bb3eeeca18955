#!/usr/bin/env python3
"""Tests for NotificationService and the message builder."""

import contextlib
import unittest
import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from core.access import AccessContext
from core.config_loader import NotificationConfig
from core.exceptions import DataStoreError, NotificationNotFoundError, PermissionDeniedError
from database.repositories import NotificationRepository
from notification import NotificationService, NotificationMessageBuilder, NotificationType
from tests.fixtures.db import make_session_factory, add_user

pytestmark = pytest.mark.db


class TestNotificationMessageBuilder(unittest.TestCase):

    def test_match_request(self):
        content = NotificationMessageBuilder.match_request("Ada")
        self.assertEqual(content.type, NotificationType.MATCH_REQUEST)
        self.assertEqual(content.message, "Ada wants to connect with you!")

    def test_unknown_names_fall_back(self):
        self.assertEqual(
            NotificationMessageBuilder.match_request(None).message,
            "Someone wants to connect with you!"
        )
        self.assertEqual(
            NotificationMessageBuilder.match_rejected("").message,
            "Someone has declined your connection request."
        )

    def test_match_confirmed(self):
        content = NotificationMessageBuilder.match_confirmed("Grace")
        self.assertEqual(content.type, NotificationType.MATCH_CONFIRMED)
        self.assertEqual(content.title, "New Connection!")
        self.assertEqual(content.message, "You are now connected with Grace!")


class TestNotifyFailures(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.repo.savepoint.return_value = contextlib.nullcontext()
        self.access = AccessContext.for_user("u-1").as_service()

    def test_disabled_notifications_are_skipped(self):
        service = NotificationService(self.repo, NotificationConfig(enabled=False))

        result = service.notify_match_request(self.access, "u-2", "Ada", "r-1")

        self.assertIsNone(result)
        self.repo.create.assert_not_called()

    def test_datastore_failure_is_swallowed(self):
        self.repo.create.side_effect = OperationalError("INSERT", {}, Exception("down"))
        service = NotificationService(self.repo)

        with self.assertLogs("notification.service", level="ERROR"):
            result = service.notify_match_request(self.access, "u-2", "Ada", "r-1")

        self.assertIsNone(result)

    def test_access_failure_is_swallowed(self):
        service = NotificationService(self.repo)
        user_access = AccessContext.for_user("u-1")

        with self.assertLogs("notification.service", level="ERROR"):
            result = service.notify_match_request(user_access, "u-2", "Ada", "r-1")

        self.assertIsNone(result)
        self.repo.create.assert_not_called()

    def test_mark_read_lookup_failure_is_datastore_error(self):
        self.repo.get_for_user.side_effect = OperationalError("SELECT", {}, Exception("down"))
        service = NotificationService(self.repo)

        with self.assertRaises(DataStoreError):
            service.mark_read(AccessContext.for_user("u-1"), "n-1")
        self.repo.mark_read.assert_not_called()

    def test_mark_read_write_failure_is_datastore_error(self):
        self.repo.mark_read.side_effect = OperationalError("UPDATE", {}, Exception("down"))
        service = NotificationService(self.repo)

        with self.assertRaises(DataStoreError):
            service.mark_read(AccessContext.for_user("u-1"), "n-1")

    def test_mark_all_read_failure_is_datastore_error(self):
        self.repo.mark_all_read.side_effect = OperationalError("UPDATE", {}, Exception("down"))
        service = NotificationService(self.repo)

        with self.assertRaises(DataStoreError):
            service.mark_all_read(AccessContext.for_user("u-1"))

    def test_confirmed_notifies_both_parties(self):
        service = NotificationService(self.repo)

        created = service.notify_match_confirmed(self.access, "u-1", None, "u-2", "Bob", "c-1")

        self.assertEqual(len(created), 2)
        messages = {c.kwargs["user_id"]: c.kwargs["message"] for c in self.repo.create.call_args_list}
        self.assertEqual(messages["u-1"], "You are now connected with Bob!")
        self.assertEqual(messages["u-2"], "You are now connected with your match!")


class TestNotificationInbox(unittest.TestCase):

    def setUp(self):
        self.session = make_session_factory()()
        self.alice = add_user(self.session, "Alice")
        self.bob = add_user(self.session, "Bob")
        self.service = NotificationService(
            NotificationRepository(self.session),
            NotificationConfig(default_page_size=2, max_page_size=3)
        )
        service_access = AccessContext.for_user(self.bob.id).as_service()
        for name in ("Bob", "Carol", "Dan", "Eve"):
            self.service.notify_match_request(service_access, self.alice.id, name, uuid.uuid4())
        self.as_alice = AccessContext.for_user(self.alice.id)

    def tearDown(self):
        self.session.close()

    def test_pagination(self):
        first = self.service.list_notifications(self.as_alice)
        self.assertEqual((first.page, first.limit, first.total, first.unread_count), (1, 2, 4, 4))
        self.assertEqual(len(first.items), 2)
        self.assertTrue(first.has_more)

        second = self.service.list_notifications(self.as_alice, page=2)
        self.assertEqual(len(second.items), 2)
        self.assertFalse(second.has_more)
        self.assertFalse({n.id for n in first.items} & {n.id for n in second.items})

    def test_limit_is_clamped(self):
        page = self.service.list_notifications(self.as_alice, page=0, limit=500)
        self.assertEqual(page.page, 1)
        self.assertEqual(page.limit, 3)
        self.assertEqual(len(page.items), 3)

    def test_mark_read(self):
        notification = self.service.list_notifications(self.as_alice).items[0]

        updated = self.service.mark_read(self.as_alice, notification.id)

        self.assertTrue(updated.is_read)
        self.assertEqual(self.service.list_notifications(self.as_alice).unread_count, 3)
        unread = self.service.list_notifications(self.as_alice, limit=3, unread_only=True)
        self.assertEqual(unread.total, 3)

    def test_mark_read_of_foreign_notification_is_not_found(self):
        notification = self.service.list_notifications(self.as_alice).items[0]

        with self.assertRaises(NotificationNotFoundError):
            self.service.mark_read(AccessContext.for_user(self.bob.id), notification.id)

    def test_mark_all_read(self):
        self.assertEqual(self.service.mark_all_read(self.as_alice), 4)
        self.session.expire_all()
        self.assertEqual(self.service.list_notifications(self.as_alice).unread_count, 0)
        self.assertEqual(self.service.mark_all_read(self.as_alice), 0)

    def test_inbox_requires_user(self):
        with self.assertRaises(PermissionDeniedError):
            self.service.list_notifications(AccessContext.system())


if __name__ == '__main__':
    unittest.main()
