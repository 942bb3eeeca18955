#!/usr/bin/env python3
"""Repository tests against an in-memory SQLite database."""

import unittest

import pytest
from sqlalchemy.exc import IntegrityError

from core.access import AccessContext
from core.compatibility.models import RubricScoreEntry, ChoiceMetadata, SourceMetadata, EmptyMetadata
from core.exceptions import PermissionDeniedError
from database.models import make_pair_key
from database.repositories import (
    UserRepository,
    RubricScoreRepository,
    MatchRequestRepository,
    ConnectionRepository,
    NotificationRepository,
)
from tests.fixtures.db import make_session_factory, add_user, add_scores

pytestmark = pytest.mark.db


class RepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.session = make_session_factory()()
        self.alice = add_user(self.session, "Alice")
        self.bob = add_user(self.session, "Bob")
        self.carol = add_user(self.session, "Carol")

    def tearDown(self):
        self.session.close()


class TestPairKey(unittest.TestCase):

    def test_order_independent(self):
        self.assertEqual(make_pair_key("b", "a"), "a:b")
        self.assertEqual(make_pair_key("a", "b"), make_pair_key("b", "a"))


class TestUserRepository(RepositoryTestCase):

    def test_lookup(self):
        repo = UserRepository(self.session)
        self.assertEqual(repo.get_by_id(str(self.alice.id)).full_name, "Alice")
        self.assertEqual(repo.get_by_email("bob@example.com").id, self.bob.id)
        self.assertIsNone(repo.get_by_email("nobody@example.com"))

    def test_get_many_keys_by_string_id(self):
        users = UserRepository(self.session).get_many([self.alice.id, str(self.bob.id)])
        self.assertEqual(set(users), {str(self.alice.id), str(self.bob.id)})

    def test_list_users_excludes_target(self):
        users = UserRepository(self.session).list_users(exclude_user_id=self.alice.id)
        self.assertEqual({u.full_name for u in users}, {"Bob", "Carol"})


class TestRubricScoreRepository(RepositoryTestCase):

    def setUp(self):
        super().setUp()
        self.repo = RubricScoreRepository(self.session)
        self.access = AccessContext.for_user(self.alice.id)
        add_scores(self.session, self.alice, "technical_skills", {"python": 4, "go": 2})
        add_scores(self.session, self.alice, "personal_attributes", {"learning_style": 4},
                   choices={"learning_style": "visual"})

    def test_read_parses_metadata_variants(self):
        entries = {e.subcategory: e for e in self.repo.get_scores(self.alice.id, self.access)}

        self.assertEqual(set(entries), {"python", "go", "learning_style"})
        self.assertIsInstance(entries["python"].metadata, SourceMetadata)
        self.assertIsInstance(entries["learning_style"].metadata, ChoiceMetadata)
        self.assertEqual(entries["learning_style"].choice_value, "visual")

    def test_replace_only_touches_category(self):
        replacement = [
            RubricScoreEntry(category="technical_skills", subcategory="rust", score=5,
                             metadata=SourceMetadata(source="github", count=3)),
        ]
        self.repo.replace_scores(self.alice.id, "technical_skills", replacement, self.access)

        entries = self.repo.get_scores(self.alice.id, self.access)
        technical = [e for e in entries if e.category.value == "technical_skills"]
        personal = [e for e in entries if e.category.value == "personal_attributes"]

        self.assertEqual([(e.subcategory, e.score) for e in technical], [("rust", 5)])
        self.assertEqual(technical[0].metadata.count, 3)
        self.assertEqual(len(personal), 1)

    def test_replace_with_nothing_clears_category(self):
        self.repo.replace_scores(self.alice.id, "technical_skills", [], self.access)
        categories = {e.category.value for e in self.repo.get_scores(self.alice.id, self.access)}
        self.assertEqual(categories, {"personal_attributes"})

    def test_other_users_scores_are_denied(self):
        as_bob = AccessContext.for_user(self.bob.id)
        with self.assertRaises(PermissionDeniedError):
            self.repo.get_scores(self.alice.id, as_bob)
        with self.assertRaises(PermissionDeniedError):
            self.repo.replace_scores(self.alice.id, "technical_skills", [], as_bob)

    def test_service_scope_reads_any_user(self):
        entries = self.repo.get_scores(self.alice.id, AccessContext.for_user(self.bob.id).as_service())
        self.assertEqual(len(entries), 3)

    def test_numeric_subcategory_gets_empty_metadata(self):
        add_scores(self.session, self.bob, "personal_attributes", {"collaboration_preference": 3})
        entries = self.repo.get_scores(self.bob.id, AccessContext.for_user(self.bob.id))
        self.assertIsInstance(entries[0].metadata, EmptyMetadata)


class TestMatchRequestRepository(RepositoryTestCase):

    def setUp(self):
        super().setUp()
        self.repo = MatchRequestRepository(self.session)
        self.request = self.repo.create(
            sender_id=self.alice.id, receiver_id=self.bob.id,
            compatibility_score=70, match_reason="Shared stack"
        )

    def test_get_for_pair_either_direction(self):
        self.assertEqual(self.repo.get_for_pair(self.alice.id, self.bob.id).id, self.request.id)
        self.assertEqual(self.repo.get_for_pair(str(self.bob.id), str(self.alice.id)).id, self.request.id)
        self.assertIsNone(self.repo.get_for_pair(self.alice.id, self.carol.id))

    def test_second_request_for_pair_violates_unique_key(self):
        with self.assertRaises(IntegrityError):
            with self.repo.savepoint():
                self.repo.create(sender_id=self.bob.id, receiver_id=self.alice.id,
                                 compatibility_score=50, match_reason=None)
        self.assertEqual(len(self.repo.list_for_user(self.alice.id)), 1)

    def test_incoming_and_outgoing(self):
        self.repo.create(sender_id=self.carol.id, receiver_id=self.alice.id,
                         compatibility_score=40, match_reason=None)

        self.assertEqual([r.id for r in self.repo.list_incoming(self.bob.id)], [self.request.id])
        self.assertEqual(len(self.repo.list_incoming(self.alice.id)), 1)
        self.assertEqual([r.id for r in self.repo.list_outgoing(self.alice.id)], [self.request.id])
        self.assertEqual(len(self.repo.list_for_user(self.alice.id)), 2)

        self.repo.update_status(self.request, "rejected")
        self.assertEqual(self.repo.list_incoming(self.bob.id), [])
        self.assertEqual(len(self.repo.list_outgoing(self.alice.id, status="rejected")), 1)

    def test_counterpart_ids(self):
        self.repo.create(sender_id=self.carol.id, receiver_id=self.alice.id,
                         compatibility_score=40, match_reason=None)
        self.assertEqual(
            self.repo.get_counterpart_ids(self.alice.id),
            {str(self.bob.id), str(self.carol.id)}
        )
        self.assertEqual(self.repo.get_counterpart_ids(self.bob.id), {str(self.alice.id)})


class TestConnectionRepository(RepositoryTestCase):

    def test_connections_are_symmetric(self):
        request = MatchRequestRepository(self.session).create(
            sender_id=self.alice.id, receiver_id=self.bob.id,
            compatibility_score=70, match_reason=None
        )
        repo = ConnectionRepository(self.session)
        connection = repo.create(self.bob.id, self.alice.id, 70, match_request_id=request.id)

        self.assertEqual(repo.get_by_request_id(request.id).id, connection.id)
        self.assertEqual(repo.get_connected_user_ids(self.alice.id), {str(self.bob.id)})
        self.assertEqual(repo.get_connected_user_ids(self.bob.id), {str(self.alice.id)})
        self.assertEqual(repo.get_connected_user_ids(self.carol.id), set())
        self.assertEqual(connection.other_user_id(self.bob.id), self.alice.id)

    def test_one_connection_per_request(self):
        request = MatchRequestRepository(self.session).create(
            sender_id=self.alice.id, receiver_id=self.bob.id,
            compatibility_score=70, match_reason=None
        )
        repo = ConnectionRepository(self.session)
        repo.create(self.bob.id, self.alice.id, 70, match_request_id=request.id)

        with self.assertRaises(IntegrityError):
            with repo.savepoint():
                repo.create(self.bob.id, self.alice.id, 70, match_request_id=request.id)


class TestNotificationRepository(RepositoryTestCase):

    def setUp(self):
        super().setUp()
        self.repo = NotificationRepository(self.session)
        for i in range(3):
            self.repo.create(self.alice.id, "match_request", "New Match Request", f"message {i}")
        self.repo.create(self.bob.id, "match_request", "New Match Request", "for bob")

    def test_counts(self):
        self.assertEqual(self.repo.count_for_user(self.alice.id), 3)
        self.assertEqual(self.repo.count_unread(self.alice.id), 3)
        self.assertEqual(len(self.repo.list_for_user(self.alice.id, limit=2)), 2)
        self.assertEqual(len(self.repo.list_for_user(self.alice.id, limit=2, offset=2)), 1)

    def test_get_for_user_checks_owner(self):
        notification = self.repo.list_for_user(self.alice.id)[0]
        self.assertIsNotNone(self.repo.get_for_user(notification.id, self.alice.id))
        self.assertIsNone(self.repo.get_for_user(notification.id, self.bob.id))

    def test_mark_read(self):
        notification = self.repo.list_for_user(self.alice.id)[0]
        self.repo.mark_read(notification)

        self.assertEqual(self.repo.count_unread(self.alice.id), 2)
        self.assertEqual(len(self.repo.list_for_user(self.alice.id, unread_only=True)), 2)

    def test_mark_all_read_only_affects_owner(self):
        self.assertEqual(self.repo.mark_all_read(self.alice.id), 3)
        self.session.expire_all()

        self.assertEqual(self.repo.count_unread(self.alice.id), 0)
        self.assertEqual(self.repo.count_unread(self.bob.id), 1)
        self.assertEqual(self.repo.mark_all_read(self.alice.id), 0)


if __name__ == '__main__':
    unittest.main()
