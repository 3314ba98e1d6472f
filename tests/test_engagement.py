"""Likes, comments and the once-per-actor engagement award."""

from __future__ import annotations

from unittest.mock import patch
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from safetyspot.core.database import transaction
from safetyspot.core.errors import NotFoundError, ValidationError
from safetyspot.models import Comment, EngagementAward, EngagementKind, Like, Notification, NotificationType
from safetyspot.services import engagement_service


def _like(client, submission_id, line_user_id):
    return client.post(
        "/api/v1/submissions/like",
        json={"submissionId": str(submission_id), "lineUserId": line_user_id},
    )


def _comment(client, submission_id, line_user_id, text):
    return client.post(
        "/api/v1/submissions/comment",
        json={"submissionId": str(submission_id), "lineUserId": line_user_id, "commentText": text},
    )


@pytest.fixture
def report(seed):
    activity_id = seed.activity()
    seed.user("Uowner", full_name="Owner")
    seed.user("Ufan", full_name="Fan")
    return seed.submission(activity_id, "Uowner", "trip hazard at dock 4")


class TestLikes:
    def test_like_then_unlike(self, client, seed, report):
        liked = _like(client, report, "Ufan")
        assert liked.status_code == 200
        assert liked.json()["data"] == {"status": "liked", "liked": True, "newLikeCount": 1}

        unliked = _like(client, report, "Ufan")
        assert unliked.json()["data"] == {"status": "unliked", "liked": False, "newLikeCount": 0}

    def test_like_cycles_award_the_owner_once(self, client, seed, report):
        for _ in range(3):
            _like(client, report, "Ufan")  # like
            _like(client, report, "Ufan")  # unlike
        _like(client, report, "Ufan")

        assert seed.score_of("Uowner") == 1

    def test_like_notifies_owner_once(self, client, seed, report, session_factory):
        _like(client, report, "Ufan")
        _like(client, report, "Ufan")
        _like(client, report, "Ufan")

        with session_factory() as session:
            notifications = session.execute(select(Notification)).scalars().all()
        assert len(notifications) == 1
        assert notifications[0].type is NotificationType.LIKE
        assert notifications[0].recipient_user_id == "Uowner"
        assert notifications[0].triggering_user_id == "Ufan"
        assert notifications[0].related_item_id == str(report)
        assert notifications[0].message == "Fan liked your report."

    def test_self_like_pays_nothing(self, client, seed, report):
        resp = _like(client, report, "Uowner")

        assert resp.json()["data"]["newLikeCount"] == 1
        assert seed.score_of("Uowner") == 0

    def test_each_liker_pays_once(self, client, seed, report):
        seed.user("Uother")

        _like(client, report, "Ufan")
        _like(client, report, "Uother")

        assert seed.score_of("Uowner") == 2

    def test_unknown_submission(self, client, seed, report):
        resp = _like(client, uuid4(), "Ufan")

        assert resp.status_code == 404
        assert resp.json()["status"] == "error"


class TestComments:
    def test_comment_payload(self, client, report):
        resp = _comment(client, report, "Ufan", "  thanks for flagging  ")

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["commentText"] == "thanks for flagging"
        assert data["commenter"] == {"lineUserId": "Ufan", "fullName": "Fan", "pictureUrl": None}
        assert data["commentId"]

    def test_only_first_comment_pays(self, client, seed, report):
        _comment(client, report, "Ufan", "first")
        assert seed.score_of("Uowner") == 1

        _comment(client, report, "Ufan", "second")
        _comment(client, report, "Ufan", "third")
        assert seed.score_of("Uowner") == 1

    def test_like_and_comment_pay_separately(self, client, seed, report):
        _like(client, report, "Ufan")
        _comment(client, report, "Ufan", "nice")

        assert seed.score_of("Uowner") == 2

    def test_owner_comment_pays_nothing(self, client, seed, report):
        _comment(client, report, "Uowner", "update: cone placed")

        assert seed.score_of("Uowner") == 0

    def test_empty_comment_is_rejected(self, client, seed, report):
        resp = _comment(client, report, "Ufan", "   ")

        assert resp.status_code == 400
        assert resp.json() == {"status": "error", "message": engagement_service.EMPTY_COMMENT}
        assert seed.score_of("Uowner") == 0


class TestServiceLayer:
    def test_award_rows_are_unique_per_kind_and_actor(self, db_session, report):
        with transaction(db_session):
            engagement_service.toggle_like(db_session, submission_id=report, line_user_id="Ufan")
            engagement_service.toggle_like(db_session, submission_id=report, line_user_id="Ufan")
            engagement_service.toggle_like(db_session, submission_id=report, line_user_id="Ufan")
            engagement_service.add_comment(
                db_session, submission_id=report, line_user_id="Ufan", comment_text="one"
            )
            engagement_service.add_comment(
                db_session, submission_id=report, line_user_id="Ufan", comment_text="two"
            )

        count = db_session.execute(select(func.count(EngagementAward.award_id))).scalar_one()
        assert count == 2

    def test_missing_user_is_not_found(self, db_session, report):
        with pytest.raises(NotFoundError):
            engagement_service.toggle_like(db_session, submission_id=report, line_user_id="Ughost")

    def test_blank_comment_fails_before_lookups(self, db_session):
        with pytest.raises(ValidationError):
            engagement_service.add_comment(db_session, submission_id=uuid4(), line_user_id="Ughost", comment_text="")


def _table_counts(session_factory):
    with session_factory() as session:
        return {
            model.__tablename__: session.execute(select(func.count()).select_from(model)).scalar_one()
            for model in (Like, Comment, EngagementAward, Notification)
        }


class TestAtomicity:
    def test_failed_like_leaves_nothing_behind(self, client, seed, session_factory, report):
        with patch(
            "safetyspot.services.notification_service.notify",
            side_effect=RuntimeError("notification store down"),
        ):
            resp = _like(client, report, "Ufan")

        assert resp.status_code == 500
        assert resp.json() == {"status": "error", "message": "Internal server error"}
        assert _table_counts(session_factory) == {"likes": 0, "comments": 0, "engagement_awards": 0, "notifications": 0}
        assert seed.score_of("Uowner") == 0

        retry = _like(client, report, "Ufan")
        assert retry.json()["data"]["newLikeCount"] == 1
        assert seed.score_of("Uowner") == 1

    def test_failed_comment_leaves_nothing_behind(self, client, seed, session_factory, report):
        with patch(
            "safetyspot.services.notification_service.notify",
            side_effect=RuntimeError("notification store down"),
        ):
            resp = _comment(client, report, "Ufan", "first words")

        assert resp.status_code == 500
        assert _table_counts(session_factory) == {"likes": 0, "comments": 0, "engagement_awards": 0, "notifications": 0}
        assert seed.score_of("Uowner") == 0

        # the rolled-back comment does not count, so the retry is still the first
        _comment(client, report, "Ufan", "first words")
        assert seed.score_of("Uowner") == 1

    def test_award_key_collision_is_a_conflict(self, client, seed, session_factory, report):
        with session_factory() as session:
            session.add(
                EngagementAward(
                    kind=EngagementKind.LIKE,
                    submission_id=report,
                    actor_id="Ufan",
                    recipient_id="Uowner",
                    points=engagement_service.ENGAGEMENT_POINTS,
                )
            )
            session.commit()

        # a concurrent request paid between this request's check and its insert
        with patch("safetyspot.services.engagement_service._already_awarded", return_value=False):
            resp = _like(client, report, "Ufan")

        assert resp.status_code == 400
        assert resp.json() == {"status": "error", "message": engagement_service.CONCURRENT_UPDATE}
        assert seed.score_of("Uowner") == 0
        counts = _table_counts(session_factory)
        assert (counts["likes"], counts["engagement_awards"], counts["notifications"]) == (0, 1, 0)
