"""Submission creation and the per-activity feed over HTTP."""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

from safetyspot.models import ActivityStatus, SubmissionStatus
from safetyspot.services.similarity_filter import EMPTY_DESCRIPTION, TOO_SIMILAR
from safetyspot.services.submission_service import ACTIVITY_CLOSED, ALREADY_SUBMITTED
from safetyspot.utils.datetime import utcnow


def _submit(client, activity_id, line_user_id, description, image_url=None):
    return client.post(
        "/api/v1/submissions",
        json={
            "activityId": str(activity_id),
            "lineUserId": line_user_id,
            "description": description,
            "imageUrl": image_url,
        },
    )


class TestCreateSubmission:
    def test_creates_pending_submission(self, client, seed):
        activity_id = seed.activity()
        seed.user("U1")

        resp = _submit(client, activity_id, "U1", "  broken railing near exit  ", "https://cdn.example/r.jpg")

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "success"
        assert body["data"]["status"] == "pending"
        submission_id = body["data"]["submissionId"]

        feed = client.get("/api/v1/submissions", params={"activityId": str(activity_id)}).json()["data"]
        assert [entry["submissionId"] for entry in feed] == [submission_id]
        assert feed[0]["description"] == "broken railing near exit"
        assert feed[0]["imageUrl"] == "https://cdn.example/r.jpg"
        assert feed[0]["points"] is None

    def test_empty_description_is_rejected(self, client, seed):
        activity_id = seed.activity()
        seed.user("U1")

        resp = _submit(client, activity_id, "U1", "   ")

        assert resp.status_code == 400
        assert resp.json() == {"status": "error", "message": EMPTY_DESCRIPTION}

    def test_similar_description_is_rejected(self, client, seed):
        activity_id = seed.activity()
        seed.user("U1")
        seed.user("U2")
        seed.submission(activity_id, "U1", "slippery floor by the canteen")

        resp = _submit(client, activity_id, "U2", "slippery floor by canteen")

        assert resp.status_code == 400
        assert resp.json()["message"] == TOO_SIMILAR

    def test_second_active_submission_is_rejected(self, client, seed):
        activity_id = seed.activity()
        seed.user("U1")

        assert _submit(client, activity_id, "U1", "loose cable across walkway").status_code == 200
        resp = _submit(client, activity_id, "U1", "forklift parked in the fire lane")

        assert resp.status_code == 400
        assert resp.json()["message"] == ALREADY_SUBMITTED

    def test_approved_submission_still_blocks(self, client, seed):
        activity_id = seed.activity()
        seed.user("U1")
        seed.submission(activity_id, "U1", "loose cable across walkway", status=SubmissionStatus.APPROVED)

        resp = _submit(client, activity_id, "U1", "forklift parked in the fire lane")

        assert resp.status_code == 400
        assert resp.json()["message"] == ALREADY_SUBMITTED

    def test_rejected_submission_allows_a_new_one(self, client, seed):
        activity_id = seed.activity()
        seed.user("U1")
        seed.submission(activity_id, "U1", "loose cable across walkway", status=SubmissionStatus.REJECTED)

        resp = _submit(client, activity_id, "U1", "forklift parked in the fire lane")

        assert resp.status_code == 200

    def test_inactive_activity_refuses_reports(self, client, seed):
        activity_id = seed.activity(status=ActivityStatus.INACTIVE)
        seed.user("U1")

        resp = _submit(client, activity_id, "U1", "missing guard on grinder")

        assert resp.status_code == 400
        assert resp.json()["message"] == ACTIVITY_CLOSED

    def test_unknown_activity_is_not_found(self, client, seed):
        seed.user("U1")

        resp = _submit(client, uuid4(), "U1", "missing guard on grinder")

        assert resp.status_code == 404
        assert resp.json()["status"] == "error"

    def test_unknown_user_is_not_found(self, client, seed):
        activity_id = seed.activity()

        resp = _submit(client, activity_id, "Unobody", "missing guard on grinder")

        assert resp.status_code == 404

    def test_malformed_body_is_a_400(self, client):
        resp = client.post("/api/v1/submissions", json={"lineUserId": "U1"})

        assert resp.status_code == 400
        body = resp.json()
        assert body["status"] == "error"
        assert body["message"].startswith("Invalid request")


class TestFeed:
    def test_feed_is_newest_first_and_hides_rejected(self, client, seed):
        activity_id = seed.activity()
        for user in ("U1", "U2", "U3"):
            seed.user(user)
        now = utcnow()
        older = seed.submission(activity_id, "U1", "first report text", created_at=now - timedelta(minutes=10))
        newer = seed.submission(
            activity_id,
            "U2",
            "second report text here",
            status=SubmissionStatus.APPROVED,
            created_at=now - timedelta(minutes=5),
        )
        seed.submission(
            activity_id,
            "U3",
            "rejected report text",
            status=SubmissionStatus.REJECTED,
            created_at=now,
        )

        feed = client.get("/api/v1/submissions", params={"activityId": str(activity_id)}).json()["data"]

        assert [entry["submissionId"] for entry in feed] == [str(newer), str(older)]
        assert feed[0]["status"] == "approved"
        assert feed[0]["submitter"]["lineUserId"] == "U2"

    def test_feed_carries_likes_and_comments_for_viewer(self, client, seed):
        activity_id = seed.activity()
        for user in ("U1", "U2", "U3"):
            seed.user(user)
        submission_id = seed.submission(activity_id, "U1", "exposed nail on pallet")

        client.post("/api/v1/submissions/like", json={"submissionId": str(submission_id), "lineUserId": "U2"})
        client.post("/api/v1/submissions/like", json={"submissionId": str(submission_id), "lineUserId": "U3"})
        client.post(
            "/api/v1/submissions/comment",
            json={"submissionId": str(submission_id), "lineUserId": "U2", "commentText": "good catch"},
        )
        client.post(
            "/api/v1/submissions/comment",
            json={"submissionId": str(submission_id), "lineUserId": "U3", "commentText": "fixed now"},
        )

        as_u2 = client.get(
            "/api/v1/submissions", params={"activityId": str(activity_id), "lineUserId": "U2"}
        ).json()["data"][0]
        as_u1 = client.get(
            "/api/v1/submissions", params={"activityId": str(activity_id), "lineUserId": "U1"}
        ).json()["data"][0]
        anonymous = client.get("/api/v1/submissions", params={"activityId": str(activity_id)}).json()["data"][0]

        assert as_u2["likes"] == 2
        assert as_u2["didLike"] is True
        assert as_u1["didLike"] is False
        assert anonymous["didLike"] is False
        assert [c["commentText"] for c in as_u2["comments"]] == ["good catch", "fixed now"]
        assert as_u2["comments"][0]["commenter"]["lineUserId"] == "U2"

    def test_empty_activity_has_empty_feed(self, client, seed):
        activity_id = seed.activity()

        resp = client.get("/api/v1/submissions", params={"activityId": str(activity_id)})

        assert resp.status_code == 200
        assert resp.json() == {"status": "success", "data": []}
