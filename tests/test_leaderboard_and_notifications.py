"""Leaderboard pages and the notification inbox."""

from __future__ import annotations

from safetyspot.services.leaderboard_service import PAGE_SIZE


class TestLeaderboard:
    def test_ranked_by_score_then_name(self, client, seed):
        seed.user("U1", full_name="Mali", score=3)
        seed.user("U2", full_name="Kanya", score=9)
        seed.user("U3", full_name="Arun", score=3)

        data = client.get("/api/v1/leaderboard").json()["data"]

        assert [(e["rank"], e["fullName"], e["totalScore"]) for e in data] == [
            (1, "Kanya", 9),
            (2, "Arun", 3),
            (3, "Mali", 3),
        ]

    def test_second_page_continues_ranks(self, client, seed):
        for index in range(PAGE_SIZE + 2):
            seed.user(f"U{index:02d}", full_name=f"Name {index:02d}", score=100 - index)

        first = client.get("/api/v1/leaderboard", params={"page": 1}).json()["data"]
        second = client.get("/api/v1/leaderboard", params={"page": 2}).json()["data"]

        assert len(first) == PAGE_SIZE
        assert [e["rank"] for e in second] == [PAGE_SIZE + 1, PAGE_SIZE + 2]
        assert second[0]["lineUserId"] == f"U{PAGE_SIZE:02d}"

    def test_page_must_be_positive(self, client):
        assert client.get("/api/v1/leaderboard", params={"page": 0}).status_code == 400


class TestNotifications:
    def _like(self, client, submission_id, line_user_id):
        client.post(
            "/api/v1/submissions/like",
            json={"submissionId": str(submission_id), "lineUserId": line_user_id},
        )

    def test_inbox_flow(self, client, seed):
        activity_id = seed.activity()
        seed.user("Uowner")
        seed.user("Ua", full_name="Aom")
        seed.user("Ub", full_name="Bee")
        submission_id = seed.submission(activity_id, "Uowner", "pallet stacked too high")
        self._like(client, submission_id, "Ua")
        self._like(client, submission_id, "Ub")

        unread = client.get("/api/v1/notifications/unread-count", params={"requesterId": "Uowner"})
        assert unread.json()["data"] == {"unreadCount": 2}

        inbox = client.get("/api/v1/notifications", params={"requesterId": "Uowner"}).json()["data"]
        assert {n["message"] for n in inbox} == {"Aom liked your report.", "Bee liked your report."}
        assert all(n["type"] == "like" and n["isRead"] is False for n in inbox)
        assert all(n["relatedItemId"] == str(submission_id) for n in inbox)

        marked = client.post("/api/v1/notifications/mark-read", json={"requesterId": "Uowner"})
        assert marked.json()["data"] == {"updated": 2}

        unread = client.get("/api/v1/notifications/unread-count", params={"requesterId": "Uowner"})
        assert unread.json()["data"] == {"unreadCount": 0}

    def test_other_inboxes_untouched(self, client, seed):
        activity_id = seed.activity()
        seed.user("Uowner")
        seed.user("Ua")
        submission_id = seed.submission(activity_id, "Uowner", "pallet stacked too high")
        self._like(client, submission_id, "Ua")

        resp = client.get("/api/v1/notifications", params={"requesterId": "Ua"})

        assert resp.json()["data"] == []

    def test_requester_is_required(self, client):
        assert client.get("/api/v1/notifications").status_code == 400
