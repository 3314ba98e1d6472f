"""Full reporting round trip: submit, similarity rejection, approval, likes."""

from __future__ import annotations


def test_report_approve_and_like_cycle(client, seed):
    seed.admin("Uadmin")
    seed.user("U", full_name="Reporter")
    seed.user("V", full_name="Viewer")

    created = client.post(
        "/api/v1/admin/activities",
        json={"title": "Activity A", "requesterId": "Uadmin"},
    )
    activity_id = created.json()["data"]["activityId"]

    first = client.post(
        "/api/v1/submissions",
        json={"activityId": activity_id, "lineUserId": "U", "description": "broken railing near exit"},
    )
    assert first.status_code == 200
    assert first.json()["data"]["status"] == "pending"
    submission_id = first.json()["data"]["submissionId"]

    second = client.post(
        "/api/v1/submissions",
        json={"activityId": activity_id, "lineUserId": "U", "description": "broken railing near the exit"},
    )
    assert second.status_code == 400
    assert second.json()["status"] == "error"

    approved = client.post(
        "/api/v1/admin/submissions/approve",
        json={"submissionId": submission_id, "score": 5, "requesterId": "Uadmin"},
    )
    assert approved.status_code == 200
    assert seed.score_of("U") == 5
    feed = client.get("/api/v1/submissions", params={"activityId": activity_id}).json()["data"]
    assert feed[0]["status"] == "approved"
    assert feed[0]["points"] == 5

    like = {"submissionId": submission_id, "lineUserId": "V"}
    assert client.post("/api/v1/submissions/like", json=like).json()["data"]["status"] == "liked"
    assert seed.score_of("U") == 6

    assert client.post("/api/v1/submissions/like", json=like).json()["data"]["status"] == "unliked"
    assert client.post("/api/v1/submissions/like", json=like).json()["data"]["status"] == "liked"
    assert seed.score_of("U") == 6

    board = client.get("/api/v1/leaderboard").json()["data"]
    assert board[0]["lineUserId"] == "U"
    assert board[0]["totalScore"] == 6
