"""Admin console endpoints.

Every route resolves ``requesterId`` through :func:`require_admin` before any
work is done.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db, transaction
from ...core.errors import ServiceError
from ...models import Badge, QuizQuestion, Submission
from ...schemas import (
    ActivityCreate,
    ActivityRead,
    ActivityToggle,
    ActivityToggled,
    ActivityUpdate,
    ApiResponse,
    ApproveRequest,
    BadgeAssignment,
    BadgeAssignmentResult,
    BadgeRead,
    BadgeSyncSummary,
    BadgeWrite,
    ChartData,
    DashboardStats,
    ErrorResponse,
    Message,
    OverallStats,
    PendingSubmissionRead,
    QuestionRead,
    QuestionToggle,
    QuestionToggled,
    QuestionWrite,
    RejectRequest,
    ScoreBonusRequest,
    ScoreBonusResult,
    UserDetails,
    UserRead,
)
from ...services import (
    activity_service,
    badge_service,
    game_service,
    leaderboard_service,
    moderation_service,
    submission_service,
    user_service,
)
from ..deps import http_error, require_admin
from .activities import activity_read
from .submissions import user_summary

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing requesterId"},
        403: {"model": ErrorResponse, "description": "Requester is not an admin"},
    },
)


def badge_read(badge: Badge) -> BadgeRead:
    return BadgeRead(
        badge_id=badge.badge_id,
        badge_name=badge.badge_name,
        description=badge.description,
        image_url=badge.image_url,
        min_score=badge.min_score,
        rarity=badge.rarity,
    )


def pending_read(submission: Submission) -> PendingSubmissionRead:
    return PendingSubmissionRead(
        submission_id=submission.submission_id,
        activity_id=submission.activity_id,
        activity_title=submission.activity.title,
        description=submission.description,
        image_url=submission.image_url,
        created_at=submission.created_at,
        submitter=user_summary(submission.submitter),
    )


# Statistics


@router.get("/stats", response_model=ApiResponse[OverallStats], summary="Overall report statistics")
def get_stats(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    return ApiResponse(data=OverallStats(**leaderboard_service.overall_stats(db)))


@router.get("/dashboard-stats", response_model=ApiResponse[DashboardStats], summary="Dashboard counters")
def get_dashboard_stats(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    return ApiResponse(data=DashboardStats(**leaderboard_service.dashboard_stats(db)))


@router.get("/chart-data", response_model=ApiResponse[ChartData], summary="Reports per day, last 7 days")
def get_chart_data(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    return ApiResponse(data=ChartData(**leaderboard_service.chart_data(db)))


# Moderation


@router.get(
    "/submissions/pending",
    response_model=ApiResponse[List[PendingSubmissionRead]],
    summary="Moderation queue, oldest first",
)
def list_pending(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    return ApiResponse(data=[pending_read(submission) for submission in submission_service.list_pending(db)])


@router.post(
    "/submissions/approve",
    response_model=ApiResponse[Message],
    summary="Approve a pending report",
    responses={
        200: {
            "description": "Report approved and points paid",
            "content": {
                "application/json": {
                    "example": {"status": "success", "data": {"message": "Submission approved."}}
                }
            },
        },
        400: {"model": ErrorResponse, "description": "Submission is not pending"},
        404: {"model": ErrorResponse, "description": "Submission not found"},
    },
)
def approve_submission(
    payload: ApproveRequest,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    """Approve and pay the submitter.

    Status change, score increment, notification and badge sync commit
    together or not at all.

    Example request body::

        {
            "submissionId": "5f0c1f7e-3a0e-4c55-9d8e-1d4f1a2b3c4d",
            "score": 10,
            "requesterId": "Uadmin01"
        }
    """

    try:
        with transaction(db):
            moderation_service.approve(db, submission_id=payload.submission_id, score=payload.score, admin_id=admin_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=Message(message="Submission approved."))


@router.post(
    "/submissions/reject",
    response_model=ApiResponse[Message],
    summary="Reject a pending report",
    responses={
        400: {"model": ErrorResponse, "description": "Submission is not pending"},
        404: {"model": ErrorResponse, "description": "Submission not found"},
    },
)
def reject_submission(
    payload: RejectRequest,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            moderation_service.reject(db, submission_id=payload.submission_id, admin_id=admin_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=Message(message="Submission rejected."))


@router.delete(
    "/submissions/{submission_id}",
    response_model=ApiResponse[Message],
    summary="Delete a report",
    responses={404: {"model": ErrorResponse, "description": "Submission not found"}},
)
def delete_submission(
    submission_id: UUID,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            submission_service.delete_submission(db, submission_id=submission_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=Message(message="Submission deleted."))


# Activities


@router.get("/activities", response_model=ApiResponse[List[ActivityRead]], summary="All activities")
def list_activities(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    return ApiResponse(data=[activity_read(activity) for activity in activity_service.list_all(db)])


@router.post("/activities", response_model=ApiResponse[ActivityRead], summary="Create an activity")
def create_activity(
    payload: ActivityCreate,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    with transaction(db):
        activity = activity_service.create_activity(
            db,
            title=payload.title,
            description=payload.description,
            image_url=payload.image_url,
        )
        data = activity_read(activity)
    return ApiResponse(data=data)


@router.put(
    "/activities",
    response_model=ApiResponse[ActivityRead],
    summary="Edit an activity",
    responses={404: {"model": ErrorResponse, "description": "Activity not found"}},
)
def update_activity(
    payload: ActivityUpdate,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            activity = activity_service.update_activity(
                db,
                activity_id=payload.activity_id,
                title=payload.title,
                description=payload.description,
                image_url=payload.image_url,
            )
            data = activity_read(activity)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=data)


@router.post(
    "/activities/toggle",
    response_model=ApiResponse[ActivityToggled],
    summary="Flip an activity between active and inactive",
    responses={404: {"model": ErrorResponse, "description": "Activity not found"}},
)
def toggle_activity(
    payload: ActivityToggle,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            status = activity_service.toggle_status(db, activity_id=payload.activity_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=ActivityToggled(new_status=status.value))


@router.delete(
    "/activities/{activity_id}",
    response_model=ApiResponse[Message],
    summary="Delete an activity and its reports",
    responses={404: {"model": ErrorResponse, "description": "Activity not found"}},
)
def delete_activity(
    activity_id: UUID,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            removed = moderation_service.delete_activity(db, activity_id=activity_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=Message(message=f"Activity deleted with {removed} submissions."))


# Badges


@router.get("/badges", response_model=ApiResponse[List[BadgeRead]], summary="Badge catalog")
def list_badges(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    return ApiResponse(data=[badge_read(badge) for badge in badge_service.list_catalog(db)])


@router.post("/badges", response_model=ApiResponse[BadgeRead], summary="Create a badge")
def create_badge(
    payload: BadgeWrite,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    with transaction(db):
        badge = badge_service.create_badge(
            db,
            badge_name=payload.badge_name,
            description=payload.description,
            image_url=payload.image_url,
            min_score=payload.min_score,
            rarity=payload.rarity,
        )
        data = badge_read(badge)
    return ApiResponse(data=data)


@router.put(
    "/badges/{badge_id}",
    response_model=ApiResponse[BadgeRead],
    summary="Edit a badge",
    responses={404: {"model": ErrorResponse, "description": "Badge not found"}},
)
def update_badge(
    badge_id: UUID,
    payload: BadgeWrite,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            badge = badge_service.update_badge(
                db,
                badge_id=badge_id,
                badge_name=payload.badge_name,
                description=payload.description,
                image_url=payload.image_url,
                min_score=payload.min_score,
                rarity=payload.rarity,
            )
            data = badge_read(badge)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=data)


@router.delete(
    "/badges/{badge_id}",
    response_model=ApiResponse[Message],
    summary="Delete a badge and every holding of it",
    responses={404: {"model": ErrorResponse, "description": "Badge not found"}},
)
def delete_badge(
    badge_id: UUID,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            badge_service.delete_badge(db, badge_id=badge_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=Message(message="Badge deleted."))


@router.post(
    "/award-badge",
    response_model=ApiResponse[BadgeAssignmentResult],
    summary="Grant a badge to a user",
    responses={404: {"model": ErrorResponse, "description": "User or badge not found"}},
)
def award_badge(
    payload: BadgeAssignment,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            changed = badge_service.award_badge(
                db,
                line_user_id=payload.line_user_id,
                badge_id=payload.badge_id,
                requester_id=admin_id,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=BadgeAssignmentResult(changed=changed))


@router.post(
    "/revoke-badge",
    response_model=ApiResponse[BadgeAssignmentResult],
    summary="Remove a badge from a user",
    responses={404: {"model": ErrorResponse, "description": "Badge not found"}},
)
def revoke_badge(
    payload: BadgeAssignment,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            changed = badge_service.revoke_badge(
                db,
                line_user_id=payload.line_user_id,
                badge_id=payload.badge_id,
                requester_id=admin_id,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=BadgeAssignmentResult(changed=changed))


@router.post(
    "/recalculate-badges",
    response_model=ApiResponse[BadgeSyncSummary],
    summary="Resync score-threshold badges for every user",
)
def recalculate_badges(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    with transaction(db):
        summary = badge_service.sync_all_users(db)
    return ApiResponse(
        data=BadgeSyncSummary(
            user_count=summary["users_processed"],
            granted=summary["granted"],
            removed=summary["removed"],
        )
    )


# Quiz questions


def question_read(question: QuizQuestion) -> QuestionRead:
    return QuestionRead.model_validate(question)


@router.get("/questions", response_model=ApiResponse[List[QuestionRead]], summary="Quiz questions, newest first")
def list_questions(_: str = Depends(require_admin), db: Session = Depends(get_db)) -> ApiResponse:
    return ApiResponse(data=[question_read(question) for question in game_service.list_questions(db)])


@router.post(
    "/questions",
    response_model=ApiResponse[QuestionRead],
    summary="Create a quiz question, or edit one when questionId is given",
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
)
def save_question(
    payload: QuestionWrite,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    """Example request body::

        {
            "questionText": "Which ladder setup is safe?",
            "optionA": "Footed, three points of contact",
            "optionB": "Leaning on a stacked pallet",
            "correctOption": "A",
            "scoreReward": 10,
            "requesterId": "Uadmin01"
        }
    """

    try:
        with transaction(db):
            question = game_service.save_question(
                db,
                question_id=payload.question_id,
                question_text=payload.question_text,
                option_a=payload.option_a,
                option_b=payload.option_b,
                correct_option=payload.correct_option,
                image_url=payload.image_url,
                score_reward=payload.score_reward,
            )
            data = question_read(question)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=data)


@router.post(
    "/questions/toggle",
    response_model=ApiResponse[QuestionToggled],
    summary="Enable or disable a quiz question",
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
)
def toggle_question(
    payload: QuestionToggle,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            is_active = game_service.toggle_question(db, question_id=payload.question_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=QuestionToggled(is_active=is_active))


@router.delete(
    "/questions/{question_id}",
    response_model=ApiResponse[Message],
    summary="Delete a quiz question",
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
)
def delete_question(
    question_id: int,
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            game_service.delete_question(db, question_id=question_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=Message(message="Question deleted."))


# Users


@router.get("/users", response_model=ApiResponse[List[UserRead]], summary="Search users")
def list_users(
    search: Optional[str] = Query(None, description="Matches full name or employee id"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="'name' or 'score' (default)"),
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    users = user_service.list_users(db, search=search, sort_by=sort_by)
    return ApiResponse(data=[UserRead.model_validate(user) for user in users])


@router.get(
    "/user-details",
    response_model=ApiResponse[UserDetails],
    summary="One user with earned badges",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
def get_user_details(
    line_user_id: str = Query(..., alias="lineUserId"),
    _: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        user, badges = user_service.user_details(db, line_user_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(
        data=UserDetails(user=UserRead.model_validate(user), badges=[badge_read(badge) for badge in badges])
    )


@router.post(
    "/users/update-score",
    response_model=ApiResponse[ScoreBonusResult],
    summary="Grant bonus points",
    responses={
        400: {"model": ErrorResponse, "description": "deltaScore is not positive"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
def update_score(
    payload: ScoreBonusRequest,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        with transaction(db):
            new_total = user_service.grant_bonus(
                db,
                line_user_id=payload.line_user_id,
                delta_score=payload.delta_score,
                requester_id=admin_id,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(
        data=ScoreBonusResult(
            line_user_id=payload.line_user_id,
            delta_score=payload.delta_score,
            new_total_score=new_total,
        )
    )
