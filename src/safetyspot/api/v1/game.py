"""Daily quiz and gacha endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db, transaction
from ...core.errors import ServiceError
from ...models import QuizQuestion
from ...schemas import (
    AnswerRequest,
    AnswerResult,
    ApiResponse,
    DailyQuestion,
    ErrorResponse,
    GachaRequest,
    GachaResult,
    QuizOptions,
    QuizQuestionView,
)
from ...services import game_service
from ..deps import http_error
from .admin import badge_read

router = APIRouter(prefix="/game", tags=["game"])


def question_view(question: QuizQuestion) -> QuizQuestionView:
    return QuizQuestionView(
        question_id=question.question_id,
        text=question.question_text,
        image=question.image_url,
        options=QuizOptions(a=question.option_a, b=question.option_b),
    )


@router.get(
    "/daily-question",
    response_model=ApiResponse[DailyQuestion],
    summary="Today's quiz question, unless already played",
    responses={404: {"model": ErrorResponse, "description": "No active questions"}},
)
def get_daily_question(
    line_user_id: str = Query(..., alias="lineUserId"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    try:
        played, question = game_service.daily_question(db, line_user_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
    if played:
        return ApiResponse(data=DailyQuestion(played=True))
    return ApiResponse(data=DailyQuestion(played=False, question=question_view(question)))


@router.post(
    "/submit-answer",
    response_model=ApiResponse[AnswerResult],
    summary="Answer today's question",
    responses={
        400: {"model": ErrorResponse, "description": "Already played today"},
        404: {"model": ErrorResponse, "description": "User or question not found"},
    },
)
@router.post("/submit-answer-v2", response_model=ApiResponse[AnswerResult], include_in_schema=False)
def submit_answer(payload: AnswerRequest, db: Session = Depends(get_db)) -> ApiResponse:
    """Grade the answer and pay coins and score.

    Every seventh consecutive day adds a streak bonus.

    Example request body::

        {"lineUserId": "U4af4980629", "questionId": 3, "selectedOption": "B"}
    """

    try:
        with transaction(db):
            result = game_service.submit_answer(
                db,
                line_user_id=payload.line_user_id,
                question_id=payload.question_id,
                selected_option=payload.selected_option,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(
        data=AnswerResult(
            is_correct=result.is_correct,
            correct_option=result.correct_option,
            earned_coins=result.earned_coins,
            earned_score=result.earned_score,
            current_streak=result.current_streak,
            new_coin_balance=result.new_coin_balance,
            new_total_score=result.new_total_score,
        )
    )


@router.post(
    "/gacha-pull",
    response_model=ApiResponse[GachaResult],
    summary=f"Spend {game_service.GACHA_COST} coins on a badge draw",
    responses={
        400: {"model": ErrorResponse, "description": "Not enough coins"},
        404: {"model": ErrorResponse, "description": "User not found or empty badge pool"},
    },
)
def gacha_pull(payload: GachaRequest, db: Session = Depends(get_db)) -> ApiResponse:
    try:
        with transaction(db):
            result = game_service.gacha_pull(db, line_user_id=payload.line_user_id)
            data = GachaResult(
                badge=badge_read(result.badge),
                is_new=result.is_new,
                remaining_coins=result.remaining_coins,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=data)
