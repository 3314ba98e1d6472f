"""Pydantic schemas for the daily quiz and the gacha."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .badge import BadgeRead
from .common import CamelModel

Option = Literal["A", "B"]


class QuizOptions(CamelModel):
    a: str = Field(..., alias="A")
    b: str = Field(..., alias="B")


class QuizQuestionView(CamelModel):
    """A question as shown to a player; the answer is withheld."""

    question_id: int
    text: str
    image: Optional[str] = None
    options: QuizOptions


class DailyQuestion(CamelModel):
    played: bool
    question: Optional[QuizQuestionView] = None


class AnswerRequest(CamelModel):
    line_user_id: str = Field(..., min_length=1)
    question_id: int
    selected_option: Option


class AnswerResult(CamelModel):
    is_correct: bool
    correct_option: str
    earned_coins: int
    earned_score: int
    current_streak: int
    new_coin_balance: int
    new_total_score: int


class GachaRequest(CamelModel):
    line_user_id: str = Field(..., min_length=1)


class GachaResult(CamelModel):
    badge: BadgeRead
    is_new: bool
    remaining_coins: int


class QuestionRead(CamelModel):
    question_id: int
    question_text: str
    image_url: Optional[str] = None
    option_a: str
    option_b: str
    correct_option: str
    score_reward: int
    is_active: bool
    created_at: datetime


class QuestionWrite(CamelModel):
    question_id: Optional[int] = Field(None, description="Existing question to overwrite; omit to create.")
    question_text: str = Field(..., min_length=1)
    option_a: str = Field(..., min_length=1)
    option_b: str = Field(..., min_length=1)
    correct_option: Option
    image_url: Optional[str] = None
    score_reward: Optional[int] = Field(None, ge=0)
    requester_id: Optional[str] = None


class QuestionToggle(CamelModel):
    question_id: int
    requester_id: Optional[str] = None


class QuestionToggled(CamelModel):
    is_active: bool
