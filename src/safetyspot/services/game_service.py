"""Daily hazard quiz, answer streaks, coins and the badge gacha.

A user answers at most one quiz question per UTC day. Every answer pays
coins and score, correct answers more. Coins buy gacha pulls, which draw a
collectible badge. Score-threshold badges are never drawn; they stay tied
to the score sync.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..models import Badge, GameHistory, NotificationType, QuizQuestion, User, UserBadge, UserStreak
from ..utils.datetime import utcnow
from . import badge_service, notification_service, user_service

logger = logging.getLogger(__name__)

OPTIONS = ("A", "B")

CORRECT_COINS = 50
WRONG_COINS = 10
WRONG_SCORE = 2
DEFAULT_SCORE_REWARD = 10

STREAK_BONUS_EVERY = 7
STREAK_BONUS_COINS = 100

GACHA_COST = 100
# cumulative percent thresholds, rarest first; anything above is "C"
RARITY_ROLLS = (("UR", 1), ("SR", 6), ("R", 26))
COMMON = "C"

NO_QUESTIONS = "No quiz questions are available."
ALREADY_PLAYED = "You have already played today's quiz."
INVALID_OPTION = "Selected option must be A or B."
NOT_ENOUGH_COINS = f"Not enough coins. A pull costs {GACHA_COST} coins."
EMPTY_GACHA = "No badges are available in the gacha."


@dataclass
class QuizResult:
    is_correct: bool
    correct_option: str
    earned_coins: int
    earned_score: int
    current_streak: int
    new_coin_balance: int
    new_total_score: int


@dataclass
class GachaResult:
    badge: Badge
    is_new: bool
    remaining_coins: int


def _ensure_user(session: Session, line_user_id: str) -> User:
    user = session.get(User, line_user_id)
    if user is None:
        raise NotFoundError(f"User {line_user_id} not found")
    return user


def _ensure_question(session: Session, question_id: int) -> QuizQuestion:
    question = session.get(QuizQuestion, question_id)
    if question is None:
        raise NotFoundError(f"Question {question_id} not found")
    return question


def _validate_option(option: str) -> str:
    if option not in OPTIONS:
        raise ValidationError(INVALID_OPTION)
    return option


def has_played(session: Session, line_user_id: str, today: date) -> bool:
    stmt = (
        select(GameHistory.history_id)
        .where(GameHistory.line_user_id == line_user_id, GameHistory.played_on == today)
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none() is not None


def daily_question(
    session: Session, line_user_id: str, *, today: Optional[date] = None
) -> tuple[bool, Optional[QuizQuestion]]:
    """Return ``(played, question)``: a random active question unless already played today."""

    today = today or utcnow().date()
    if has_played(session, line_user_id, today):
        return True, None

    stmt = select(QuizQuestion).where(QuizQuestion.is_active.is_(True)).order_by(func.random()).limit(1)
    question = session.execute(stmt).scalar_one_or_none()
    if question is None:
        raise NotFoundError(NO_QUESTIONS)
    return False, question


def next_streak(current: int, last_played: Optional[date], today: date) -> int:
    """Streak after playing on ``today``.

    Consecutive days extend it, a replay on the same day keeps it and any
    gap restarts it at 1.
    """

    if last_played is None:
        return 1
    gap = (today - last_played).days
    if gap == 0:
        return max(current, 1)
    if gap == 1:
        return current + 1
    return 1


def streak_bonus(streak: int) -> int:
    if streak > 0 and streak % STREAK_BONUS_EVERY == 0:
        return STREAK_BONUS_COINS
    return 0


def _advance_streak(session: Session, line_user_id: str, today: date) -> int:
    streak = session.get(UserStreak, line_user_id)
    if streak is None:
        streak = UserStreak(line_user_id=line_user_id, current_streak=0, longest_streak=0)
        session.add(streak)

    streak.current_streak = next_streak(streak.current_streak or 0, streak.last_played_date, today)
    streak.longest_streak = max(streak.longest_streak or 0, streak.current_streak)
    streak.last_played_date = today
    return streak.current_streak


def _add_coins(session: Session, line_user_id: str, coins: int) -> None:
    session.execute(
        update(User)
        .where(User.line_user_id == line_user_id)
        .values(coin_balance=User.coin_balance + coins)
    )


def _balances(session: Session, line_user_id: str) -> tuple[int, int]:
    row = session.execute(
        select(User.coin_balance, User.total_score).where(User.line_user_id == line_user_id)
    ).one()
    return row.coin_balance, row.total_score


def submit_answer(
    session: Session,
    *,
    line_user_id: str,
    question_id: int,
    selected_option: str,
    today: Optional[date] = None,
) -> QuizResult:
    """Grade the day's answer and pay coins, score and any streak bonus.

    History, streak, balances, badge sync and the ``game_quiz``
    notification are written in the caller's transaction.
    """

    today = today or utcnow().date()
    selected_option = _validate_option(selected_option)
    user = _ensure_user(session, line_user_id)
    question = _ensure_question(session, question_id)

    if has_played(session, user.line_user_id, today):
        raise ConflictError(ALREADY_PLAYED)

    is_correct = selected_option == question.correct_option
    earned_score = question.score_reward if is_correct else WRONG_SCORE
    current_streak = _advance_streak(session, user.line_user_id, today)
    earned_coins = (CORRECT_COINS if is_correct else WRONG_COINS) + streak_bonus(current_streak)

    session.add(
        GameHistory(
            line_user_id=user.line_user_id,
            question_id=question.question_id,
            is_correct=is_correct,
            earned_coins=earned_coins,
            earned_score=earned_score,
            played_on=today,
        )
    )
    try:
        session.flush()
    except IntegrityError as exc:
        raise ConflictError(ALREADY_PLAYED) from exc

    _add_coins(session, user.line_user_id, earned_coins)
    user_service.add_points(session, user.line_user_id, earned_score)
    badge_service.sync_score_badges(session, user.line_user_id)

    if is_correct:
        message = f"Quiz complete! You earned {earned_coins} coins from the daily question."
    else:
        message = f"Thanks for playing! You earned {earned_coins} consolation coins."
    notification_service.notify(
        session,
        recipient_id=user.line_user_id,
        message=message,
        type_=NotificationType.GAME_QUIZ,
        related_item_id=str(question.question_id),
        triggering_user_id=user.line_user_id,
    )

    coin_balance, total_score = _balances(session, user.line_user_id)
    logger.info(
        "quiz %s answered by %s: correct=%s +%s coins +%s score streak=%s",
        question.question_id,
        user.line_user_id,
        is_correct,
        earned_coins,
        earned_score,
        current_streak,
    )
    return QuizResult(
        is_correct=is_correct,
        correct_option=question.correct_option,
        earned_coins=earned_coins,
        earned_score=earned_score,
        current_streak=current_streak,
        new_coin_balance=coin_balance,
        new_total_score=total_score,
    )


def roll_rarity(roll: float) -> str:
    """Map a roll in ``[0, 100)`` to a rarity tier."""

    for rarity, ceiling in RARITY_ROLLS:
        if roll < ceiling:
            return rarity
    return COMMON


def _draw_badge(session: Session, rng: random.Random) -> Badge:
    pool = session.execute(
        select(Badge).where(Badge.min_score.is_(None)).order_by(Badge.badge_name.asc())
    ).scalars().all()
    if not pool:
        raise NotFoundError(EMPTY_GACHA)

    rarity = roll_rarity(rng.random() * 100)
    tier = [badge for badge in pool if (badge.rarity or COMMON) == rarity]
    return rng.choice(tier or pool)


def gacha_pull(session: Session, *, line_user_id: str, rng: Optional[random.Random] = None) -> GachaResult:
    """Spend coins on one draw from the collectible badge pool."""

    rng = rng or random.Random()
    user = _ensure_user(session, line_user_id)
    badge = _draw_badge(session, rng)

    result = session.execute(
        update(User)
        .where(User.line_user_id == user.line_user_id, User.coin_balance >= GACHA_COST)
        .values(coin_balance=User.coin_balance - GACHA_COST)
        .execution_options(synchronize_session=False)
    )
    if not result.rowcount:
        raise ConflictError(NOT_ENOUGH_COINS)

    held = session.execute(
        select(UserBadge.user_badge_id).where(
            UserBadge.line_user_id == user.line_user_id,
            UserBadge.badge_id == badge.badge_id,
        )
    ).scalar_one_or_none()
    is_new = held is None
    if is_new:
        session.add(UserBadge(line_user_id=user.line_user_id, badge_id=badge.badge_id))

    notification_service.notify(
        session,
        recipient_id=user.line_user_id,
        message=f"You pulled a {badge.rarity or COMMON} card from the gacha: {badge.badge_name}",
        type_=NotificationType.GAME_GACHA,
        related_item_id=str(badge.badge_id),
        triggering_user_id=user.line_user_id,
    )

    remaining, _ = _balances(session, user.line_user_id)
    logger.info("gacha pull by %s: %s (new=%s), %s coins left", user.line_user_id, badge.badge_id, is_new, remaining)
    return GachaResult(badge=badge, is_new=is_new, remaining_coins=remaining)


# Question administration


def list_questions(session: Session) -> Sequence[QuizQuestion]:
    return session.execute(select(QuizQuestion).order_by(QuizQuestion.question_id.desc())).scalars().all()


def save_question(
    session: Session,
    *,
    question_text: str,
    option_a: str,
    option_b: str,
    correct_option: str,
    image_url: Optional[str] = None,
    score_reward: Optional[int] = None,
    question_id: Optional[int] = None,
) -> QuizQuestion:
    """Create a question, or overwrite one when ``question_id`` is given."""

    correct_option = _validate_option(correct_option)
    if question_id is None:
        question = QuizQuestion(is_active=True)
        session.add(question)
    else:
        question = _ensure_question(session, question_id)

    question.question_text = question_text
    question.option_a = option_a
    question.option_b = option_b
    question.correct_option = correct_option
    question.image_url = image_url
    question.score_reward = DEFAULT_SCORE_REWARD if score_reward is None else score_reward
    session.flush()
    return question


def delete_question(session: Session, *, question_id: int) -> None:
    result = session.execute(delete(QuizQuestion).where(QuizQuestion.question_id == question_id))
    if not result.rowcount:
        raise NotFoundError(f"Question {question_id} not found")


def toggle_question(session: Session, *, question_id: int) -> bool:
    """Flip ``is_active`` and return the new value."""

    question = _ensure_question(session, question_id)
    question.is_active = not question.is_active
    session.flush()
    return question.is_active
