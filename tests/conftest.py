"""Shared fixtures: a fresh in-memory SQLite database per test, a seeding
helper and a TestClient wired to that database.
"""

from __future__ import annotations

import os

# Settings are cached on first import; keep the app away from PostgreSQL
# and the scheduler for the whole test run.
os.environ.setdefault("SAFETYSPOT_DATABASE_URL", "sqlite://")
os.environ.setdefault("SAFETYSPOT_AUTO_CREATE_TABLES", "false")
os.environ.setdefault("SAFETYSPOT_BADGE_SYNC_ENABLED", "false")

from datetime import datetime  # noqa: E402
from typing import Optional  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import Engine, create_engine, select  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from safetyspot.core.database import get_db, init_db  # noqa: E402
from safetyspot.models import (  # noqa: E402
    Activity,
    ActivityStatus,
    Admin,
    Badge,
    QuizQuestion,
    Submission,
    SubmissionStatus,
    User,
)


@pytest.fixture
def db_engine() -> Engine:
    """Fresh in-memory database with every table.

    StaticPool keeps one connection so the TestClient thread sees the same
    database as the test body.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(bind=db_engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory: sessionmaker):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


class Seeder:
    """Commits fixture rows through short-lived sessions and returns their keys."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._factory = session_factory

    def _add(self, row):
        with self._factory() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return row

    def user(
        self, line_user_id: str, *, full_name: Optional[str] = None, score: int = 0, coins: int = 0
    ) -> str:
        self._add(
            User(
                line_user_id=line_user_id,
                display_name=line_user_id.lower(),
                full_name=full_name or f"User {line_user_id}",
                employee_id=f"EMP-{line_user_id}",
                total_score=score,
                coin_balance=coins,
            )
        )
        return line_user_id

    def admin(self, line_user_id: str = "Uadmin") -> str:
        self.user(line_user_id, full_name="Admin")
        self._add(Admin(line_user_id=line_user_id))
        return line_user_id

    def activity(self, title: str = "Spot the hazard", *, status: ActivityStatus = ActivityStatus.ACTIVE) -> UUID:
        return self._add(Activity(title=title, description=f"{title} description", status=status)).activity_id

    def submission(
        self,
        activity_id: UUID,
        line_user_id: str,
        description: str,
        *,
        status: SubmissionStatus = SubmissionStatus.PENDING,
        created_at: Optional[datetime] = None,
    ) -> UUID:
        row = Submission(
            activity_id=activity_id,
            line_user_id=line_user_id,
            description=description,
            status=status,
        )
        if created_at is not None:
            row.created_at = created_at
        return self._add(row).submission_id

    def badge(self, name: str, *, min_score: Optional[int] = None, rarity: Optional[str] = None) -> UUID:
        row = Badge(badge_name=name, description=f"{name} badge", min_score=min_score, rarity=rarity)
        return self._add(row).badge_id

    def question(self, text: str = "Which is safe?", *, correct: str = "A", reward: int = 10, active: bool = True) -> int:
        row = QuizQuestion(
            question_text=text,
            option_a="Guard rail in place",
            option_b="Standing on a chair",
            correct_option=correct,
            score_reward=reward,
            is_active=active,
        )
        return self._add(row).question_id

    def score_of(self, line_user_id: str) -> int:
        with self._factory() as session:
            return session.execute(select(User.total_score).where(User.line_user_id == line_user_id)).scalar_one()

    def coins_of(self, line_user_id: str) -> int:
        with self._factory() as session:
            return session.execute(select(User.coin_balance).where(User.line_user_id == line_user_id)).scalar_one()

    def status_of(self, submission_id: UUID) -> Optional[SubmissionStatus]:
        with self._factory() as session:
            return session.execute(
                select(Submission.status).where(Submission.submission_id == submission_id)
            ).scalar_one_or_none()


@pytest.fixture
def seed(session_factory: sessionmaker) -> Seeder:
    return Seeder(session_factory)


@pytest.fixture
def client(session_factory: sessionmaker) -> TestClient:
    """TestClient bound to the per-test database, with raise_server_exceptions=False."""
    from safetyspot.main import create_app

    app = create_app()

    def override_get_db():
        session: Session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app, raise_server_exceptions=False)
