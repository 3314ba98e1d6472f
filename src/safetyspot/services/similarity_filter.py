"""Near-duplicate guard for new report text."""

from __future__ import annotations

import logging
from uuid import UUID

from rapidfuzz.distance import Levenshtein
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, ValidationError
from ..models import Submission
from ..utils.text import normalize

logger = logging.getLogger(__name__)

RECENT_WINDOW = 20
DISTANCE_THRESHOLD = 5

EMPTY_DESCRIPTION = "Please enter a description for your report."
TOO_SIMILAR = "This report is too similar to an existing report."


def recent_descriptions(session: Session, activity_id: UUID, *, limit: int = RECENT_WINDOW) -> list[str]:
    """Latest report texts for the activity, any status, newest first."""

    stmt = (
        select(Submission.description)
        .where(Submission.activity_id == activity_id)
        .order_by(Submission.created_at.desc())
        .limit(limit)
    )
    return list(session.execute(stmt).scalars().all())


def check_duplicate(session: Session, activity_id: UUID, candidate_text: str | None) -> str:
    """Validate report text and return it trimmed.

    Only the most recent ``RECENT_WINDOW`` reports are compared, so this is
    a spam brake rather than a deduplication guarantee.
    """

    candidate = normalize(candidate_text)
    if not candidate:
        raise ValidationError(EMPTY_DESCRIPTION)

    for existing in recent_descriptions(session, activity_id):
        if Levenshtein.distance(candidate, normalize(existing)) < DISTANCE_THRESHOLD:
            logger.info("similar report rejected for activity %s", activity_id)
            raise ConflictError(TOO_SIMILAR)

    return candidate
