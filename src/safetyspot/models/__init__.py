"""SQLAlchemy models for Safety Spot."""

from .activity import Activity, ActivityStatus
from .badge import Badge, UserBadge
from .engagement import Comment, EngagementAward, EngagementKind, Like
from .game import GameHistory, QuizQuestion, UserStreak
from .notification import Notification, NotificationType
from .score_adjustment import ScoreAdjustment
from .submission import Submission, SubmissionStatus
from .user import Admin, User

__all__ = [
    "Activity",
    "ActivityStatus",
    "Admin",
    "Badge",
    "Comment",
    "EngagementAward",
    "EngagementKind",
    "GameHistory",
    "Like",
    "Notification",
    "NotificationType",
    "QuizQuestion",
    "ScoreAdjustment",
    "Submission",
    "SubmissionStatus",
    "User",
    "UserBadge",
    "UserStreak",
]
