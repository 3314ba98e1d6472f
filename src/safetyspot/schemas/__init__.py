"""Public schema exports."""

from .activity import ActivityCreate, ActivityRead, ActivityToggle, ActivityToggled, ActivityUpdate
from .badge import (
	BadgeAssignment,
	BadgeAssignmentResult,
	BadgeRead,
	BadgeSyncSummary,
	BadgeWrite,
	UserBadgeRead,
)
from .common import ApiResponse, CamelModel, ErrorResponse, Message
from .game import (
	AnswerRequest,
	AnswerResult,
	DailyQuestion,
	GachaRequest,
	GachaResult,
	QuestionRead,
	QuestionToggle,
	QuestionToggled,
	QuestionWrite,
	QuizOptions,
	QuizQuestionView,
)
from .leaderboard import (
	ChartData,
	DashboardStats,
	LeaderboardEntry,
	OverallStats,
	ScoreBonusRequest,
	ScoreBonusResult,
	UserDetails,
)
from .notification import MarkedRead, MarkReadRequest, NotificationRead, UnreadCount
from .submission import (
	ApproveRequest,
	CommentCreate,
	CommentRead,
	LikeRequest,
	LikeResult,
	PendingSubmissionRead,
	RejectRequest,
	SubmissionCreate,
	SubmissionCreated,
	SubmissionRead,
)
from .user import ProfileRead, RefreshProfileRequest, RegisterRequest, Updated, UserRead, UserSummary

__all__ = [
	"ActivityCreate",
	"ActivityRead",
	"ActivityToggle",
	"ActivityToggled",
	"ActivityUpdate",
	"AnswerRequest",
	"AnswerResult",
	"ApiResponse",
	"ApproveRequest",
	"BadgeAssignment",
	"BadgeAssignmentResult",
	"BadgeRead",
	"BadgeSyncSummary",
	"BadgeWrite",
	"CamelModel",
	"ChartData",
	"CommentCreate",
	"CommentRead",
	"DailyQuestion",
	"DashboardStats",
	"ErrorResponse",
	"GachaRequest",
	"GachaResult",
	"LeaderboardEntry",
	"LikeRequest",
	"LikeResult",
	"MarkReadRequest",
	"MarkedRead",
	"Message",
	"NotificationRead",
	"OverallStats",
	"PendingSubmissionRead",
	"ProfileRead",
	"QuestionRead",
	"QuestionToggle",
	"QuestionToggled",
	"QuestionWrite",
	"QuizOptions",
	"QuizQuestionView",
	"RefreshProfileRequest",
	"RegisterRequest",
	"RejectRequest",
	"ScoreBonusRequest",
	"ScoreBonusResult",
	"SubmissionCreate",
	"SubmissionCreated",
	"SubmissionRead",
	"Updated",
	"UserBadgeRead",
	"UserDetails",
	"UserRead",
	"UserSummary",
]
