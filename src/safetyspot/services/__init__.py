"""Service layer exports."""

from . import (
	activity_service,
	admin_service,
	badge_service,
	engagement_service,
	game_service,
	leaderboard_service,
	moderation_service,
	notification_service,
	similarity_filter,
	submission_service,
	user_service,
)

__all__ = [
	"activity_service",
	"admin_service",
	"badge_service",
	"engagement_service",
	"game_service",
	"leaderboard_service",
	"moderation_service",
	"notification_service",
	"similarity_filter",
	"submission_service",
	"user_service",
]
