"""Primary API router definition."""

from fastapi import APIRouter

from . import activities, admin, game, leaderboard, notifications, submissions, users

api_router = APIRouter()

api_router.include_router(users.router)
api_router.include_router(activities.router)
api_router.include_router(submissions.router)
api_router.include_router(leaderboard.router)
api_router.include_router(notifications.router)
api_router.include_router(game.router)
api_router.include_router(admin.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Liveness check endpoint."""
    return {"status": "ok"}
