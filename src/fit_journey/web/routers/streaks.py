"""Workout streak routes."""

from fastapi import APIRouter, Request

from ...services.streaks import StreakService
from ..deps import get_clock, get_db

router = APIRouter(prefix="/users/{user_id}", tags=["streaks"])


def _service(request: Request) -> StreakService:
    return StreakService(get_db(request), clock=get_clock(request))


@router.get("/streak")
async def get_streak(request: Request, user_id: str):
    """Current streak and workout stats."""
    service = _service(request)
    streak = await service.get_streak(user_id)
    stats = await service.get_streak_stats(user_id, report=streak)
    return {"streak": streak.to_dict(), "stats": stats.to_dict()}


@router.post("/workouts", status_code=201)
async def complete_workout(request: Request, user_id: str):
    """Record a completed workout and return the updated streak."""
    streak = await _service(request).on_workout_completed(user_id)
    return {"streak": streak.to_dict()}
