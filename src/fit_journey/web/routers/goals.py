"""Goal routes.

Every route is scoped to the user in the path; a goal that belongs to
someone else is refused with 403.
"""

from fastapi import APIRouter, Request

from ...db.repositories import GoalRepository
from ...errors import ForbiddenError, NotFoundError
from ...models.goal import Goal
from ...services.progress import ProgressService
from ...utils.time import ensure_aware
from ..deps import get_clock, get_db
from ..schemas import GoalCreate, GoalUpdate

router = APIRouter(prefix="/users/{user_id}/goals", tags=["goals"])


async def _get_owned_goal(repo: GoalRepository, user_id: str, goal_id: int) -> Goal:
    goal = await repo.get(goal_id)
    if goal is None:
        raise NotFoundError(f"Goal {goal_id} not found")
    if goal.user_id != user_id:
        raise ForbiddenError(f"Goal {goal_id} does not belong to user {user_id}")
    return goal


@router.post("", status_code=201)
async def create_goal(request: Request, user_id: str, body: GoalCreate):
    """Create a goal. A user may only have one active goal."""
    repo = GoalRepository(get_db(request))
    goal = Goal(
        user_id=user_id,
        goal_type=body.goal_type,
        start_date=body.start_date or get_clock(request)(),
        target_date=body.target_date,
        starting_weight=body.starting_weight,
        target_weight=body.target_weight,
    )
    await repo.create(goal)
    return {"goal": goal.to_dict()}


@router.get("")
async def list_goals(request: Request, user_id: str):
    repo = GoalRepository(get_db(request))
    goals = await repo.list_by_user(user_id)
    return {"goals": [goal.to_dict() for goal in goals]}


@router.get("/active")
async def active_goal(request: Request, user_id: str):
    repo = GoalRepository(get_db(request))
    goal = await repo.get_active(user_id)
    return {"goal": goal.to_dict() if goal else None}


@router.get("/{goal_id}")
async def get_goal(request: Request, user_id: str, goal_id: int):
    goal = await _get_owned_goal(GoalRepository(get_db(request)), user_id, goal_id)
    return {"goal": goal.to_dict()}


@router.patch("/{goal_id}")
async def update_goal(request: Request, user_id: str, goal_id: int, body: GoalUpdate):
    """Change status, target date or target weight."""
    repo = GoalRepository(get_db(request))
    goal = await _get_owned_goal(repo, user_id, goal_id)

    if body.status is not None:
        goal.transition_to(body.status)
    if body.target_date is not None:
        goal.target_date = ensure_aware(body.target_date)
    if body.target_weight is not None:
        goal.target_weight = body.target_weight

    await repo.update(goal)
    return {"goal": goal.to_dict()}


@router.get("/{goal_id}/progress")
async def goal_progress(request: Request, user_id: str, goal_id: int):
    """Progress report with trend and recommendations."""
    service = ProgressService(get_db(request), clock=get_clock(request))
    progress = await service.get_goal_progress(goal_id, user_id=user_id)
    return {"progress": progress.to_dict()}
