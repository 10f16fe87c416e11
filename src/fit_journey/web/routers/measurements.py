"""Body-weight measurement routes."""

from fastapi import APIRouter, Query, Request

from ...db.repositories import MeasurementRepository
from ...models.goal import Measurement
from ..deps import get_clock, get_db
from ..schemas import MeasurementCreate

router = APIRouter(prefix="/users/{user_id}/measurements", tags=["measurements"])


@router.post("", status_code=201)
async def log_measurement(request: Request, user_id: str, body: MeasurementCreate):
    repo = MeasurementRepository(get_db(request))
    measurement = Measurement(
        user_id=user_id,
        weight=body.weight,
        date=body.date or get_clock(request)(),
        notes=body.notes,
        goal_id=body.goal_id,
    )
    await repo.create(measurement)
    return {"measurement": measurement.to_dict()}


@router.get("")
async def list_measurements(
    request: Request,
    user_id: str,
    limit: int = Query(MeasurementRepository.DEFAULT_LIMIT, ge=1, le=365),
):
    """Most recent measurements first."""
    repo = MeasurementRepository(get_db(request))
    measurements = await repo.list_by_user(user_id, limit=limit)
    return {"measurements": [m.to_dict() for m in measurements]}
