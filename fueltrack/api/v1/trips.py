from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status
from sqlalchemy.orm import Session

from fueltrack.database import get_db
from fueltrack.dependencies import get_current_user, get_trip_service
from fueltrack.models.user import User
from fueltrack.schemas.trip import TripCreateRequest, TripUpdateRequest, TripFilter
from fueltrack.services.trip_query import query_trips
from fueltrack.services.trip_service import TripService

# Trip endpoints return bare payloads ({trips, stats} / Trip), which is what
# the dashboard's trip table and stat cards consume.
router = APIRouter(prefix="/trips")


# ─── GET /trips ───────────────────────────────────────────────────────────────
@router.get("", summary="List trips with dashboard stats")
def list_trips(
    filters: Annotated[TripFilter, Query()],
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_current_user),
):
    """
    Filter by `search` (driver, truck, origin, destination), `status` and
    `fuelType`; order by `sortBy`/`sortOrder`. `stats` is computed over the
    filtered list.
    """
    return query_trips(db, filters)


# ─── GET /trips/{id} ──────────────────────────────────────────────────────────
@router.get("/{trip_id}", summary="Get a single trip")
def get_trip(
    trip_id: str,
    db:      Session     = Depends(get_db),
    _:       User        = Depends(get_current_user),
    service: TripService = Depends(get_trip_service),
):
    return service.get_trip(db, trip_id)


# ─── POST /trips ──────────────────────────────────────────────────────────────
@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a trip")
def create_trip(
    body:             TripCreateRequest,
    background_tasks: BackgroundTasks,
    db:               Session     = Depends(get_db),
    current_user:     User        = Depends(get_current_user),
    service:          TripService = Depends(get_trip_service),
):
    return service.create_trip(db, body, current_user.id, background_tasks)


# ─── PUT /trips/{id} ──────────────────────────────────────────────────────────
@router.put("/{trip_id}", summary="Partially update a trip")
def update_trip(
    trip_id:          str,
    body:             TripUpdateRequest,
    background_tasks: BackgroundTasks,
    db:               Session     = Depends(get_db),
    current_user:     User        = Depends(get_current_user),
    service:          TripService = Depends(get_trip_service),
):
    return service.update_trip(db, trip_id, body, current_user.id, background_tasks)


# ─── DELETE /trips/{id} ───────────────────────────────────────────────────────
@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Cancel a trip")
def cancel_trip(
    trip_id:          str,
    background_tasks: BackgroundTasks,
    db:               Session     = Depends(get_db),
    current_user:     User        = Depends(get_current_user),
    service:          TripService = Depends(get_trip_service),
):
    """Soft cancel: the trip stays listed with status `cancelled`."""
    service.cancel_trip(db, trip_id, current_user.id, background_tasks)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
