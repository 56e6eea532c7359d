from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from fueltrack.database import get_db
from fueltrack.dependencies import get_current_user, get_admin_user
from fueltrack.models.user import User
from fueltrack.schemas.truck import TruckCreateRequest, TruckUpdateRequest
from fueltrack.schemas.common import success_response, paginated_response
from fueltrack.services.truck_service import truck_service

router = APIRouter(prefix="/trucks")


@router.get("", summary="List trucks")
def list_trucks(
    page:   int           = Query(1, ge=1),
    limit:  int           = Query(50, ge=1, le=200),
    search: Optional[str] = Query(None, description="Search by plate or model"),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_current_user),
):
    data, total = truck_service.list_trucks(db, page, limit, search)
    return paginated_response("Trucks retrieved successfully", data, total, page, limit)


@router.get("/{truck_id}", summary="Get truck by ID")
def get_truck(truck_id: int, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return success_response("Truck retrieved", truck_service.get_truck(db, truck_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Register truck (Admin)")
def create_truck(
    body: TruckCreateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    return success_response("Truck registered successfully", truck_service.create_truck(db, body, current_user.id))


@router.put("/{truck_id}", summary="Update truck (Admin)")
def update_truck(
    truck_id: int,
    body:     TruckUpdateRequest,
    db:       Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    return success_response("Truck updated successfully", truck_service.update_truck(db, truck_id, body, current_user.id))


@router.delete("/{truck_id}", summary="Remove truck (Admin)")
def delete_truck(
    truck_id: int,
    db:       Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    truck_service.delete_truck(db, truck_id, current_user.id)
    return success_response("Truck removed successfully", None)
