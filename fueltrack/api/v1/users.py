from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from fueltrack.database import get_db
from fueltrack.dependencies import get_admin_user
from fueltrack.models.user import User
from fueltrack.schemas.user import UserCreateRequest, UserUpdateRequest
from fueltrack.schemas.common import success_response, paginated_response
from fueltrack.services.user_service import user_service

router = APIRouter(prefix="/users")


@router.get("", summary="List users (Admin)")
def list_users(
    page:   int           = Query(1,  ge=1),
    limit:  int           = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Search by username"),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_admin_user),
):
    data, total = user_service.list_users(db, page, limit, search)
    return paginated_response("Users retrieved successfully", data, total, page, limit)


@router.get("/{user_id}", summary="Get user by ID (Admin)")
def get_user(user_id: int, db: Session = Depends(get_db), _: User = Depends(get_admin_user)):
    return success_response("User retrieved", user_service.get_user(db, user_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create user (Admin)")
def create_user(
    body: UserCreateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    return success_response("User created successfully", user_service.create_user(db, body, current_user.id))


@router.put("/{user_id}", summary="Update user (Admin)")
def update_user(
    user_id: int,
    body:    UserUpdateRequest,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    return success_response("User updated successfully", user_service.update_user(db, user_id, body, current_user.id))


@router.delete("/{user_id}", summary="Delete user (Admin)")
def delete_user(
    user_id: int,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    user_service.delete_user(db, user_id, current_user.id)
    return success_response("User deleted successfully", None)
