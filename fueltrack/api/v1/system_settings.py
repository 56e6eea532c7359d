from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fueltrack.database import get_db
from fueltrack.dependencies import get_current_user, get_admin_user
from fueltrack.models.user import User
from fueltrack.schemas.system_setting import SystemSettingUpdate
from fueltrack.schemas.common import success_response
from fueltrack.services.system_setting_service import system_setting_service

router = APIRouter(prefix="/settings")


@router.get("", summary="List system settings")
def list_settings(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_current_user),
):
    return success_response("Settings retrieved", system_setting_service.list_settings(db))


@router.get("/{key}", summary="Get a system setting")
def get_setting(
    key: str,
    db:  Session = Depends(get_db),
    _:   User    = Depends(get_current_user),
):
    return success_response("Setting retrieved", system_setting_service.get_setting(db, key))


@router.put("/{key}", summary="Create or update a system setting (Admin)")
def upsert_setting(
    key:          str,
    body:         SystemSettingUpdate,
    db:           Session = Depends(get_db),
    current_user: User    = Depends(get_admin_user),
):
    return success_response("Setting updated", system_setting_service.upsert_setting(db, key, body, current_user))
