from sqlalchemy.orm import Session

from fueltrack.models.system_setting import SystemSetting
from fueltrack.models.user import User
from fueltrack.schemas.system_setting import SystemSettingUpdate
from fueltrack.utils.audit import log_action
from fueltrack.utils.clock import isoformat
from fueltrack.utils.exceptions import NotFoundException


# Default keys
DEFAULT_SETTINGS = [
    {"key": "auto_refresh_seconds", "value": "10",     "description": "Dashboard polling interval when the live channel is down"},
    {"key": "default_fuel_type",    "value": "diesel", "description": "Fuel type preselected in the new-trip form"},
    {"key": "max_login_attempts",   "value": "5",      "description": "Failed logins shown before the login form is locked"},
]


def _serialize(s: SystemSetting) -> dict:
    return {
        "key":         s.key,
        "value":       s.value,
        "description": s.description,
        "updatedAt":   isoformat(s.updatedAt),
    }


class SystemSettingService:

    def list_settings(self, db: Session) -> list[dict]:
        return [_serialize(s) for s in db.query(SystemSetting).order_by(SystemSetting.key).all()]

    def get_setting(self, db: Session, key: str) -> dict:
        s = db.query(SystemSetting).filter(SystemSetting.key == key).first()
        if not s:
            raise NotFoundException(f"Setting '{key}'")
        return _serialize(s)

    def upsert_setting(self, db: Session, key: str, data: SystemSettingUpdate, current_user: User) -> dict:
        s = db.query(SystemSetting).filter(SystemSetting.key == key).first()
        if s:
            s.value = data.value
            if data.description is not None:
                s.description = data.description
        else:
            s = SystemSetting(key=key, value=data.value, description=data.description)
            db.add(s)

        db.flush()
        log_action(db, current_user.id, "UPDATE", "SystemSetting", s.id,
                   f"Admin set '{key}' to {data.value}")
        db.commit()
        db.refresh(s)
        return _serialize(s)

    def seed_defaults(self, db: Session) -> None:
        """Insert default settings if not already present."""
        for d in DEFAULT_SETTINGS:
            existing = db.query(SystemSetting).filter(SystemSetting.key == d["key"]).first()
            if not existing:
                db.add(SystemSetting(**d))
        db.commit()


system_setting_service = SystemSettingService()
