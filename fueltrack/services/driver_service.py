from sqlalchemy import or_
from sqlalchemy.orm import Session

from fueltrack.models.driver import Driver, DriverStatus
from fueltrack.schemas.driver import DriverCreateRequest, DriverUpdateRequest
from fueltrack.utils.audit import log_action
from fueltrack.utils.clock import isoformat
from fueltrack.utils.exceptions import NotFoundException, DuplicateEntryException


def _serialize(d: Driver) -> dict:
    return {
        "id":              d.id,
        "name":            d.name,
        "nationalId":      d.nationalId,
        "phone":           d.phone,
        "email":           d.email,
        "licenseNumber":   d.licenseNumber,
        "licenseExpiry":   d.licenseExpiry.isoformat() if d.licenseExpiry else None,
        "status":          d.status.value,
        "yearsExperience": d.yearsExperience,
        "createdAt":       isoformat(d.createdAt),
        "updatedAt":       isoformat(d.updatedAt),
    }


class DriverService:

    def list_drivers(
        self, db: Session, page: int, limit: int,
        search: str | None, status: DriverStatus | None,
    ) -> tuple[list[dict], int]:
        q = db.query(Driver)
        if search:
            kw = f"%{search}%"
            q = q.filter(or_(
                Driver.name.ilike(kw),
                Driver.licenseNumber.ilike(kw),
                Driver.nationalId.ilike(kw),
            ))
        if status is not None:
            q = q.filter(Driver.status == status)
        total = q.count()
        items = q.order_by(Driver.name.asc()).offset((page - 1) * limit).limit(limit).all()
        return [_serialize(d) for d in items], total

    def get_driver(self, db: Session, driver_id: int) -> dict:
        d = db.query(Driver).filter(Driver.id == driver_id).first()
        if not d: raise NotFoundException("Driver")
        return _serialize(d)

    def create_driver(self, db: Session, data: DriverCreateRequest, actor_id: int) -> dict:
        if db.query(Driver).filter(Driver.licenseNumber == data.licenseNumber).first():
            raise DuplicateEntryException("License number already registered", field="licenseNumber")

        d = Driver(**data.model_dump())
        db.add(d)
        db.flush()
        log_action(db, actor_id, "CREATE", "Driver", d.id,
                   f"Registered driver {d.name} ({d.licenseNumber})")
        db.commit()
        db.refresh(d)
        return _serialize(d)

    def update_driver(self, db: Session, driver_id: int, data: DriverUpdateRequest, actor_id: int) -> dict:
        d = db.query(Driver).filter(Driver.id == driver_id).first()
        if not d: raise NotFoundException("Driver")

        changes = data.model_dump(exclude_unset=True)
        license_number = changes.get("licenseNumber")
        if license_number and license_number != d.licenseNumber:
            if db.query(Driver).filter(Driver.licenseNumber == license_number).first():
                raise DuplicateEntryException("License number already registered", field="licenseNumber")

        # Trips keep the driver name they were created with
        for field, value in changes.items():
            setattr(d, field, value)

        log_action(db, actor_id, "UPDATE", "Driver", d.id, f"Updated driver {d.name}")
        db.commit()
        db.refresh(d)
        return _serialize(d)

    def delete_driver(self, db: Session, driver_id: int, actor_id: int) -> None:
        d = db.query(Driver).filter(Driver.id == driver_id).first()
        if not d: raise NotFoundException("Driver")
        log_action(db, actor_id, "DELETE", "Driver", d.id, f"Removed driver {d.name}")
        db.delete(d)
        db.commit()


driver_service = DriverService()
