from sqlalchemy.orm import Session

from fueltrack.models.truck import Truck
from fueltrack.schemas.truck import TruckCreateRequest, TruckUpdateRequest
from fueltrack.utils.audit import log_action
from fueltrack.utils.clock import isoformat
from fueltrack.utils.exceptions import NotFoundException, DuplicateEntryException


def _serialize(t: Truck) -> dict:
    return {
        "id":             t.id,
        "plate":          t.plate,
        "truckModel":     t.truckModel,
        "capacityLiters": t.capacityLiters,
        "createdAt":      isoformat(t.createdAt),
    }


class TruckService:

    def list_trucks(self, db: Session, page: int, limit: int, search: str | None) -> tuple[list[dict], int]:
        q = db.query(Truck)
        if search:
            q = q.filter(Truck.plate.ilike(f"%{search}%") | Truck.truckModel.ilike(f"%{search}%"))
        total = q.count()
        items = q.order_by(Truck.plate.asc()).offset((page - 1) * limit).limit(limit).all()
        return [_serialize(t) for t in items], total

    def get_truck(self, db: Session, truck_id: int) -> dict:
        t = db.query(Truck).filter(Truck.id == truck_id).first()
        if not t: raise NotFoundException("Truck")
        return _serialize(t)

    def create_truck(self, db: Session, data: TruckCreateRequest, actor_id: int) -> dict:
        if db.query(Truck).filter(Truck.plate == data.plate).first():
            raise DuplicateEntryException("Plate already registered", field="plate")

        t = Truck(**data.model_dump())
        db.add(t)
        db.flush()
        log_action(db, actor_id, "CREATE", "Truck", t.id, f"Registered truck {t.plate}")
        db.commit()
        db.refresh(t)
        return _serialize(t)

    def update_truck(self, db: Session, truck_id: int, data: TruckUpdateRequest, actor_id: int) -> dict:
        t = db.query(Truck).filter(Truck.id == truck_id).first()
        if not t: raise NotFoundException("Truck")

        if data.plate and data.plate != t.plate:
            if db.query(Truck).filter(Truck.plate == data.plate).first():
                raise DuplicateEntryException("Plate already registered", field="plate")
            t.plate = data.plate
        if data.truckModel:               t.truckModel     = data.truckModel
        if data.capacityLiters is not None: t.capacityLiters = data.capacityLiters

        log_action(db, actor_id, "UPDATE", "Truck", t.id, f"Updated truck {t.plate}")
        db.commit()
        db.refresh(t)
        return _serialize(t)

    def delete_truck(self, db: Session, truck_id: int, actor_id: int) -> None:
        t = db.query(Truck).filter(Truck.id == truck_id).first()
        if not t: raise NotFoundException("Truck")
        log_action(db, actor_id, "DELETE", "Truck", t.id, f"Removed truck {t.plate}")
        db.delete(t)
        db.commit()


truck_service = TruckService()
