from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from fueltrack.models.trip import Trip, TripStatus
from fueltrack.schemas.trip import TripCreateRequest, TripUpdateRequest
from fueltrack.services.notification_service import ConnectionManager, TripEvent
from fueltrack.services.trip_query import serialize_trip
from fueltrack.utils.audit import log_action
from fueltrack.utils.clock import utcnow
from fueltrack.utils.exceptions import NotFoundException, InvalidStatusTransitionException


def _check_transition(current: TripStatus, requested: TripStatus) -> None:
    """in_transit may become completed or cancelled; both of those are final."""
    if requested != current and current.is_terminal:
        raise InvalidStatusTransitionException(current.value, requested.value)


class TripService:
    """
    Trip lifecycle writes. Each successful write schedules one broadcast on
    the request's background tasks, which only run after the commit and the
    response have gone out.
    """

    def __init__(self, notifier: ConnectionManager):
        self.notifier = notifier

    def _get_or_404(self, db: Session, trip_id: str) -> Trip:
        t = db.query(Trip).filter(Trip.id == trip_id).first()
        if not t:
            raise NotFoundException("Trip")
        return t

    def get_trip(self, db: Session, trip_id: str) -> dict:
        return serialize_trip(self._get_or_404(db, trip_id))

    # ─── Create ───────────────────────────────────────────────────────────────
    def create_trip(
        self, db: Session, data: TripCreateRequest, actor_id: int | None, tasks: BackgroundTasks,
    ) -> dict:
        now = utcnow()
        t = Trip(**data.model_dump(), createdAt=now, updatedAt=now)
        db.add(t)
        db.flush()
        log_action(db, actor_id, "CREATE", "Trip", t.id,
                   f"Trip {t.origin} → {t.destination} ({t.truckPlate}, {t.quantityLiters} L)")
        db.commit()
        db.refresh(t)

        payload = serialize_trip(t)
        tasks.add_task(self.notifier.broadcast, TripEvent.CREATED, payload)
        return payload

    # ─── Update ───────────────────────────────────────────────────────────────
    def update_trip(
        self, db: Session, trip_id: str, data: TripUpdateRequest,
        actor_id: int | None, tasks: BackgroundTasks,
    ) -> dict:
        t = self._get_or_404(db, trip_id)
        changes = data.model_dump(exclude_unset=True)

        if "status" in changes:
            _check_transition(t.status, changes["status"])

        for field, value in changes.items():
            setattr(t, field, value)
        t.updatedAt = utcnow()

        log_action(db, actor_id, "UPDATE", "Trip", t.id,
                   f"Updated trip fields: {', '.join(sorted(changes)) or 'none'}")
        db.commit()
        db.refresh(t)

        payload = serialize_trip(t)
        tasks.add_task(self.notifier.broadcast, TripEvent.UPDATED, payload)
        return payload

    # ─── Cancel (soft) ────────────────────────────────────────────────────────
    def cancel_trip(
        self, db: Session, trip_id: str, actor_id: int | None, tasks: BackgroundTasks,
    ) -> None:
        t = self._get_or_404(db, trip_id)
        if t.status == TripStatus.CANCELLED:
            return
        _check_transition(t.status, TripStatus.CANCELLED)

        t.status = TripStatus.CANCELLED
        t.updatedAt = utcnow()
        log_action(db, actor_id, "CANCEL", "Trip", t.id,
                   f"Trip {t.origin} → {t.destination} cancelled")
        db.commit()

        tasks.add_task(self.notifier.broadcast, TripEvent.DELETED, {"id": t.id})
