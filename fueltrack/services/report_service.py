from sqlalchemy.orm import Session

from fueltrack.models.report import Report
from fueltrack.models.trip import Trip
from fueltrack.schemas.report import ReportCreateRequest
from fueltrack.utils.audit import log_action
from fueltrack.utils.clock import isoformat
from fueltrack.utils.exceptions import NotFoundException


def _serialize(r: Report) -> dict:
    return {
        "id":        r.id,
        "trip": {
            "id":          r.trip.id,
            "truckPlate":  r.trip.truckPlate,
            "driverName":  r.trip.driverName,
            "origin":      r.trip.origin,
            "destination": r.trip.destination,
            "status":      r.trip.status.value,
        },
        "details":   r.details,
        "createdBy": r.created_by.username if r.created_by else None,
        "createdAt": isoformat(r.createdAt),
    }


class ReportService:

    def list_reports(self, db: Session, page: int, limit: int, trip_id: str | None) -> tuple[list[dict], int]:
        q = db.query(Report)
        if trip_id:
            q = q.filter(Report.tripId == trip_id)
        total = q.count()
        items = q.order_by(Report.createdAt.desc(), Report.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return [_serialize(r) for r in items], total

    def create_report(self, db: Session, data: ReportCreateRequest, actor_id: int) -> dict:
        trip = db.query(Trip).filter(Trip.id == data.tripId).first()
        if not trip:
            raise NotFoundException("Trip")

        r = Report(tripId=trip.id, details=data.details, createdById=actor_id)
        db.add(r)
        db.flush()
        log_action(db, actor_id, "CREATE", "Report", r.id, f"Report filed for trip {trip.id}")
        db.commit()
        db.refresh(r)
        return _serialize(r)


report_service = ReportService()
