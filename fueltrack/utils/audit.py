from sqlalchemy.orm import Session
from fueltrack.models.audit_log import AuditLog


def log_action(
    db: Session,
    user_id: int | None,
    action: str,
    entity_type: str,
    entity_id: int | str | None = None,
    description: str | None = None,
) -> None:
    """
    Write an audit log entry.

    Args:
        db:          Active DB session (not committed here)
        user_id:     ID of user performing the action (None = system action)
        action:      Verb: CREATE, UPDATE, CANCEL, DELETE, LOGIN, LOGOUT, etc.
        entity_type: Model name: "Trip", "Driver", "Truck", etc.
        entity_id:   Primary key of the affected record (trip ids are strings)
        description: Human-readable description

    Usage:
        log_action(db, current_user.id, "CANCEL", "Trip", trip.id,
                   f"Trip {trip.origin} → {trip.destination} cancelled")
        db.commit()
    """
    entry = AuditLog(
        userId=user_id,
        action=action,
        entityType=entity_type,
        entityId=str(entity_id) if entity_id is not None else None,
        description=description,
    )
    db.add(entry)
    # Caller commits
