"""
Trip list and dashboard counters.

The list is filtered and sorted in SQL. The counters are derived in Python
from that same filtered list, so the stat cards always describe the rows the
dashboard is showing.
"""
from datetime import datetime
from typing import Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from fueltrack.models.trip import Trip, TripStatus
from fueltrack.schemas.trip import TripFilter, TripSortField, SortOrder, TripStats
from fueltrack.utils.clock import as_utc, isoformat, local_zone, utcnow


# Explicit allow-list: client input never names a column directly
SORT_COLUMNS = {
    TripSortField.DRIVER_NAME:     Trip.driverName,
    TripSortField.TRUCK_PLATE:     Trip.truckPlate,
    TripSortField.ORIGIN:          Trip.origin,
    TripSortField.DESTINATION:     Trip.destination,
    TripSortField.FUEL_TYPE:       Trip.fuelType,
    TripSortField.QUANTITY_LITERS: Trip.quantityLiters,
    TripSortField.DEPARTURE_AT:    Trip.departureAt,
    TripSortField.STATUS:          Trip.status,
    TripSortField.CREATED_AT:      Trip.createdAt,
    TripSortField.UPDATED_AT:      Trip.updatedAt,
}

SEARCH_COLUMNS = (Trip.driverName, Trip.truckPlate, Trip.origin, Trip.destination)


def serialize_trip(t: Trip) -> dict:
    return {
        "id":             t.id,
        "driverName":     t.driverName,
        "truckPlate":     t.truckPlate,
        "origin":         t.origin,
        "destination":    t.destination,
        "fuelType":       t.fuelType.value,
        "quantityLiters": t.quantityLiters,
        "departureAt":    isoformat(t.departureAt),
        "status":         t.status.value,
        "createdAt":      isoformat(t.createdAt),
        "updatedAt":      isoformat(t.updatedAt),
    }


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_trip_query(db: Session, f: TripFilter):
    q = db.query(Trip)

    if f.search:
        kw = f"%{_escape_like(f.search)}%"
        q = q.filter(or_(*(col.ilike(kw, escape="\\") for col in SEARCH_COLUMNS)))
    if f.status is not None:
        q = q.filter(Trip.status == f.status)
    if f.fuelType is not None:
        q = q.filter(Trip.fuelType == f.fuelType)

    column = SORT_COLUMNS[f.sortBy]
    ordering = column.asc() if f.sortOrder == SortOrder.ASC else column.desc()
    # id breaks ties so equal sort keys come back in a stable order
    return q.order_by(ordering, Trip.id.asc())


def _falls_on_day(ts: datetime | None, today) -> bool:
    if ts is None:
        return False
    return as_utc(ts).astimezone(local_zone()).date() == today


def compute_stats(trips: Iterable[Trip], now: datetime | None = None) -> TripStats:
    """Derive the dashboard counters from an already-filtered trip list."""
    now = as_utc(now) if now else utcnow()
    today = now.astimezone(local_zone()).date()

    active = completed_today = liters = 0
    trucks_in_route: set[str] = set()

    for t in trips:
        if t.status == TripStatus.IN_TRANSIT:
            active += 1
            trucks_in_route.add(t.truckPlate)
        elif t.status == TripStatus.COMPLETED:
            liters += t.quantityLiters
            finished_at = t.updatedAt if t.updatedAt is not None else t.createdAt
            if _falls_on_day(finished_at, today):
                completed_today += 1

    return TripStats(
        activeTrips=active,
        completedToday=completed_today,
        litersTransported=liters,
        trucksInRoute=len(trucks_in_route),
    )


def query_trips(db: Session, f: TripFilter, now: datetime | None = None) -> dict:
    """Filtered, sorted trips plus the stats computed over exactly those trips."""
    trips = build_trip_query(db, f).all()
    return {
        "trips": [serialize_trip(t) for t in trips],
        "stats": compute_stats(trips, now).model_dump(),
    }
