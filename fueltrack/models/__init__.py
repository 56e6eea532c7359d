"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Parent tables are imported before child tables.
"""

from fueltrack.models.user import User, RoleName
from fueltrack.models.refresh_token import RefreshToken
from fueltrack.models.trip import Trip, TripStatus, FuelType
from fueltrack.models.report import Report
from fueltrack.models.driver import Driver, DriverStatus
from fueltrack.models.truck import Truck
from fueltrack.models.audit_log import AuditLog
from fueltrack.models.system_setting import SystemSetting

__all__ = [
    "User",
    "RoleName",
    "RefreshToken",
    "Trip",
    "TripStatus",
    "FuelType",
    "Report",
    "Driver",
    "DriverStatus",
    "Truck",
    "AuditLog",
    "SystemSetting",
]
