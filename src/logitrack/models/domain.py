"""Domain models for packages, warehouses, drivers and routes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class PackageStatus(str, Enum):
    IN_WAREHOUSE = "InWarehouse"
    IN_TRANSIT = "InTransit"
    DELIVERED = "Delivered"


class Priority(str, Enum):
    STANDARD = "Standard"
    EXPRESS = "Express"


class VehicleType(str, Enum):
    BIKE = "Bike"
    TRUCK = "Truck"
    VAN = "Van"


class RouteStatus(str, Enum):
    CREATED = "Created"
    STARTED = "Started"
    COMPLETED = "Completed"


@dataclass(slots=True)
class Package:
    """A parcel tracked from intake to delivery."""

    id: int
    weight: float
    origin: str
    destination: str
    status: PackageStatus
    priority: Priority
    customer_phone: str
    created_time: datetime
    warehouse_id: Optional[int] = None
    route_id: Optional[int] = None
    delivered_time: Optional[datetime] = None


@dataclass(slots=True)
class Warehouse:
    """A storage site; `stored_packages` keeps assignment order."""

    id: int
    location: str
    capacity: int
    stored_packages: List[int] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return len(self.stored_packages) >= self.capacity


@dataclass(slots=True)
class Driver:
    id: int
    name: str
    vehicle_type: VehicleType
    is_available: bool = True
    current_route: Optional[int] = None
    completed_routes: List[int] = field(default_factory=list)


@dataclass(slots=True)
class Route:
    """A delivery run between two places, driven by at most one driver."""

    id: int
    origin: str
    destination: str
    distance_km: float
    estimated_duration: int  # minutes
    assigned_driver: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def status(self) -> RouteStatus:
        if self.end_time is not None:
            return RouteStatus.COMPLETED
        if self.start_time is not None:
            return RouteStatus.STARTED
        return RouteStatus.CREATED


@dataclass(slots=True, frozen=True)
class ReportEntry:
    """One delivered package in a monthly delivery report.

    `delivered_time` mirrors the package creation stamp, which is what the
    report has always exposed; `completed_time` is the stamp taken when the
    package's route was completed.
    """

    package_id: int
    delivered_time: datetime
    completed_time: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class DeliveryEstimate:
    package_id: int
    priority: Priority
    seconds: int
