"""In-memory registry of packages, warehouses, drivers and routes."""

from __future__ import annotations

import copy
import logging
import math
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from ...config import Settings, settings as default_settings
from ...models.domain import (
    DeliveryEstimate,
    Driver,
    Package,
    PackageStatus,
    Priority,
    ReportEntry,
    Route,
    RouteStatus,
    VehicleType,
    Warehouse,
)
from ..notifications import DeliveryNotification, LoggingNotifier, Notifier
from .results import ErrorKind, Result

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _fail(kind: ErrorKind, message: str) -> Result:
    logger.warning("%s: %s", kind.value, message)
    return Result.failure(kind, message)


def report_window(
    month: int,
    year: int,
    *,
    days_per_month: int = 30,
    days_per_year: int = 365,
) -> tuple[datetime, datetime]:
    """Return the half-open [start, end) window of an approximate month.

    Years are a fixed number of days and months a fixed number of days,
    counted from the Unix epoch. Leap days are ignored, so the window drifts
    away from the calendar month the further `year` is from 1970.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if year < 1970:
        raise ValueError(f"year must be 1970 or later, got {year}")
    offset_days = (year - 1970) * days_per_year + (month - 1) * days_per_month
    start = _EPOCH + timedelta(days=offset_days)
    return start, start + timedelta(days=days_per_month)


class Registry:
    """Owns every entity map and the id counters.

    All public methods take the same lock, so each operation is applied as a
    whole before the next one starts. Lookups hand out copies of the stored
    records.
    """

    def __init__(
        self,
        *,
        config: Settings | None = None,
        clock: Clock | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.config = config or default_settings
        self.clock = clock or _utcnow
        self.notifier = notifier or LoggingNotifier()

        self._lock = threading.RLock()
        self._packages: Dict[int, Package] = {}
        self._warehouses: Dict[int, Warehouse] = {}
        self._drivers: Dict[int, Driver] = {}
        self._routes: Dict[int, Route] = {}
        self._next_package_id = 0
        self._next_warehouse_id = 0
        self._next_driver_id = 0
        self._next_route_id = 0

    # ------------------------------------------------------------------
    # Warehouses
    # ------------------------------------------------------------------

    def add_warehouse(self, location: str, capacity: int) -> int:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        with self._lock:
            warehouse_id = self._next_warehouse_id
            self._warehouses[warehouse_id] = Warehouse(id=warehouse_id, location=location, capacity=capacity)
            self._next_warehouse_id += 1
        logger.info("Added warehouse %s at '%s' (capacity %s)", warehouse_id, location, capacity)
        return warehouse_id

    def assign_package_to_warehouse(self, package_id: int, warehouse_id: int) -> Result[None]:
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return _fail(ErrorKind.NOT_FOUND, f"Package {package_id} not found")
            warehouse = self._warehouses.get(warehouse_id)
            if warehouse is None:
                return _fail(ErrorKind.NOT_FOUND, f"Warehouse {warehouse_id} not found")
            if package.warehouse_id is not None:
                return _fail(
                    ErrorKind.INVALID_STATE,
                    f"Package {package_id} is already stored in warehouse {package.warehouse_id}",
                )
            if warehouse.is_full:
                return _fail(
                    ErrorKind.CAPACITY_EXCEEDED,
                    f"Warehouse {warehouse_id} is full ({warehouse.capacity} packages)",
                )
            warehouse.stored_packages.append(package_id)
            package.warehouse_id = warehouse_id
        logger.info("Stored package %s in warehouse %s", package_id, warehouse_id)
        return Result.success()

    def release_package_from_warehouse(self, package_id: int) -> Result[None]:
        """Take a package out of its warehouse, freeing one capacity slot."""
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return _fail(ErrorKind.NOT_FOUND, f"Package {package_id} not found")
            if package.warehouse_id is None:
                return _fail(ErrorKind.INVALID_STATE, f"Package {package_id} is not stored in a warehouse")
            warehouse = self._warehouses.get(package.warehouse_id)
            if warehouse is None or package_id not in warehouse.stored_packages:
                return _fail(
                    ErrorKind.INVALID_STATE,
                    f"Warehouse {package.warehouse_id} does not list package {package_id}",
                )
            warehouse_id = warehouse.id
            warehouse.stored_packages.remove(package_id)
            package.warehouse_id = None
        logger.info("Released package %s from warehouse %s", package_id, warehouse_id)
        return Result.success()

    def get_warehouse(self, warehouse_id: int) -> Optional[Warehouse]:
        with self._lock:
            return copy.deepcopy(self._warehouses.get(warehouse_id))

    def list_warehouses(self) -> List[Warehouse]:
        with self._lock:
            return [copy.deepcopy(item) for item in self._warehouses.values()]

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def register_driver(self, name: str, vehicle_type: VehicleType) -> int:
        with self._lock:
            driver_id = self._next_driver_id
            self._drivers[driver_id] = Driver(id=driver_id, name=name, vehicle_type=VehicleType(vehicle_type))
            self._next_driver_id += 1
        logger.info("Registered driver %s (%s, %s)", driver_id, name, VehicleType(vehicle_type).value)
        return driver_id

    def get_driver(self, driver_id: int) -> Optional[Driver]:
        with self._lock:
            return copy.deepcopy(self._drivers.get(driver_id))

    def list_drivers(self, available: bool | None = None) -> List[Driver]:
        with self._lock:
            return [
                copy.deepcopy(driver)
                for driver in self._drivers.values()
                if available is None or driver.is_available == available
            ]

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def _estimate_minutes(self, distance_km: float) -> int:
        return int(round(distance_km / self.config.average_speed_kmh * 60))

    def create_route(self, origin: str, destination: str, distance_km: float) -> int:
        if not math.isfinite(distance_km) or distance_km < 0:
            raise ValueError("distance_km must be a finite number >= 0")
        estimated = self._estimate_minutes(distance_km)
        with self._lock:
            route_id = self._next_route_id
            self._routes[route_id] = Route(
                id=route_id,
                origin=origin,
                destination=destination,
                distance_km=distance_km,
                estimated_duration=estimated,
            )
            self._next_route_id += 1
        logger.info(
            "Created route %s %s -> %s (%.1f km, ~%s min)",
            route_id,
            origin,
            destination,
            distance_km,
            estimated,
        )
        return route_id

    def assign_driver_to_route(self, route_id: int, driver_id: int) -> Result[None]:
        with self._lock:
            route = self._routes.get(route_id)
            if route is None:
                return _fail(ErrorKind.NOT_FOUND, f"Route {route_id} not found")
            if driver_id not in self._drivers:
                return _fail(ErrorKind.NOT_FOUND, f"Driver {driver_id} not found")
            if route.status is not RouteStatus.CREATED:
                return _fail(
                    ErrorKind.INVALID_STATE,
                    f"Route {route_id} is {route.status.value}; drivers can only be assigned before start",
                )
            route.assigned_driver = driver_id
        logger.info("Assigned driver %s to route %s", driver_id, route_id)
        return Result.success()

    def assign_package_to_route(self, package_id: int, route_id: int) -> Result[None]:
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return _fail(ErrorKind.NOT_FOUND, f"Package {package_id} not found")
            route = self._routes.get(route_id)
            if route is None:
                return _fail(ErrorKind.NOT_FOUND, f"Route {route_id} not found")
            if route.status is RouteStatus.COMPLETED:
                return _fail(ErrorKind.INVALID_STATE, f"Route {route_id} is already completed")
            if package.status is PackageStatus.DELIVERED:
                return _fail(ErrorKind.INVALID_STATE, f"Package {package_id} is already delivered")
            if package.route_id == route_id:
                return _fail(ErrorKind.INVALID_STATE, f"Package {package_id} is already on route {route_id}")
            current = self._routes.get(package.route_id) if package.route_id is not None else None
            if current is not None and current.status is not RouteStatus.CREATED:
                return _fail(
                    ErrorKind.INVALID_STATE,
                    f"Package {package_id} is on route {current.id}, which is {current.status.value}",
                )
            package.route_id = route_id
            if route.status is RouteStatus.STARTED:
                package.status = PackageStatus.IN_TRANSIT
        logger.info("Put package %s on route %s", package_id, route_id)
        return Result.success()

    def start_route(self, route_id: int) -> Result[None]:
        with self._lock:
            route = self._routes.get(route_id)
            if route is None:
                return _fail(ErrorKind.NOT_FOUND, f"Route {route_id} not found")
            if route.status is not RouteStatus.CREATED:
                return _fail(ErrorKind.INVALID_STATE, f"Route {route_id} is already {route.status.value}")
            if route.assigned_driver is None:
                return _fail(ErrorKind.INVALID_STATE, f"Route {route_id} has no assigned driver")
            driver = self._drivers.get(route.assigned_driver)
            if driver is None:
                return _fail(
                    ErrorKind.INVALID_STATE,
                    f"Driver {route.assigned_driver} assigned to route {route_id} does not exist",
                )
            if not driver.is_available:
                return _fail(
                    ErrorKind.DRIVER_OCCUPIED,
                    f"Driver {driver.id} is busy with route {driver.current_route}",
                )

            driver.is_available = False
            driver.current_route = route_id
            route.start_time = self.clock()
            for package in self._packages.values():
                if package.route_id == route_id and package.status is not PackageStatus.DELIVERED:
                    package.status = PackageStatus.IN_TRANSIT
        logger.info("Started route %s with driver %s", route_id, driver.id)
        return Result.success()

    def complete_route(self, route_id: int) -> Result[None]:
        with self._lock:
            route = self._routes.get(route_id)
            if route is None:
                return _fail(ErrorKind.NOT_FOUND, f"Route {route_id} not found")
            if route.status is not RouteStatus.STARTED:
                return _fail(
                    ErrorKind.INVALID_STATE,
                    f"Route {route_id} is {route.status.value}; only started routes can be completed",
                )

            now = self.clock()
            route.end_time = now
            if route.assigned_driver is not None:
                driver = self._drivers.get(route.assigned_driver)
                if driver is not None:
                    driver.is_available = True
                    driver.current_route = None
                    driver.completed_routes.append(route_id)

            delivered = 0
            for package in self._packages.values():
                if package.route_id == route_id:
                    package.status = PackageStatus.DELIVERED
                    package.delivered_time = now
                    delivered += 1
        logger.info("Completed route %s, %s package(s) delivered", route_id, delivered)
        return Result.success()

    def get_route(self, route_id: int) -> Optional[Route]:
        with self._lock:
            return copy.deepcopy(self._routes.get(route_id))

    def list_routes(self) -> List[Route]:
        with self._lock:
            return [copy.deepcopy(route) for route in self._routes.values()]

    # ------------------------------------------------------------------
    # Packages
    # ------------------------------------------------------------------

    def create_package(
        self,
        weight: float,
        origin: str,
        destination: str,
        status: PackageStatus,
        priority: Priority,
        customer_phone: str,
    ) -> int:
        if not math.isfinite(weight) or weight < 0:
            raise ValueError("weight must be a finite number >= 0")
        with self._lock:
            package_id = self._next_package_id
            self._packages[package_id] = Package(
                id=package_id,
                weight=weight,
                origin=origin,
                destination=destination,
                status=PackageStatus(status),
                priority=Priority(priority),
                customer_phone=customer_phone,
                created_time=self.clock(),
            )
            self._next_package_id += 1
        logger.info("Created package %s %s -> %s", package_id, origin, destination)
        return package_id

    def prioritize_package(self, package_id: int) -> Result[None]:
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return _fail(ErrorKind.NOT_FOUND, f"Package {package_id} not found")
            package.priority = Priority.EXPRESS
        logger.info("Package %s set to express", package_id)
        return Result.success()

    def reroute_package(self, package_id: int, new_destination: str) -> Result[None]:
        """Change a package's destination, carrying it over to its route.

        The route keeps its distance and estimated duration.
        """
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return _fail(ErrorKind.NOT_FOUND, f"Package {package_id} not found")
            package.destination = new_destination
            if package.route_id is not None:
                route = self._routes.get(package.route_id)
                if route is not None:
                    route.destination = new_destination
        logger.info("Rerouted package %s to '%s'", package_id, new_destination)
        return Result.success()

    def get_package(self, package_id: int) -> Optional[Package]:
        with self._lock:
            return copy.deepcopy(self._packages.get(package_id))

    def list_packages(self, status: PackageStatus | None = None) -> List[Package]:
        with self._lock:
            return [
                copy.deepcopy(package)
                for package in self._packages.values()
                if status is None or package.status is PackageStatus(status)
            ]

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def estimate_delivery(self, package_id: int) -> Result[DeliveryEstimate]:
        """Delivery estimate with the priority it was computed for, read in one pass."""
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return _fail(ErrorKind.NOT_FOUND, f"Package {package_id} not found")
            if package.route_id is None:
                return _fail(ErrorKind.NO_ROUTE, f"Package {package_id} is not assigned to a route")
            route = self._routes.get(package.route_id)
            if route is None:
                return _fail(ErrorKind.NOT_FOUND, f"Route {package.route_id} not found")
            base_seconds = route.estimated_duration * 60
            priority = package.priority

        seconds = base_seconds
        if priority is Priority.EXPRESS:
            seconds = int(base_seconds * self.config.express_time_factor)
        return Result.success(DeliveryEstimate(package_id=package_id, priority=priority, seconds=seconds))

    def estimate_delivery_time(self, package_id: int) -> Result[int]:
        """Estimated delivery time in seconds, from the package's route."""
        result = self.estimate_delivery(package_id)
        if not result.ok:
            return Result(error=result.error)
        return Result.success(result.value.seconds)

    def send_delivery_notification(self, package_id: int) -> Result[None]:
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return _fail(ErrorKind.NOT_FOUND, f"Package {package_id} not found")
            notification = DeliveryNotification(
                package_id=package.id,
                phone=package.customer_phone,
                sender=self.config.notification_sender,
                body=f"Package {package.id} to {package.destination} is {package.status.value}.",
            )
        self.notifier.send(notification)
        return Result.success()

    def generate_delivery_report(self, month: int, year: int) -> List[ReportEntry]:
        start, end = report_window(
            month,
            year,
            days_per_month=self.config.report_days_per_month,
            days_per_year=self.config.report_days_per_year,
        )
        with self._lock:
            entries = [
                ReportEntry(
                    package_id=package.id,
                    delivered_time=package.created_time,
                    completed_time=package.delivered_time,
                )
                for package in sorted(self._packages.values(), key=lambda item: item.id)
                if package.status is PackageStatus.DELIVERED and start <= package.created_time < end
            ]
        logger.info("Delivery report %02d/%s: %s package(s)", month, year, len(entries))
        return entries

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "packages": len(self._packages),
                "warehouses": len(self._warehouses),
                "drivers": len(self._drivers),
                "routes": len(self._routes),
            }
