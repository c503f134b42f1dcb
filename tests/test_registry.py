from datetime import datetime, timedelta, timezone

import pytest

from logitrack.config import Settings
from logitrack.models.domain import PackageStatus, Priority, RouteStatus, VehicleType
from logitrack.services.notifications import LoggingNotifier
from logitrack.services.registry import ErrorKind, Registry, RegistryOperationError, report_window

MISSING_ID = 9999


class FixedClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def notifier() -> LoggingNotifier:
    return LoggingNotifier()


@pytest.fixture
def registry(clock: FixedClock, notifier: LoggingNotifier) -> Registry:
    return Registry(config=Settings(), clock=clock, notifier=notifier)


def _package(registry: Registry, *, priority: Priority = Priority.STANDARD, status=PackageStatus.IN_WAREHOUSE) -> int:
    return registry.create_package(
        weight=2.5,
        origin="Port",
        destination="Airport",
        status=status,
        priority=priority,
        customer_phone="+1-555-0100",
    )


def _started_route(registry: Registry) -> tuple[int, int]:
    driver_id = registry.register_driver("Dana", VehicleType.VAN)
    route_id = registry.create_route("Port", "Airport", 42.8)
    assert registry.assign_driver_to_route(route_id, driver_id).ok
    assert registry.start_route(route_id).ok
    return route_id, driver_id


def test_ids_are_sequential_per_entity(registry: Registry):
    assert registry.add_warehouse("North", 5) == 0
    assert registry.add_warehouse("South", 5) == 1
    assert _package(registry) == 0
    assert _package(registry) == 1
    assert registry.register_driver("Dana", VehicleType.BIKE) == 0
    assert registry.create_route("A", "B", 1.0) == 0


def test_warehouse_capacity_limit(registry: Registry):
    warehouse_id = registry.add_warehouse("North", 2)
    packages = [_package(registry) for _ in range(3)]

    assert registry.assign_package_to_warehouse(packages[0], warehouse_id).ok
    assert registry.assign_package_to_warehouse(packages[1], warehouse_id).ok
    result = registry.assign_package_to_warehouse(packages[2], warehouse_id)

    assert not result.ok
    assert result.error.kind is ErrorKind.CAPACITY_EXCEEDED
    assert registry.get_warehouse(warehouse_id).stored_packages == packages[:2]
    assert registry.get_package(packages[2]).warehouse_id is None
    assert registry.get_package(packages[0]).warehouse_id == warehouse_id


def test_zero_capacity_warehouse_rejects_everything(registry: Registry):
    warehouse_id = registry.add_warehouse("Closet", 0)
    result = registry.assign_package_to_warehouse(_package(registry), warehouse_id)
    assert result.error.kind is ErrorKind.CAPACITY_EXCEEDED


def test_release_frees_capacity(registry: Registry):
    warehouse_id = registry.add_warehouse("North", 1)
    first, second = _package(registry), _package(registry)
    assert registry.assign_package_to_warehouse(first, warehouse_id).ok

    assert registry.release_package_from_warehouse(first).ok
    assert registry.get_package(first).warehouse_id is None
    assert registry.assign_package_to_warehouse(second, warehouse_id).ok
    assert registry.get_warehouse(warehouse_id).stored_packages == [second]


def test_release_requires_stored_package(registry: Registry):
    package_id = _package(registry)
    assert registry.release_package_from_warehouse(package_id).error.kind is ErrorKind.INVALID_STATE
    assert registry.release_package_from_warehouse(MISSING_ID).error.kind is ErrorKind.NOT_FOUND


def test_negative_inputs_are_rejected(registry: Registry):
    with pytest.raises(ValueError):
        registry.add_warehouse("North", -1)
    with pytest.raises(ValueError):
        registry.create_route("A", "B", -3.0)
    with pytest.raises(ValueError):
        registry.create_package(-1.0, "A", "B", PackageStatus.IN_WAREHOUSE, Priority.STANDARD, "555")


def test_package_keeps_supplied_status_and_priority(registry: Registry, clock: FixedClock):
    package_id = _package(registry, priority=Priority.EXPRESS, status=PackageStatus.IN_TRANSIT)
    package = registry.get_package(package_id)

    assert package.status is PackageStatus.IN_TRANSIT
    assert package.priority is Priority.EXPRESS
    assert package.created_time == clock.now
    assert package.warehouse_id is None
    assert package.route_id is None


def test_prioritize_is_idempotent(registry: Registry):
    package_id = _package(registry)

    assert registry.prioritize_package(package_id).ok
    assert registry.get_package(package_id).priority is Priority.EXPRESS
    assert registry.prioritize_package(package_id).ok
    assert registry.get_package(package_id).priority is Priority.EXPRESS


def test_reroute_updates_linked_route(registry: Registry):
    package_id = _package(registry)
    route_id = registry.create_route("Port", "Airport", 42.8)
    assert registry.assign_package_to_route(package_id, route_id).ok

    assert registry.reroute_package(package_id, "Downtown").ok

    assert registry.get_package(package_id).destination == "Downtown"
    route = registry.get_route(route_id)
    assert route.destination == "Downtown"
    assert route.distance_km == 42.8
    assert route.estimated_duration == 43


def test_reroute_without_route_only_touches_package(registry: Registry):
    package_id = _package(registry)
    route_id = registry.create_route("Port", "Airport", 10.0)

    assert registry.reroute_package(package_id, "Downtown").ok
    assert registry.get_route(route_id).destination == "Airport"


def test_create_route_derives_duration(registry: Registry):
    route_id = registry.create_route("Port", "Airport", 42.8)
    route = registry.get_route(route_id)

    assert route.distance_km == 42.8
    assert route.estimated_duration == 43
    assert route.estimated_duration > 0
    assert route.status is RouteStatus.CREATED
    assert route.assigned_driver is None


def test_driver_workflow(registry: Registry, clock: FixedClock):
    route_id, driver_id = _started_route(registry)
    driver = registry.get_driver(driver_id)
    assert driver.is_available is False
    assert driver.current_route == route_id
    assert registry.get_route(route_id).start_time == clock.now

    clock.advance(minutes=45)
    assert registry.complete_route(route_id).ok

    driver = registry.get_driver(driver_id)
    route = registry.get_route(route_id)
    assert driver.is_available is True
    assert driver.current_route is None
    assert driver.completed_routes == [route_id]
    assert route.end_time == clock.now
    assert route.status is RouteStatus.COMPLETED


def test_start_route_requires_assigned_driver(registry: Registry):
    route_id = registry.create_route("Port", "Airport", 5.0)
    result = registry.start_route(route_id)
    assert result.error.kind is ErrorKind.INVALID_STATE


def test_busy_driver_cannot_start_second_route(registry: Registry):
    first_route, driver_id = _started_route(registry)
    second_route = registry.create_route("Airport", "Port", 40.0)
    assert registry.assign_driver_to_route(second_route, driver_id).ok

    result = registry.start_route(second_route)

    assert result.error.kind is ErrorKind.DRIVER_OCCUPIED
    assert registry.get_route(second_route).start_time is None
    assert registry.get_driver(driver_id).current_route == first_route


def test_route_transitions_are_linear(registry: Registry):
    route_id, driver_id = _started_route(registry)
    assert registry.start_route(route_id).error.kind is ErrorKind.INVALID_STATE
    assert registry.assign_driver_to_route(route_id, driver_id).error.kind is ErrorKind.INVALID_STATE

    assert registry.complete_route(route_id).ok
    assert registry.complete_route(route_id).error.kind is ErrorKind.INVALID_STATE

    fresh = registry.create_route("A", "B", 1.0)
    assert registry.complete_route(fresh).error.kind is ErrorKind.INVALID_STATE


def test_route_packages_move_through_statuses(registry: Registry):
    driver_id = registry.register_driver("Dana", VehicleType.TRUCK)
    route_id = registry.create_route("Port", "Airport", 42.8)
    on_route, elsewhere = _package(registry), _package(registry)
    assert registry.assign_package_to_route(on_route, route_id).ok
    assert registry.assign_driver_to_route(route_id, driver_id).ok

    assert registry.start_route(route_id).ok
    assert registry.get_package(on_route).status is PackageStatus.IN_TRANSIT

    assert registry.complete_route(route_id).ok
    delivered = registry.get_package(on_route)
    assert delivered.status is PackageStatus.DELIVERED
    assert delivered.delivered_time is not None
    assert registry.get_package(elsewhere).status is PackageStatus.IN_WAREHOUSE


def test_delivered_package_cannot_join_route(registry: Registry):
    package_id = _package(registry, status=PackageStatus.DELIVERED)
    route_id = registry.create_route("A", "B", 1.0)
    assert registry.assign_package_to_route(package_id, route_id).error.kind is ErrorKind.INVALID_STATE


def test_express_estimate_is_faster(registry: Registry):
    route_id = registry.create_route("Port", "Airport", 42.8)
    standard, express = _package(registry), _package(registry, priority=Priority.EXPRESS)
    registry.assign_package_to_route(standard, route_id)
    registry.assign_package_to_route(express, route_id)

    standard_seconds = registry.estimate_delivery_time(standard).unwrap()
    express_seconds = registry.estimate_delivery_time(express).unwrap()

    assert standard_seconds == 43 * 60
    assert express_seconds == int(43 * 60 * 0.7)
    assert express_seconds < standard_seconds


def test_estimate_requires_route(registry: Registry):
    package_id = _package(registry)
    result = registry.estimate_delivery_time(package_id)
    assert result.error.kind is ErrorKind.NO_ROUTE
    with pytest.raises(RegistryOperationError) as excinfo:
        result.unwrap()
    assert excinfo.value.kind is ErrorKind.NO_ROUTE


def test_notification_goes_to_notifier(registry: Registry, notifier: LoggingNotifier):
    package_id = _package(registry)
    assert registry.send_delivery_notification(package_id).ok

    assert len(notifier.sent) == 1
    sent = notifier.sent[0]
    assert sent.package_id == package_id
    assert sent.phone == "+1-555-0100"
    assert "Airport" in sent.body


@pytest.mark.parametrize(
    "operation",
    [
        lambda r: r.assign_package_to_warehouse(MISSING_ID, MISSING_ID),
        lambda r: r.prioritize_package(MISSING_ID),
        lambda r: r.reroute_package(MISSING_ID, "Nowhere"),
        lambda r: r.start_route(MISSING_ID),
        lambda r: r.complete_route(MISSING_ID),
        lambda r: r.estimate_delivery_time(MISSING_ID),
        lambda r: r.send_delivery_notification(MISSING_ID),
        lambda r: r.assign_driver_to_route(MISSING_ID, MISSING_ID),
        lambda r: r.assign_package_to_route(MISSING_ID, MISSING_ID),
    ],
)
def test_unknown_ids_are_not_found(registry: Registry, operation):
    result = operation(registry)
    assert not result.ok
    assert result.error.kind is ErrorKind.NOT_FOUND


def test_unknown_warehouse_is_not_found(registry: Registry):
    package_id = _package(registry)
    assert registry.assign_package_to_warehouse(package_id, MISSING_ID).error.kind is ErrorKind.NOT_FOUND


def test_lookups_return_none_for_unknown_ids(registry: Registry):
    assert registry.get_package(MISSING_ID) is None
    assert registry.get_driver(MISSING_ID) is None
    assert registry.get_route(MISSING_ID) is None
    assert registry.get_warehouse(MISSING_ID) is None


def test_lookups_return_snapshots(registry: Registry):
    driver_id = registry.register_driver("Dana", VehicleType.BIKE)
    snapshot = registry.get_driver(driver_id)
    snapshot.is_available = False
    snapshot.completed_routes.append(7)

    stored = registry.get_driver(driver_id)
    assert stored.is_available is True
    assert stored.completed_routes == []


def test_delivery_report_uses_approximate_month(registry: Registry, clock: FixedClock):
    start, end = report_window(3, 2024)
    assert end - start == timedelta(days=30)

    clock.now = start + timedelta(days=1)
    route_id = registry.create_route("Port", "Airport", 5.0)
    in_window = _package(registry)
    not_delivered = _package(registry)
    clock.now = end
    out_of_window = _package(registry)
    for package_id in (in_window, out_of_window):
        registry.assign_package_to_route(package_id, route_id)
    driver_id = registry.register_driver("Dana", VehicleType.VAN)
    registry.assign_driver_to_route(route_id, driver_id)
    registry.start_route(route_id)
    clock.advance(days=2)
    registry.complete_route(route_id)

    entries = registry.generate_delivery_report(3, 2024)

    assert [entry.package_id for entry in entries] == [in_window]
    entry = entries[0]
    assert entry.delivered_time == start + timedelta(days=1)
    assert entry.completed_time == clock.now
    assert not_delivered not in [e.package_id for e in entries]


def test_report_window_rejects_bad_month():
    with pytest.raises(ValueError):
        report_window(13, 2024)
    with pytest.raises(ValueError):
        report_window(0, 2024)


def test_list_filters(registry: Registry):
    first = registry.register_driver("Dana", VehicleType.VAN)
    registry.register_driver("Eli", VehicleType.BIKE)
    route_id = registry.create_route("A", "B", 3.0)
    registry.assign_driver_to_route(route_id, first)
    registry.start_route(route_id)
    _package(registry)
    _package(registry, status=PackageStatus.DELIVERED)

    assert [d.name for d in registry.list_drivers(available=True)] == ["Eli"]
    assert [d.name for d in registry.list_drivers(available=False)] == ["Dana"]
    assert len(registry.list_drivers()) == 2
    assert len(registry.list_packages(status=PackageStatus.DELIVERED)) == 1
    assert registry.counts() == {"packages": 2, "warehouses": 0, "drivers": 2, "routes": 1}


def test_stored_package_cannot_be_stored_again(registry: Registry):
    first = registry.add_warehouse("North", 1)
    second = registry.add_warehouse("South", 1)
    package_id = _package(registry)
    assert registry.assign_package_to_warehouse(package_id, first).ok

    elsewhere = registry.assign_package_to_warehouse(package_id, second)
    again = registry.assign_package_to_warehouse(package_id, first)

    assert elsewhere.error.kind is ErrorKind.INVALID_STATE
    assert again.error.kind is ErrorKind.INVALID_STATE
    assert registry.get_warehouse(first).stored_packages == [package_id]
    assert registry.get_warehouse(second).stored_packages == []


def test_release_then_store_elsewhere_leaves_no_stale_slot(registry: Registry):
    first = registry.add_warehouse("North", 1)
    second = registry.add_warehouse("South", 1)
    package_id, other = _package(registry), _package(registry)
    registry.assign_package_to_warehouse(package_id, first)

    assert registry.release_package_from_warehouse(package_id).ok
    assert registry.assign_package_to_warehouse(package_id, second).ok
    assert registry.get_warehouse(first).stored_packages == []
    assert registry.assign_package_to_warehouse(other, first).ok


def test_package_moves_between_routes_only_before_start(registry: Registry):
    package_id = _package(registry)
    planned = registry.create_route("Port", "Airport", 10.0)
    backup = registry.create_route("Port", "Airport", 20.0)
    assert registry.assign_package_to_route(package_id, planned).ok

    assert registry.assign_package_to_route(package_id, planned).error.kind is ErrorKind.INVALID_STATE
    assert registry.assign_package_to_route(package_id, backup).ok
    assert registry.get_package(package_id).route_id == backup

    driver_id = registry.register_driver("Dana", VehicleType.VAN)
    registry.assign_driver_to_route(backup, driver_id)
    assert registry.start_route(backup).ok

    result = registry.assign_package_to_route(package_id, planned)
    assert result.error.kind is ErrorKind.INVALID_STATE
    assert registry.get_package(package_id).route_id == backup


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_numbers_are_rejected(registry: Registry, value: float):
    with pytest.raises(ValueError):
        registry.create_route("A", "B", value)
    with pytest.raises(ValueError):
        registry.create_package(value, "A", "B", PackageStatus.IN_WAREHOUSE, Priority.STANDARD, "555")
    assert registry.counts()["routes"] == 0
    assert registry.counts()["packages"] == 0


def test_estimate_carries_priority_it_was_computed_for(registry: Registry):
    route_id = registry.create_route("Port", "Airport", 42.8)
    package_id = _package(registry, priority=Priority.EXPRESS)
    registry.assign_package_to_route(package_id, route_id)

    estimate = registry.estimate_delivery(package_id).unwrap()

    assert estimate.priority is Priority.EXPRESS
    assert estimate.seconds == registry.estimate_delivery_time(package_id).unwrap()
    assert registry.estimate_delivery(MISSING_ID).error.kind is ErrorKind.NOT_FOUND
