"""
Route Ledger - owns a route's ordered steps and its status

- Steps are append-only while the route is pending or in progress
- Status only moves forward: pending -> in-progress -> completed
- Distance is derived from the steps on every read, never stored
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from . import models
from .clock import SystemClock, to_utc_naive
from .errors import InvalidState, InvalidTransition, ReferenceNotFound, RouteNotFound
from .geo import GeoPoint, validate_point
from .store import Store

logger = logging.getLogger(__name__)

StepInput = Tuple[GeoPoint, Optional[datetime]]

TRANSITIONS = {
    models.RouteStatus.PENDING: {models.RouteStatus.IN_PROGRESS},
    models.RouteStatus.IN_PROGRESS: {models.RouteStatus.COMPLETED},
    models.RouteStatus.COMPLETED: set(),
}


def _build_step(position: int, point: GeoPoint, timestamp: Optional[datetime], clock: SystemClock) -> models.RouteStep:
    point = validate_point(*point)
    if timestamp is None:
        timestamp = clock.now()
    return models.RouteStep(
        position=position,
        latitude=point.latitude,
        longitude=point.longitude,
        timestamp=to_utc_naive(timestamp),
    )


def get_route(store: Store, route_id: int) -> models.Route:
    route = store.routes.get(route_id)
    if route is None:
        raise RouteNotFound(route_id)
    return route


def list_routes(store: Store) -> List[models.Route]:
    return store.routes.list()


def create_route(
    store: Store,
    order_id: int,
    driver_id: int,
    steps: Iterable[StepInput],
    clock: SystemClock,
) -> models.Route:
    """Assign an order to a driver along the given steps"""
    # Validate every step before touching the store
    new_steps = [
        _build_step(position, point, timestamp, clock)
        for position, (point, timestamp) in enumerate(steps)
    ]

    order = store.orders.get(order_id)
    if order is None:
        raise ReferenceNotFound("order", order_id)
    if store.drivers.get(driver_id) is None:
        raise ReferenceNotFound("driver", driver_id)

    already_assigned = InvalidState(f"Order {order_id} is already assigned to a route")
    if store.routes.list(order_id=order_id, order_detached=False):
        raise already_assigned

    try:
        with store.transaction("create route"):
            route = models.Route(
                order_id=order_id,
                driver_id=driver_id,
                status=models.RouteStatus.PENDING,
                steps=new_steps,
            )
            store.routes.put(route)
            order.driver_id = driver_id
    except IntegrityError as exc:
        # A concurrent request assigned the order first
        raise already_assigned from exc

    logger.info("Route %s created for order %s, driver %s with %d steps",
                route.id, order_id, driver_id, len(new_steps))
    return route


def append_step(
    store: Store,
    route_id: int,
    point: GeoPoint,
    timestamp: Optional[datetime],
    clock: SystemClock,
) -> models.Route:
    route = get_route(store, route_id)
    if route.status == models.RouteStatus.COMPLETED:
        raise InvalidState(f"Route {route_id} is completed; steps can no longer be added")

    step = _build_step(len(route.steps), point, timestamp, clock)
    with store.transaction("append step"):
        route.steps.append(step)

    logger.info("Step %d appended to route %s", step.position, route_id)
    return route


def set_status(store: Store, route_id: int, new_status: models.RouteStatus) -> models.Route:
    route = get_route(store, route_id)
    current = route.status

    if new_status == current:
        return route
    if new_status not in TRANSITIONS[current]:
        raise InvalidTransition(route_id, current.value, new_status.value)

    with store.transaction("set route status"):
        route.status = new_status

    logger.info("Route %s moved from %s to %s", route_id, current.value, new_status.value)
    return route


def distance_traveled(store: Store, route_id: int) -> float:
    return get_route(store, route_id).distance_traveled


def delete_route(store: Store, route_id: int) -> None:
    """Remove a route; deleting one that is already gone succeeds"""
    with store.transaction("delete route"):
        removed = store.routes.delete(route_id)
    if removed:
        logger.info("Route %s deleted", route_id)
