from fastapi import APIRouter, Depends, status
from typing import List

from .. import models, schemas
from .. import route_service
from ..clock import SystemClock, get_clock
from ..geo import GeoPoint
from ..store import Store, get_store


router = APIRouter()


def route_out(route: models.Route) -> schemas.RouteOut:
    return schemas.RouteOut(
        id=route.id,
        order_id=route.order_id,
        driver_id=route.driver_id,
        status=route.status,
        distance_traveled=route.distance_traveled,
        order_detached=bool(route.order_detached),
        driver_detached=bool(route.driver_detached),
        steps=[
            schemas.StepOut(
                location=schemas.Location(latitude=s.latitude, longitude=s.longitude),
                timestamp=s.timestamp,
            )
            for s in route.steps
        ],
        created_at=route.created_at,
    )


def _step_input(step: schemas.StepIn):
    return GeoPoint(step.location.latitude, step.location.longitude), step.timestamp


@router.post("", response_model=schemas.RouteOut, status_code=status.HTTP_201_CREATED)
def create_route(
    payload: schemas.CreateRoute,
    store: Store = Depends(get_store),
    clock: SystemClock = Depends(get_clock),
):
    """Assign an order to a driver along the picked steps"""
    route = route_service.create_route(
        store,
        payload.order_id,
        payload.driver_id,
        [_step_input(s) for s in payload.steps],
        clock,
    )
    return route_out(route)


@router.get("", response_model=List[schemas.RouteOut])
def list_routes(store: Store = Depends(get_store)):
    return [route_out(r) for r in route_service.list_routes(store)]


@router.get("/{route_id}", response_model=schemas.RouteOut)
def get_route(route_id: int, store: Store = Depends(get_store)):
    return route_out(route_service.get_route(store, route_id))


@router.put("/{route_id}", response_model=schemas.RouteOut)
def update_route_status(route_id: int, payload: schemas.UpdateRouteStatus, store: Store = Depends(get_store)):
    return route_out(route_service.set_status(store, route_id, payload.status))


@router.post("/{route_id}/steps", response_model=schemas.RouteOut)
def append_step(
    route_id: int,
    payload: schemas.StepIn,
    store: Store = Depends(get_store),
    clock: SystemClock = Depends(get_clock),
):
    point, timestamp = _step_input(payload)
    return route_out(route_service.append_step(store, route_id, point, timestamp, clock))


@router.get("/{route_id}/distance", response_model=schemas.RouteDistance)
def get_distance(route_id: int, store: Store = Depends(get_store)):
    return schemas.RouteDistance(
        route_id=route_id,
        distance_traveled=route_service.distance_traveled(store, route_id),
    )


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_route(route_id: int, store: Store = Depends(get_store)):
    """Idempotent: deleting a missing route also returns 204"""
    route_service.delete_route(store, route_id)
    return None
