from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from .. import schemas
from .. import dashboard_service
from ..clock import SystemClock, get_clock, utc_date
from ..core.settings import settings
from ..store import Store, get_store


router = APIRouter()


def _reference_date(reference_date: Optional[date], clock: SystemClock) -> date:
    return reference_date or utc_date(clock.now())


@router.get("", response_model=schemas.DashboardOut)
def get_dashboard(
    reference_date: Optional[date] = None,
    store: Store = Depends(get_store),
    clock: SystemClock = Depends(get_clock),
):
    """Totals, 7-day order histogram and driver leaderboard"""
    # One snapshot per collection; concurrent mutations show up on the next refresh
    orders = store.orders.list()
    drivers = store.drivers.list()
    routes = store.routes.list()

    summary = dashboard_service.dashboard_summary(
        orders, drivers, routes,
        _reference_date(reference_date, clock),
        settings.TOP_DRIVERS_LIMIT,
    )
    return schemas.DashboardOut(
        total_orders=summary["total_orders"],
        total_drivers=summary["total_drivers"],
        total_routes=summary["total_routes"],
        recent_orders=[schemas.DailyOrderCount(date=d, count=c) for d, c in summary["recent_orders"]],
        driver_performance=[
            schemas.DriverPerformance(name=n, completed_orders=c) for n, c in summary["driver_performance"]
        ],
    )


@router.get("/recent-orders", response_model=List[schemas.DailyOrderCount])
def get_recent_orders(
    reference_date: Optional[date] = None,
    store: Store = Depends(get_store),
    clock: SystemClock = Depends(get_clock),
):
    counts = dashboard_service.recent_order_counts(
        store.orders.list(), _reference_date(reference_date, clock)
    )
    return [schemas.DailyOrderCount(date=d, count=c) for d, c in counts]


@router.get("/top-drivers", response_model=List[schemas.DriverPerformance])
def get_top_drivers(
    limit: int = Query(settings.TOP_DRIVERS_LIMIT, ge=1, le=100),
    store: Store = Depends(get_store),
):
    leaders = dashboard_service.top_drivers(store.drivers.list(), store.orders.list(), limit)
    return [schemas.DriverPerformance(name=n, completed_orders=c) for n, c in leaders]
