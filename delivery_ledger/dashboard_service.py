"""
Dashboard Aggregator - read-only projections over caller-supplied snapshots
"""

from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Sequence, Tuple

from .clock import utc_date

RECENT_DAYS = 7
DELETED_DRIVER_NAME = "<deleted>"


def recent_order_counts(orders: Sequence, reference_date) -> List[Tuple[date, int]]:
    """Orders per UTC calendar day for the 7 days ending at reference_date, oldest first"""
    end = utc_date(reference_date)
    days = [end - timedelta(days=offset) for offset in range(RECENT_DAYS - 1, -1, -1)]

    counts = Counter(utc_date(order.created_at) for order in orders if order.created_at is not None)
    return [(day, counts.get(day, 0)) for day in days]


def top_drivers(drivers: Sequence, orders: Sequence, limit: int = 5) -> List[Tuple[str, int]]:
    """
    Leaderboard of (driver name, order count), highest first.

    Ties keep the input driver order. Orders pointing at a driver missing
    from the snapshot are reported under "<deleted>" after the known
    drivers; orders with no driver are ignored.
    """
    counts: Dict[int, int] = Counter(
        order.driver_id for order in orders if order.driver_id is not None
    )

    rows = [(driver.name, counts.get(driver.id, 0)) for driver in drivers]

    known = {driver.id for driver in drivers}
    for driver_id in counts:
        if driver_id not in known:
            rows.append((DELETED_DRIVER_NAME, counts[driver_id]))

    rows.sort(key=lambda row: row[1], reverse=True)
    return rows[:max(limit, 0)]


def dashboard_summary(orders: Sequence, drivers: Sequence, routes: Sequence, reference_date, limit: int = 5) -> dict:
    return {
        "total_orders": len(orders),
        "total_drivers": len(drivers),
        "total_routes": len(routes),
        "recent_orders": recent_order_counts(orders, reference_date),
        "driver_performance": top_drivers(drivers, orders, limit),
    }
