"""
Payment Calculator

totalPayment = per_order * completed_orders
             + per_kilometer * total_distance
             + per_hour * total_online_time

Inputs are read from the ledgers on every call and rates are reloaded from
configuration for every quote, so nothing here is cached between requests.
"""

from typing import List

from pydantic import BaseModel, Field

from . import models
from .core.settings import Settings
from .driver_service import get_driver
from .schemas import PaymentQuote
from .store import Store


class PaymentRates(BaseModel):
    per_order: float = Field(..., ge=0)
    per_kilometer: float = Field(..., ge=0)
    per_hour: float = Field(..., ge=0)


def load_payment_rates() -> PaymentRates:
    """Fresh read of the rate table (environment and .env)"""
    current = Settings()
    return PaymentRates(
        per_order=current.PAY_PER_ORDER,
        per_kilometer=current.PAY_PER_KILOMETER,
        per_hour=current.PAY_PER_HOUR,
    )


def calculate_payment(completed_orders: int, total_distance: float, total_online_time: float, rates: PaymentRates) -> float:
    amount = (
        completed_orders * rates.per_order +
        total_distance * rates.per_kilometer +
        total_online_time * rates.per_hour
    )
    return round(amount, 2)


def completed_routes(store: Store, driver_id: int) -> List[models.Route]:
    return store.routes.list(
        driver_id=driver_id,
        driver_detached=False,
        status=models.RouteStatus.COMPLETED,
    )


def quote(store: Store, driver_id: int, rates: PaymentRates) -> PaymentQuote:
    driver = get_driver(store, driver_id)
    routes = completed_routes(store, driver_id)

    completed_orders = len(routes)
    total_distance = sum(route.distance_traveled for route in routes)
    total_online_time = driver.online_time or 0.0

    return PaymentQuote(
        driver_id=driver_id,
        completed_orders=completed_orders,
        total_distance=total_distance,
        total_online_time=total_online_time,
        total_payment=calculate_payment(completed_orders, total_distance, total_online_time, rates),
    )
