import logging
from typing import List

from . import models
from .clock import SystemClock, to_utc_naive
from .errors import OrderNotFound
from .store import Store

logger = logging.getLogger(__name__)


def get_order(store: Store, order_id: int) -> models.Order:
    order = store.orders.get(order_id)
    if order is None:
        raise OrderNotFound(order_id)
    return order


def list_orders(store: Store) -> List[models.Order]:
    return store.orders.list()


def create_order(store: Store, customer_name: str, clock: SystemClock) -> models.Order:
    with store.transaction("create order"):
        order = store.orders.put(models.Order(
            customer_name=customer_name,
            created_at=to_utc_naive(clock.now()),
        ))
    logger.info("Order %s created", order.id)
    return order


def delete_order(store: Store, order_id: int) -> int:
    """Delete an order and flag the routes delivering it as detached"""
    get_order(store, order_id)
    with store.transaction("delete order"):
        detached = store.routes.update_where({"order_detached": True}, order_id=order_id)
        store.orders.delete(order_id)

    logger.info("Order %s deleted, %d routes detached", order_id, detached)
    return detached
