"""
Driver Accounting Ledger - profile, status and the online-time accumulator
"""

import logging
import math
from typing import List, Optional

from . import models
from .errors import DriverNotFound, InvalidAmount, InvalidState
from .store import Store

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "email", "phone", "vehicle_type")


def get_driver(store: Store, driver_id: int) -> models.Driver:
    driver = store.drivers.get(driver_id)
    if driver is None:
        raise DriverNotFound(driver_id)
    return driver


def list_drivers(store: Store) -> List[models.Driver]:
    return store.drivers.list()


def _ensure_email_free(store: Store, email: str, driver_id: Optional[int] = None) -> None:
    for existing in store.drivers.list(email=email):
        if existing.id != driver_id:
            raise InvalidState(f"Email {email} already registered")


def register_driver(store: Store, name: str, email: str, phone: str, vehicle_type: str) -> models.Driver:
    _ensure_email_free(store, email)
    with store.transaction("register driver"):
        driver = store.drivers.put(models.Driver(
            name=name,
            email=email,
            phone=phone,
            vehicle_type=vehicle_type,
            status=models.DriverStatus.ACTIVE,
            online_time=0.0,
        ))
    logger.info("Driver %s registered", driver.id)
    return driver


def update_profile(store: Store, driver_id: int, **fields) -> models.Driver:
    driver = get_driver(store, driver_id)
    changes = {k: v for k, v in fields.items() if k in PROFILE_FIELDS and v is not None}
    if "email" in changes:
        _ensure_email_free(store, changes["email"], driver_id)

    with store.transaction("update driver"):
        for field, value in changes.items():
            setattr(driver, field, value)
    return driver


def set_status(store: Store, driver_id: int, status: models.DriverStatus) -> models.Driver:
    """Drivers toggle freely between active and inactive"""
    driver = get_driver(store, driver_id)
    with store.transaction("set driver status"):
        driver.status = status
    logger.info("Driver %s is now %s", driver_id, status.value)
    return driver


def add_online_time(store: Store, driver_id: int, hours: float) -> models.Driver:
    """Accumulate hours onto the driver's online time"""
    if not math.isfinite(hours) or hours <= 0:
        raise InvalidAmount(hours)

    with store.transaction("add online time"):
        if not store.drivers.increment(driver_id, "online_time", hours):
            raise DriverNotFound(driver_id)

    driver = store.refresh(get_driver(store, driver_id))
    logger.info("Driver %s online time +%.2fh = %.2fh", driver_id, hours, driver.online_time)
    return driver


def reset_online_time(store: Store, driver_id: int) -> models.Driver:
    driver = get_driver(store, driver_id)
    with store.transaction("reset online time"):
        driver.online_time = 0.0
    logger.info("Driver %s online time reset", driver_id)
    return driver


def delete_driver(store: Store, driver_id: int) -> int:
    """
    Delete a driver and detach the routes that reference it.

    Routes keep their driver_id so payment history can still be audited;
    they are flagged as detached instead. Returns the number of routes
    detached.
    """
    get_driver(store, driver_id)
    with store.transaction("delete driver"):
        detached = store.routes.update_where({"driver_detached": True}, driver_id=driver_id)
        store.drivers.delete(driver_id)

    logger.info("Driver %s deleted, %d routes detached", driver_id, detached)
    return detached
