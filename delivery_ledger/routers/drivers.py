from fastapi import APIRouter, Depends, status
from typing import List

from .. import schemas
from .. import driver_service, payment_service
from ..store import Store, get_store


router = APIRouter()


# ============================================================================
# Driver Profile Endpoints
# ============================================================================

@router.post("", response_model=schemas.DriverOut, status_code=status.HTTP_201_CREATED)
def create_driver(payload: schemas.CreateDriver, store: Store = Depends(get_store)):
    """Register a new driver (active, no online time)"""
    return driver_service.register_driver(store, **payload.model_dump())


@router.get("", response_model=List[schemas.DriverOut])
def list_drivers(store: Store = Depends(get_store)):
    return driver_service.list_drivers(store)


@router.get("/{driver_id}", response_model=schemas.DriverOut)
def get_driver(driver_id: int, store: Store = Depends(get_store)):
    return driver_service.get_driver(store, driver_id)


@router.put("/{driver_id}", response_model=schemas.DriverOut)
def update_driver(driver_id: int, payload: schemas.UpdateDriver, store: Store = Depends(get_store)):
    """Update profile fields and/or toggle status"""
    fields = payload.model_dump(exclude_unset=True)
    new_status = fields.pop("status", None)

    driver = driver_service.get_driver(store, driver_id)
    if fields:
        driver = driver_service.update_profile(store, driver_id, **fields)
    if new_status is not None:
        driver = driver_service.set_status(store, driver_id, new_status)
    return driver


@router.delete("/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_driver(driver_id: int, store: Store = Depends(get_store)):
    """Delete driver; its routes are kept and flagged as detached"""
    driver_service.delete_driver(store, driver_id)
    return None


# ============================================================================
# Online Time & Payment Endpoints
# ============================================================================

@router.patch("/{driver_id}/online-time", response_model=schemas.DriverOut)
def add_online_time(driver_id: int, payload: schemas.OnlineTimeUpdate, store: Store = Depends(get_store)):
    """Add hours to the driver's online time"""
    return driver_service.add_online_time(store, driver_id, payload.online_time)


@router.post("/{driver_id}/online-time/reset", response_model=schemas.DriverOut)
def reset_online_time(driver_id: int, store: Store = Depends(get_store)):
    return driver_service.reset_online_time(store, driver_id)


@router.get("/{driver_id}/payment", response_model=schemas.PaymentQuote)
def get_payment(
    driver_id: int,
    store: Store = Depends(get_store),
    rates: payment_service.PaymentRates = Depends(payment_service.load_payment_rates),
):
    """Quote the driver's payment from current ledger state"""
    return payment_service.quote(store, driver_id, rates)
