from fastapi import APIRouter, Depends, status

from .. import schemas
from .. import order_service
from ..clock import SystemClock, get_clock
from ..store import Store, get_store

router = APIRouter()

@router.post("", response_model=schemas.OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(p: schemas.CreateOrder, store: Store = Depends(get_store), clock: SystemClock = Depends(get_clock)):
    return order_service.create_order(store, p.customer_name, clock)

@router.get("", response_model=list[schemas.OrderOut])
def list_orders(store: Store = Depends(get_store)):
    return order_service.list_orders(store)

@router.get("/{order_id}", response_model=schemas.OrderOut)
def get_order(order_id: int, store: Store = Depends(get_store)):
    return order_service.get_order(store, order_id)

@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, store: Store = Depends(get_store)):
    """Delete an order; routes delivering it are flagged as detached"""
    order_service.delete_order(store, order_id)
    return None
