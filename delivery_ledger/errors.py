"""
Error taxonomy for the route/payment ledgers.

Every error carries the offending id or value so the dashboard can render
a message without a second lookup. Nothing here is recovered internally;
``main.py`` maps each class onto an HTTP status.
"""

from fastapi import status


class LedgerError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidCoordinate(LedgerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, field: str, value: float):
        super().__init__(f"Invalid {field}: {value}")
        self.field = field
        self.value = value


class ReferenceNotFound(LedgerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, kind: str, ref_id: int):
        super().__init__(f"{kind.capitalize()} {ref_id} does not exist")
        self.kind = kind
        self.ref_id = ref_id


class InvalidState(LedgerError):
    status_code = status.HTTP_409_CONFLICT


class InvalidTransition(LedgerError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, route_id: int, current: str, requested: str):
        super().__init__(f"Route {route_id} cannot move from {current} to {requested}")
        self.route_id = route_id
        self.current = current
        self.requested = requested


class InvalidAmount(LedgerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, value: float):
        super().__init__(f"Online time must be a positive number of hours, got {value}")
        self.value = value


class DriverNotFound(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, driver_id: int):
        super().__init__(f"Driver {driver_id} not found")
        self.driver_id = driver_id


class RouteNotFound(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, route_id: int):
        super().__init__(f"Route {route_id} not found")
        self.route_id = route_id


class OrderNotFound(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class StoreUnavailable(LedgerError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Store unavailable during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
