from pydantic import BaseModel, Field, EmailStr
from typing import Optional, List
from datetime import date, datetime
from .models import DriverStatus, RouteStatus


# ============================================================================
# Driver Schemas
# ============================================================================

class CreateDriver(BaseModel):
    """Driver registration"""
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=20)
    vehicle_type: str = Field(..., min_length=2, max_length=100)


class UpdateDriver(BaseModel):
    """Profile edits and/or status toggle"""
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=7, max_length=20)
    vehicle_type: Optional[str] = Field(None, min_length=2, max_length=100)
    status: Optional[DriverStatus] = None


class OnlineTimeUpdate(BaseModel):
    # Range is checked by the ledger so the rejection carries InvalidAmount
    online_time: float


class DriverOut(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    vehicle_type: str
    status: DriverStatus
    online_time: float
    created_at: datetime
    class Config:
        from_attributes = True


class PaymentQuote(BaseModel):
    """Freshly computed, never persisted"""
    driver_id: int
    completed_orders: int
    total_distance: float
    total_online_time: float
    total_payment: float


# ============================================================================
# Order Schemas
# ============================================================================

class CreateOrder(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=255)


class OrderOut(BaseModel):
    id: int
    customer_name: str
    driver_id: Optional[int]
    created_at: datetime
    class Config:
        from_attributes = True


# ============================================================================
# Route Schemas
# ============================================================================

class Location(BaseModel):
    latitude: float
    longitude: float


class StepIn(BaseModel):
    location: Location
    timestamp: Optional[datetime] = None  # Stamped by the server clock when omitted


class StepOut(BaseModel):
    location: Location
    timestamp: datetime


class CreateRoute(BaseModel):
    order_id: int
    driver_id: int
    steps: List[StepIn] = []


class UpdateRouteStatus(BaseModel):
    status: RouteStatus


class RouteOut(BaseModel):
    id: int
    order_id: int
    driver_id: int
    status: RouteStatus
    distance_traveled: float
    order_detached: bool
    driver_detached: bool
    steps: List[StepOut]
    created_at: datetime


class RouteDistance(BaseModel):
    route_id: int
    distance_traveled: float


# ============================================================================
# Dashboard Schemas
# ============================================================================

class DailyOrderCount(BaseModel):
    date: date
    count: int


class DriverPerformance(BaseModel):
    name: str
    completed_orders: int


class DashboardOut(BaseModel):
    total_orders: int
    total_drivers: int
    total_routes: int
    recent_orders: List[DailyOrderCount]
    driver_performance: List[DriverPerformance]
