from sqlalchemy import Column, Integer, Float, String, Boolean, DateTime, ForeignKey, Index, text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from .db import Base
from .geo import GeoPoint, path_length


# Enums
class DriverStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class RouteStatus(str, enum.Enum):
    PENDING = "pending"  # Order assigned, not started
    IN_PROGRESS = "in-progress"  # Driver on the road
    COMPLETED = "completed"  # Terminal, counts towards payment


# Models
class Driver(Base):
    """Driver profile and online-time accumulator"""
    __tablename__ = "drivers"
    # Ids are never reused, so detached routes cannot point at a newer driver
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    vehicle_type = Column(String(100), nullable=False)

    status = Column(SQLEnum(DriverStatus), default=DriverStatus.ACTIVE, index=True)
    online_time = Column(Float, nullable=False, default=0.0)  # Hours, never negative

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255), nullable=False)
    # Back-reference set when a route assigns the order; may dangle after driver deletion
    driver_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class Route(Base):
    """Ordered path of steps delivering one order with one driver"""
    __tablename__ = "routes"
    __table_args__ = (
        # At most one live route per order
        Index(
            "uq_routes_live_order",
            "order_id",
            unique=True,
            sqlite_where=text("order_detached = 0"),
            postgresql_where=text("order_detached = false"),
        ),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    # Back-references, not foreign keys: they survive deletion of the target
    order_id = Column(Integer, nullable=False, index=True)
    driver_id = Column(Integer, nullable=False, index=True)
    order_detached = Column(Boolean, default=False)
    driver_detached = Column(Boolean, default=False)

    status = Column(SQLEnum(RouteStatus), default=RouteStatus.PENDING, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    steps = relationship(
        "RouteStep",
        back_populates="route",
        order_by="RouteStep.position",
        cascade="all, delete-orphan",
    )

    @property
    def distance_traveled(self) -> float:
        """Kilometers along the steps, derived on every read"""
        return path_length(step.point for step in self.steps)


class RouteStep(Base):
    """Timestamped waypoint; immutable once appended"""
    __tablename__ = "route_steps"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # Append order, authoritative
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    timestamp = Column(DateTime, nullable=False)  # UTC

    route = relationship("Route", back_populates="steps")

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)
