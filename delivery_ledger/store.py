"""
Store boundary over SQLAlchemy.

Repositories return ``None`` for a definite "not found" and raise
``StoreUnavailable`` when the database itself fails. Mutations only become
visible when the surrounding ``Store.transaction`` commits, so each ledger
operation is applied atomically or not at all.
"""

import logging
from contextlib import contextmanager
from typing import Any, List, Optional

from fastapi import Depends
from sqlalchemy import update
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from .db import get_db
from .errors import StoreUnavailable
from . import models

logger = logging.getLogger(__name__)

UNAVAILABLE_ERRORS = (OperationalError, InterfaceError)


@contextmanager
def _guard(db: Session, operation: str):
    try:
        yield
    except UNAVAILABLE_ERRORS as exc:
        db.rollback()
        logger.warning("Store failure during %s: %s", operation, exc.orig)
        raise StoreUnavailable(operation, str(exc.orig)) from exc


class Repository:
    """get/list/put/delete for one entity type"""

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model
        self.name = model.__tablename__

    def get(self, ident: int) -> Optional[Any]:
        with _guard(self.db, f"get {self.name}"):
            return self.db.get(self.model, ident)

    def list(self, **criteria) -> List[Any]:
        with _guard(self.db, f"list {self.name}"):
            query = self.db.query(self.model)
            if criteria:
                query = query.filter_by(**criteria)
            return query.order_by(self.model.id).all()

    def put(self, entity):
        with _guard(self.db, f"put {self.name}"):
            self.db.add(entity)
            self.db.flush()
        return entity

    def delete(self, ident: int) -> bool:
        with _guard(self.db, f"delete {self.name}"):
            entity = self.db.get(self.model, ident)
            if entity is None:
                return False
            self.db.delete(entity)
            self.db.flush()
        return True

    def increment(self, ident: int, column: str, amount: float) -> bool:
        """Single-statement ``column = column + amount``; False if no row matched"""
        attr = getattr(self.model, column)
        with _guard(self.db, f"increment {self.name}.{column}"):
            result = self.db.execute(
                update(self.model)
                .where(self.model.id == ident)
                .values({attr: attr + amount})
                .execution_options(synchronize_session=False)
            )
        return result.rowcount > 0

    def update_where(self, values: dict, **criteria) -> int:
        with _guard(self.db, f"update {self.name}"):
            result = self.db.execute(
                update(self.model)
                .filter_by(**criteria)
                .values(values)
                .execution_options(synchronize_session=False)
            )
        return result.rowcount


class Store:
    """Order/Driver/Route store for one request"""

    def __init__(self, db: Session):
        self.db = db
        self.drivers = Repository(db, models.Driver)
        self.orders = Repository(db, models.Order)
        self.routes = Repository(db, models.Route)

    @contextmanager
    def transaction(self, operation: str):
        try:
            with _guard(self.db, operation):
                yield self
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def refresh(self, entity):
        with _guard(self.db, "refresh"):
            self.db.refresh(entity)
        return entity


def get_store(db: Session = Depends(get_db)) -> Store:
    return Store(db)
