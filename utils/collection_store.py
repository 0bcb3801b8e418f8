"""
Collection-style storage over SQLAlchemy models.

Services never touch the session directly; they receive one store per
collection (users, verification codes, missions, ...) and only use the
get/put/query/update/delete capabilities below. Tests and alternative
backends can provide anything implementing CollectionStore.
"""
import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, Type, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log

from utils.logger_factory import new_logger

T = TypeVar("T")

store_retry_logger = new_logger("collection_store_retry")


class StoreError(Exception):
    """The backing store failed (unreachable, or still failing after retries)."""

    def __init__(self, operation: str, collection: str):
        super().__init__(f"{operation} failed on collection '{collection}'")
        self.operation = operation
        self.collection = collection


class StoreConflictError(Exception):
    """A write collided with a unique constraint (duplicate email, already linked Google id, ...)."""

    def __init__(self, operation: str, collection: str):
        super().__init__(f"{operation} conflicts with an existing record in collection '{collection}'")
        self.operation = operation
        self.collection = collection


class CollectionStore(Protocol[T]):
    def get(self, record_id: Any) -> Optional[T]:
        ...

    def put(self, record: T) -> T:
        ...

    def query(self, filters: Optional[Dict[str, Any]] = None, order_by: Optional[str] = None,
              descending: bool = False, limit: Optional[int] = None) -> List[T]:
        ...

    def update(self, record_id: Any, **values) -> Optional[T]:
        ...

    def update_where(self, filters: Dict[str, Any], values: Dict[str, Any]) -> int:
        ...

    def delete(self, record_id: Any) -> bool:
        ...

    def delete_where(self, filters: Dict[str, Any]) -> int:
        ...

    def replace_where(self, filters: Dict[str, Any], record: T) -> T:
        ...


class SqlCollectionStore(Generic[T]):
    """CollectionStore backed by one SQLAlchemy model/table. Every write commits on its own."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.collection = model.__tablename__

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(OperationalError),
        before_sleep=before_sleep_log(store_retry_logger, logging.WARNING),
        reraise=True,
    )
    def _with_retry(self, action: Callable[[], Any]) -> Any:
        try:
            return action()
        except OperationalError:
            self.db.rollback()
            raise

    def _run(self, operation: str, action: Callable[[], Any]) -> Any:
        try:
            return self._with_retry(action)
        except IntegrityError as e:
            self.db.rollback()
            log = new_logger(operation)
            log.warning(f"Constraint violation on [{self.collection}]: {e.orig}")
            raise StoreConflictError(operation, self.collection) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            log = new_logger(operation)
            log.exception(f"Store operation failed on [{self.collection}]: {e}")
            raise StoreError(operation, self.collection) from e

    def _filtered(self, filters: Optional[Dict[str, Any]]):
        q = self.db.query(self.model)
        if filters:
            q = q.filter_by(**filters)
        return q

    def get(self, record_id: Any) -> Optional[T]:
        return self._run("get", lambda: self.db.get(self.model, record_id))

    def put(self, record: T) -> T:
        def action():
            merged = self.db.merge(record)
            self.db.commit()
            self.db.refresh(merged)
            return merged
        return self._run("put", action)

    def query(self, filters: Optional[Dict[str, Any]] = None, order_by: Optional[str] = None,
              descending: bool = False, limit: Optional[int] = None) -> List[T]:
        def action():
            q = self._filtered(filters)
            if order_by:
                column = getattr(self.model, order_by)
                q = q.order_by(column.desc() if descending else column.asc())
            if limit is not None:
                q = q.limit(limit)
            return q.all()
        return self._run("query", action)

    def update(self, record_id: Any, **values) -> Optional[T]:
        def action():
            record = self.db.get(self.model, record_id)
            if record is None:
                return None
            for field, value in values.items():
                setattr(record, field, value)
            self.db.commit()
            self.db.refresh(record)
            return record
        return self._run("update", action)

    def update_where(self, filters: Dict[str, Any], values: Dict[str, Any]) -> int:
        """Conditional update; the returned row count tells the caller whether the condition still held."""
        def action():
            count = self._filtered(filters).update(values, synchronize_session="fetch")
            self.db.commit()
            return count
        return self._run("update_where", action)

    def delete(self, record_id: Any) -> bool:
        def action():
            record = self.db.get(self.model, record_id)
            if record is None:
                return False
            self.db.delete(record)
            self.db.commit()
            return True
        return self._run("delete", action)

    def delete_where(self, filters: Dict[str, Any]) -> int:
        def action():
            count = self._filtered(filters).delete(synchronize_session="fetch")
            self.db.commit()
            return count
        return self._run("delete_where", action)

    def replace_where(self, filters: Dict[str, Any], record: T) -> T:
        """Delete every record matching filters and insert record, in a single transaction."""
        def action():
            self._filtered(filters).delete(synchronize_session="fetch")
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
            return record
        return self._run("replace_where", action)
