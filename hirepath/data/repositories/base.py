"""
MongoDB repository plumbing shared by the job, candidate and application stores.

Driver failures and timeouts surface as ``StorageUnavailable`` so callers
never see raw PyMongo exceptions.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Generic, Iterator, Optional, TypeVar

from bson import ObjectId
from pydantic import BaseModel
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, ExecutionTimeout, WTimeoutError

from hirepath.core.errors import StorageUnavailable
from hirepath.data.database import DatabaseManager, get_database_manager
from hirepath.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

# NetworkTimeout and ServerSelectionTimeoutError are ConnectionFailure subclasses
STORAGE_ERRORS = (ConnectionFailure, ExecutionTimeout, WTimeoutError)


@contextmanager
def storage_guard(operation: str, **context: Any) -> Iterator[None]:
    """Translate driver failures into ``StorageUnavailable``."""
    try:
        yield
    except STORAGE_ERRORS as e:
        logger.warning(f"Storage call '{operation}' failed: {e}")
        raise StorageUnavailable(
            f"Storage unavailable during {operation}: {e}",
            **context,
        ) from e


class BaseRepository(ABC, Generic[T]):
    """Typed reads over one collection; subclasses name the collection and model."""

    @property
    @abstractmethod
    def collection_name(self) -> str: ...

    @property
    @abstractmethod
    def model_class(self) -> type[T]: ...

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        self._db_manager = db_manager or get_database_manager()

    @property
    def collection(self) -> Collection:
        return self._db_manager.collection(self.collection_name)

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        if document is None:
            return None
        return self.model_class.model_validate(document)

    @staticmethod
    def _id_query(id_value: str | ObjectId) -> dict[str, Any]:
        """Match an ``_id`` stored either as a string or as an ObjectId."""
        if isinstance(id_value, ObjectId):
            return {"_id": id_value}
        if ObjectId.is_valid(id_value):
            return {"_id": {"$in": [id_value, ObjectId(id_value)]}}
        return {"_id": id_value}

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        with storage_guard(f"{self.collection_name}.get_by_id"):
            document = self.collection.find_one(self._id_query(id_value))
        return self._to_model(document)

    def find_one(
        self,
        query: dict[str, Any],
        sort: Optional[list[tuple[str, int]]] = None,
    ) -> Optional[T]:
        with storage_guard(f"{self.collection_name}.find_one"):
            document = self.collection.find_one(query, sort=sort)
        return self._to_model(document)

    def find_many(
        self,
        query: dict[str, Any],
        sort: Optional[list[tuple[str, int]]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[T]:
        """All matches in ``sort`` order; ``limit=0`` means no limit."""
        cursor = self.collection.find(query, sort=sort, skip=skip, limit=limit)
        with storage_guard(f"{self.collection_name}.find"):
            documents = list(cursor)
        return [self._to_model(doc) for doc in documents]
