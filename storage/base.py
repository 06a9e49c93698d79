# storage/base.py
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

# same values pymongo uses
ASCENDING = 1
DESCENDING = -1

USERS = "users"
ADMINS = "admins"
BOOKINGS = "bookings"

Record = Dict[str, Any]
Predicate = Dict[str, Any]
Sort = Sequence[Tuple[str, int]]


class StorageError(Exception):
    """Any failure coming from the backing store (connectivity, constraints, bad values)."""


class DuplicateKeyError(StorageError):
    """A unique constraint rejected the write."""


class WriteResult(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"


class AnyOf:
    """Predicate value matching a field equal to any of the alternatives."""

    def __init__(self, values: Iterable[Any]):
        self.values = list(values)

    def __eq__(self, other):
        return isinstance(other, AnyOf) and self.values == other.values

    def __repr__(self):
        return f"AnyOf({self.values!r})"


class StorageAdapter(ABC):
    """CRUD primitives shared by the document and relational backends.

    Every call is a single atomic operation against the store. Records are
    returned as plain dicts with the generated identity under ``id``.
    """

    format_dates: bool = False

    @abstractmethod
    def connect(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def find_one(self, collection: str, predicate: Predicate) -> Optional[Record]: ...

    @abstractmethod
    def find_many(self, collection: str, predicate: Optional[Predicate] = None,
                  sort: Optional[Sort] = None) -> List[Record]: ...

    @abstractmethod
    def insert(self, collection: str, fields: Record) -> Any: ...

    @abstractmethod
    def update(self, collection: str, id: Any, fields: Record) -> WriteResult: ...

    def patch_field(self, collection: str, id: Any, field: str, value: Any) -> WriteResult:
        return self.update(collection, id, {field: value})

    @abstractmethod
    def delete(self, collection: str, id: Any) -> WriteResult: ...
