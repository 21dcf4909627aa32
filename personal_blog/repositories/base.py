# personal_blog/repositories/base.py
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any, Generic, TypeVar, Tuple

from personal_blog.database import BlogDatabase

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Abstract base repository class defining the standard CRUD interface."""

    def __init__(self, database: BlogDatabase):
        self.database = database

    @property
    def use_postgres(self) -> bool:
        return self.database.use_postgres

    @property
    def pool(self) -> Any:
        return self.database.pool

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[T]:
        """Retrieve a single entity by its ID."""
        pass

    @abstractmethod
    async def get_all(self) -> List[T]:
        """Retrieve every entity in storage order."""
        pass

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> T:
        """Create a new entity and return it."""
        pass

    @abstractmethod
    async def update(
        self, entity_id: int, data: Dict[str, Any]
    ) -> Optional[T]:
        """Update an existing entity and return the updated version."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count stored entities."""
        pass


def build_set_clause(
    data: Dict[str, Any], columns: Tuple[str, ...], use_postgres: bool, start: int = 1
) -> Tuple[List[str], List[Any]]:
    """Build "column = placeholder" fragments for the keys of ``data`` found in ``columns``.

    Presence of a key decides whether the column is written, so an explicit
    None clears the column.
    """
    fields = []
    params = []
    param_idx = start
    for column in columns:
        if column not in data:
            continue
        if use_postgres:
            fields.append(f"{column} = ${param_idx}")
            param_idx += 1
        else:
            fields.append(f"{column} = ?")
        params.append(data[column])
    return fields, params
