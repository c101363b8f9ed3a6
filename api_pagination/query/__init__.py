"""The Queryable contract and an in-memory implementation.

The SQLite implementation lives with the rest of the storage layer
(api_pagination.storage.query).
"""

from api_pagination.query.base import Queryable
from api_pagination.query.memory import MemoryQuery

__all__ = ["Queryable", "MemoryQuery"]
