from api_pagination.storage.models import Item
from api_pagination.storage.connection import get_connection, close_connection
from api_pagination.storage.schema import initialize_database
from api_pagination.storage.query import SqliteQuery
from api_pagination.storage.item_store import ItemStore

__all__ = [
    "Item",
    "get_connection",
    "close_connection",
    "initialize_database",
    "SqliteQuery",
    "ItemStore",
]
