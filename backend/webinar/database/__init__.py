"""
Database module - MongoDB connection and the registrations store.
"""
from webinar.database.connections import (
    get_mongo_client,
    open_registration_store,
    check_registration_store,
    close_connections,
)

__all__ = [
    "get_mongo_client",
    "open_registration_store",
    "check_registration_store",
    "close_connections",
]
