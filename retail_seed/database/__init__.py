"""
Database Module
"""
from .connection import init_database, close_database, create_schema, get_db
from .gateway import PersistenceGateway
from .models import Base

__all__ = [
    "init_database",
    "close_database",
    "create_schema",
    "get_db",
    "PersistenceGateway",
    "Base",
]
