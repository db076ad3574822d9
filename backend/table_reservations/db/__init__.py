from table_reservations.db.base import Base
from table_reservations.db.session import get_db, engine, SessionLocal
from table_reservations.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "ALL_TABLE_NAMES"]
