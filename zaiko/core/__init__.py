from .config import settings, get_settings
from .database import engine, SessionLocal, get_db, Base, create_db_engine, create_session_factory

__all__ = [
    "settings", "get_settings",
    "engine", "SessionLocal", "get_db", "Base", "create_db_engine", "create_session_factory",
]
