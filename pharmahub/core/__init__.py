"""Core app configuration, database access and security."""

from pharmahub.core.config import get_settings, settings
from pharmahub.core.database import Database, SqlExecutor, get_db

__all__ = ["Database", "SqlExecutor", "get_settings", "settings", "get_db"]
