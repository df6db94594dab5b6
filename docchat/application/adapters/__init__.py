"""Adapters implementing the core's repository interfaces over SQLAlchemy."""

from docchat.application.adapters.sql_message_history import SqlMessageHistory
from docchat.application.adapters.sql_source_repository import SqlSourceRepository

__all__ = ["SqlMessageHistory", "SqlSourceRepository"]
