"""
Database utility functions.

Turns on SQLite foreign-key enforcement for every new connection so
dangling coach, roster and game references are rejected by the store.
"""

import sqlite3

from sqlalchemy import event
from sqlalchemy.engine import Engine

_listener_installed = False


def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def enable_sqlite_foreign_keys() -> None:
    """Install the connect listener once per process."""
    global _listener_installed
    if _listener_installed:
        return
    event.listen(Engine, 'connect', _set_sqlite_pragma)
    _listener_installed = True
