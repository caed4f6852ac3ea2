"""Connection to the SQLite database that holds channels, groups and recordings."""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from types import TracebackType

logger = logging.getLogger(__name__)

FIRST_DB_VERSION = "0.1.0.1"
DB_DIR_NAME = "FreetuxTV"
DB_FILE_NAME = "freetuxtv.db"

_SQLITE_ERROR = 1


class DBSyncError(Exception):
    """Base class of database errors."""


class DBOpenError(DBSyncError):
    """Raised when the database cannot be opened."""


class DBQueryError(DBSyncError):
    """Raised when a query on the database fails."""


def default_db_path(config_dir: str | Path) -> Path:
    """Return the location of the database inside a user configuration directory."""
    return Path(config_dir) / DB_DIR_NAME / DB_FILE_NAME


def db_exists(path: str | Path) -> bool:
    """Return True if the database file exists as a regular file."""
    return Path(path).is_file()


def _version_parts(version: str) -> tuple[int, int, int, int]:
    parts: list[int] = []
    for piece in version.split(".")[:4]:
        match = re.match(r"\s*[+-]?\d+", piece)
        if match is None:
            break
        parts.append(int(match.group()))
    parts.extend([0] * (4 - len(parts)))
    return parts[0], parts[1], parts[2], parts[3]


def compare_db_version(version1: str, version2: str) -> int:
    """Compare two dotted four-part versions; return -1, 0 or 1."""
    first = _version_parts(version1)
    second = _version_parts(version2)
    return (first > second) - (first < second)


class Database:
    """An SQLite database, opened on demand and usable as a context manager."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """The open connection; raises DBSyncError when the database is closed."""
        if self._connection is None:
            raise DBSyncError("The database is not open.")
        return self._connection

    def open(self) -> None:
        """Open the database, creating its directory when missing."""
        if self._connection is not None:
            return
        directory = self.path.parent
        if not directory.exists():
            try:
                directory.mkdir(mode=0o744, parents=True)
                logger.info("Directory created: %s", directory)
            except OSError:
                logger.critical("Cannot create directory: %s", directory)

        logger.info("DBSync open database")
        try:
            self._connection = sqlite3.connect(str(self.path), isolation_level=None)
        except sqlite3.Error as exc:
            raise DBOpenError(
                f"Cannot open database.\n\nSQLite has returned error:\n{exc}."
            ) from exc

    def close(self) -> None:
        """Close the database if it is open."""
        if self._connection is None:
            return
        logger.info("DBSync close database")
        self._connection.close()
        self._connection = None

    def __enter__(self) -> Database:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def exec_query(self, query: str) -> bool:
        """Run one or more SQL statements used to migrate the database."""
        try:
            self.connection.executescript(query)
        except sqlite3.Error as exc:
            raise DBQueryError(
                f"Error when migrating the database.\n\nSQLite has returned error:\n{exc}."
            ) from exc
        return True

    def current_db_version(self) -> str | None:
        """Return the version recorded in the config table, or the first version."""
        try:
            row = self.connection.execute(
                "SELECT dbversion FROM config WHERE id=1"
            ).fetchone()
        except sqlite3.OperationalError as exc:
            if getattr(exc, "sqlite_errorcode", _SQLITE_ERROR) == _SQLITE_ERROR:
                return FIRST_DB_VERSION
            raise self._version_error(exc) from exc
        except sqlite3.Error as exc:
            raise self._version_error(exc) from exc
        if row is None:
            return FIRST_DB_VERSION
        return None if row[0] is None else str(row[0])

    def set_db_version(self, version: str) -> None:
        """Record the database version, except for the first version."""
        if compare_db_version(version, FIRST_DB_VERSION) == 0:
            return
        try:
            self.connection.execute(
                "REPLACE INTO config (id, dbversion) VALUES (1, ?);", (version,)
            )
        except sqlite3.Error as exc:
            raise DBQueryError(
                "Error when updating the database version.\n\n"
                f"SQLite has returned error:\n{exc}."
            ) from exc

    @staticmethod
    def _version_error(exc: sqlite3.Error) -> DBQueryError:
        return DBQueryError(
            "Error when getting the database version.\n\n"
            f"SQLite has returned error:\n{exc}."
        )