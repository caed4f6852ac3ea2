"""Storage of scheduled recordings."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any, Sequence

from .database import Database, DBQueryError
from .records import RecordingInfos, RecordingStatus

SQLITE_FORMAT_DATETIME = "%Y-%m-%d %H:%M:%S"
SQLITE_FORMAT_DATETIME00 = "%Y-%m-%d %H:%M:00"

_MICROSECONDS = 1_000_000


def time_to_string(value: int, fmt: str = SQLITE_FORMAT_DATETIME) -> str:
    """Format a time in microseconds since the epoch as local time."""
    return datetime.fromtimestamp(value / _MICROSECONDS).strftime(fmt)


def string_to_time(text: str | None, fmt: str = SQLITE_FORMAT_DATETIME) -> int:
    """Parse a local time string into microseconds since the epoch; 0 for None."""
    if text is None:
        return 0
    return int(datetime.strptime(text, fmt).timestamp()) * _MICROSECONDS


class RecordingStore:
    """Reads and writes recordings.

    Begin and end times are microseconds since the epoch, stored as local
    times truncated to the minute.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    def _execute(
        self, query: str, params: Sequence[Any], message: str
    ) -> sqlite3.Cursor:
        try:
            return self.database.connection.execute(query, params)
        except sqlite3.Error as exc:
            raise DBQueryError(
                f"{message}\n\nSQLite has returned error:\n{exc}."
            ) from exc

    def add_recording(self, recording: RecordingInfos) -> None:
        """Store the recording without a file name and set its id."""
        channel_id = None if recording.channel_id == -1 else str(recording.channel_id)
        cursor = self._execute(
            "INSERT INTO recording "
            "(title, status, begin_date, end_date, filename, channel_id) "
            "VALUES (?, ?, ?, ?, ?, ?);",
            (
                recording.title,
                int(recording.status),
                time_to_string(recording.begin_time, SQLITE_FORMAT_DATETIME00),
                time_to_string(recording.end_time, SQLITE_FORMAT_DATETIME00),
                None,
                channel_id,
            ),
            f"Error when adding the recording '{recording.title}'.",
        )
        if cursor.lastrowid is not None:
            recording.id = cursor.lastrowid

    def select_recordings(self) -> list[RecordingInfos]:
        """Return every recording ordered by begin date."""
        cursor = self._execute(
            "SELECT id, title, status, begin_date, end_date, filename, channel_id "
            "FROM recording ORDER BY begin_date",
            (),
            "Error when displaying the channels.",
        )
        return [
            RecordingInfos(
                title=title,
                begin_time=string_to_time(begin),
                end_time=string_to_time(end),
                channel_id=int(channel_id) if channel_id is not None else 0,
                id=rec_id if rec_id is not None else 0,
                status=RecordingStatus(int(status or 0)),
                filename=filename,
            )
            for rec_id, title, status, begin, end, filename, channel_id in cursor
        ]

    def update_recording(self, recording: RecordingInfos) -> None:
        """Store the status and file name of the recording."""
        self._execute(
            "UPDATE recording SET status=?, filename=? WHERE id=?",
            (int(recording.status), recording.filename, recording.id),
            "Error when updating the status of the recording "
            f'"{recording.title}".',
        )

    def delete_recording(self, recording: RecordingInfos) -> None:
        """Delete the recording."""
        self._execute(
            "DELETE FROM recording WHERE id=?",
            (recording.id,),
            f'Error when deleting the recording "{recording.title}".',
        )