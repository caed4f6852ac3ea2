"""Storage of known TV channels and of the labels they go by."""

from __future__ import annotations

import sqlite3
from typing import Any, Sequence

from .database import Database, DBQueryError
from .records import TvChannelInfos


class TvChannelStore:
    """Reads and writes TV channels and links them to the channels they name."""

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

    def delete_tvchannels(self) -> None:
        """Delete every TV channel."""
        self._execute(
            "DELETE FROM tvchannel", (), "Error when deleting the tv channels list."
        )

    def add_tvchannel(self, tv_channel: TvChannelInfos) -> None:
        """Store the TV channel and its labels, set its id, and link to it every
        channel whose name starts with its name or one of its labels."""
        cursor = self._execute(
            "INSERT INTO tvchannel (name, logo_filename) VALUES (?, ?);",
            (tv_channel.name, tv_channel.logo_filename),
            f"Error when adding the tv channel '{tv_channel.name}'.",
        )
        tv_channel_id = cursor.lastrowid if cursor.lastrowid is not None else -1
        tv_channel.id = tv_channel_id
        self._link_channels(tv_channel.name, tv_channel_id)
        for label in tv_channel.labels:
            self._add_label(label, tv_channel_id)

    def _add_label(self, label: str, tv_channel_id: int) -> None:
        self._execute(
            "INSERT INTO label_tvchannel (label, tvchannel_id) VALUES (?, ?);",
            (label, str(tv_channel_id)),
            f"Error when adding the label of channel logo '{label}'.",
        )
        self._link_channels(label, tv_channel_id)

    def _link_channels(self, label: str, tv_channel_id: int) -> None:
        self._execute(
            "UPDATE channel SET tvchannel_id=? WHERE name LIKE ? || '%';",
            (tv_channel_id, label),
            f"Error when linking the TV channel '{label}' to channel.",
        )