"""Storage of channels groups in the database."""

from __future__ import annotations

import sqlite3
from typing import Any, Sequence

from .database import Database, DBQueryError
from .records import ChannelsGroupInfos, GroupType


class GroupStore:
    """Reads and writes channels groups, and the bulk operations on their channels."""

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

    def select_channels_groups(self) -> list[ChannelsGroupInfos]:
        """Return every channels group, ordered by position."""
        cursor = self._execute(
            "SELECT id, position, name, type, uri, bregex, eregex "
            "FROM channels_group ORDER BY position",
            (),
            "Error when displaying the channels.",
        )
        return [
            ChannelsGroupInfos(
                name=name,
                type=GroupType(group_type or 0),
                uri=uri,
                id=group_id if group_id is not None else 0,
                position=position if position is not None else 0,
                bregex=bregex,
                eregex=eregex,
            )
            for group_id, position, name, group_type, uri, bregex, eregex in cursor
        ]

    def add_channels_group(self, group: ChannelsGroupInfos) -> None:
        """Insert the group after the last one; set its id and position."""
        message = f'Error when adding the group "{group.name}" in database.'
        cursor = self._execute(
            "INSERT INTO channels_group (position, name, type, uri, bregex, eregex) "
            "VALUES ((SELECT IFNULL(MAX(position), 0) + 1 FROM channels_group), "
            "?, ?, ?, ?, ?);",
            (group.name, int(group.type), group.uri, group.bregex, group.eregex),
            message,
        )
        group_id = cursor.lastrowid
        if group_id is None or group_id < 0:
            return
        group.id = group_id
        row = self._execute(
            "SELECT position FROM channels_group WHERE id=?;", (group_id,), message
        ).fetchone()
        if row is not None:
            group.position = row[0]

    def update_channels_group(self, group: ChannelsGroupInfos) -> None:
        """Store the group's name, URI and name-cleaning expressions."""
        self._execute(
            "UPDATE channels_group SET name=?, uri=?, bregex=?, eregex=? WHERE id=?",
            (group.name, group.uri, group.bregex, group.eregex, group.id),
            f'Error when updating the group "{group.name}".',
        )

    def switch_position_channels_group(
        self, group_a: ChannelsGroupInfos, group_b: ChannelsGroupInfos
    ) -> None:
        """Exchange the positions of two groups, in the database and in the records."""
        self._execute(
            "UPDATE channels_group SET position=? WHERE id=?",
            (group_b.position, group_a.id),
            f'Error when updating the group "{group_a.name}".',
        )
        old_position = group_a.position
        group_a.position = group_b.position
        self._execute(
            "UPDATE channels_group SET position=? WHERE id=?",
            (old_position, group_b.id),
            f'Error when updating the group "{group_b.name}".',
        )
        group_b.position = old_position

    def update_channels_group_last_update(self, group: ChannelsGroupInfos) -> None:
        """Set the group's last update date to the current local time."""
        self._execute(
            "UPDATE channels_group SET last_update=DATETIME('NOW', 'localtime') "
            "WHERE id=?",
            (group.id,),
            f'Error when updating the last update date of the group "{group.name}".',
        )

    def delete_channels_group(self, group: ChannelsGroupInfos) -> None:
        """Delete the group and move the groups after it up by one."""
        self._execute(
            "DELETE FROM channels_group WHERE id=?",
            (group.id,),
            f'Error when deleting the group "{group.name}".',
        )
        self._execute(
            "UPDATE channels_group SET position=position-1 WHERE position>?",
            (group.position,),
            "Error when updating the position of the groups.",
        )

    def delete_channels_of_channels_group(self, group: ChannelsGroupInfos) -> None:
        """Delete every channel of the group."""
        self._execute(
            "DELETE FROM channel WHERE channelsgroup_id=?",
            (group.id,),
            f'Error when deleting the channels of the group "{group.name}".',
        )

    def start_update_channels_of_channels_group(self, group: ChannelsGroupInfos) -> None:
        """Mark every channel of the group as not yet updated."""
        self._execute(
            "UPDATE channel SET updated=0 WHERE channelsgroup_id=?",
            (group.id,),
            f'Error when updating the channels of the group "{group.name}".',
        )

    def end_update_channels_of_channels_group(self, group: ChannelsGroupInfos) -> None:
        """Delete the channels of the group that were not updated."""
        self._execute(
            "DELETE FROM channel WHERE channelsgroup_id=? AND updated=0",
            (group.id,),
            f'Error when updating the channels of the group "{group.name}".',
        )