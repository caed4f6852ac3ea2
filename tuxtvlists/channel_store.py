"""Storage of channels in the database."""

from __future__ import annotations

import sqlite3
from typing import Any, Sequence

from .database import Database, DBQueryError
from .records import ChannelInfos, ChannelsGroupInfos

_SELECT_CHANNELS = (
    "SELECT channel.id, channel.name, channel.position, tvchannel.logo_filename, "
    "channel.uri, channel.vlc_options, channel.deinterlace_mode "
    "FROM channel LEFT JOIN tvchannel ON channel.tvchannel_id=tvchannel.id "
    "WHERE channel.channelsgroup_id=? "
    "ORDER BY channel.position"
)

_FIND_UPDATABLE = (
    "SELECT id FROM channel WHERE uri=? AND channelsgroup_id=? AND updated=0 "
    "ORDER BY channel.position;"
)

_INSERT_CHANNEL = (
    "INSERT INTO channel "
    "(name, position, uri, vlc_options, tvchannel_id, channelsgroup_id) "
    "VALUES (?, ?, ?, ?, ("
    "SELECT tvchannel.id FROM tvchannel "
    "WHERE (? LIKE tvchannel.name||'%') "
    "OR tvchannel.id = ("
    "SELECT label_tvchannel.tvchannel_id FROM label_tvchannel "
    "WHERE (? LIKE label_tvchannel.label||'%') "
    "ORDER BY label_tvchannel.label DESC) "
    "ORDER BY tvchannel.name DESC), ?);"
)

_UPDATE_CHANNEL = (
    "UPDATE channel SET name=?, position=?, vlc_options=?, updated=1 WHERE id=?"
)

_ID_BY_CHANNEL_NAME = (
    "SELECT channel.id FROM channels_group, channel "
    "WHERE channels_group.id=channel.channelsgroup_id "
    "AND channel.name=? "
    "ORDER BY channels_group.position, channel.position LIMIT 1"
)

_ID_BY_TVCHANNEL_NAME = (
    "SELECT channel.id FROM channels_group, channel, tvchannel "
    "WHERE channels_group.id=channel.channelsgroup_id "
    "AND channel.tvchannel_id=tvchannel.id "
    "AND tvchannel.name=? "
    "ORDER BY channels_group.position, channel.position LIMIT 1"
)


def _group_of(channel: ChannelInfos) -> ChannelsGroupInfos:
    if channel.channels_group is None:
        raise ValueError(f'The channel "{channel.name}" belongs to no channels group.')
    return channel.channels_group


class ChannelStore:
    """Reads and writes the channels of channels groups."""

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

    def select_channels_of_channels_group(
        self, group: ChannelsGroupInfos
    ) -> list[ChannelInfos]:
        """Return the channels of the group ordered by position.

        Each channel read is attached to the group and counted in its nb_channels.
        """
        cursor = self._execute(
            _SELECT_CHANNELS, (group.id,), "Error when displaying the channels."
        )
        channels = []
        for channel_id, name, position, logo, uri, vlc_options, deinterlace in cursor:
            channel = ChannelInfos(
                name=name,
                url=uri,
                id=channel_id if channel_id is not None else 0,
                position=position if position is not None else 0,
                deinterlace_mode=deinterlace,
                channels_group=group,
            )
            if logo is not None:
                channel.logo_name = logo
            if vlc_options:
                channel.vlc_options = vlc_options.split("\n")
            group.nb_channels += 1
            channels.append(channel)
        return channels

    def add_channel(self, channel: ChannelInfos, update: bool = False) -> None:
        """Store the channel and set its id.

        With update, a channel of the same group and URI not yet updated in the
        current refresh is rewritten in place instead of inserting a new one.
        """
        group = _group_of(channel)
        vlc_options = "\n".join(channel.vlc_options) if channel.vlc_options else None

        existing_id = -1
        if update:
            row = self._execute(
                _FIND_UPDATABLE,
                (channel.url, group.id),
                "Error when getting the channel.",
            ).fetchone()
            if row is not None:
                existing_id = row[0]

        message = f'Error when adding the channel "{channel.name}".'
        if existing_id == -1:
            cursor = self._execute(
                _INSERT_CHANNEL,
                (
                    channel.name,
                    channel.position,
                    channel.url,
                    vlc_options,
                    channel.name,
                    channel.name,
                    group.id,
                ),
                message,
            )
            channel.id = cursor.lastrowid if cursor.lastrowid is not None else -1
        else:
            self._execute(
                _UPDATE_CHANNEL,
                (channel.name, channel.position, vlc_options, existing_id),
                message,
            )
            channel.id = existing_id

    def delete_channel(self, channel: ChannelInfos) -> None:
        """Delete the channel and move the channels after it in its group up by one."""
        group = _group_of(channel)
        self._execute(
            "DELETE FROM channel WHERE id=?",
            (channel.id,),
            f'Error when deleting the channel "{channel.name}".',
        )
        self._execute(
            "UPDATE channel SET position=position-1 "
            "WHERE position>? AND channelsgroup_id=?",
            (channel.position, group.id),
            "Error when updating the position of the channels in group "
            f'"{group.name}".',
        )

    def get_channel_id_by_name(self, name: str) -> int:
        """Return the id of the first channel named name, or of the first channel
        linked to a TV channel of that name; -1 if there is none."""
        message = "Error when getting the channel by name."
        for query in (_ID_BY_CHANNEL_NAME, _ID_BY_TVCHANNEL_NAME):
            row = self._execute(query, (name,), message).fetchone()
            if row is not None:
                return row[0]
        return -1

    def update_channel_deinterlace_mode(
        self, channel: ChannelInfos, mode: str | None
    ) -> None:
        """Store the deinterlace mode of the channel and set it on the record."""
        self._execute(
            "UPDATE channel SET deinterlace_mode=? WHERE id=?",
            (mode, channel.id),
            f'Error when updating the channel "{channel.name}".',
        )
        channel.deinterlace_mode = mode

    def switch_position_channel(
        self, channel_a: ChannelInfos, channel_b: ChannelInfos
    ) -> None:
        """Exchange the positions of two channels, in the database and the records."""
        self._execute(
            "UPDATE channel SET position=? WHERE id=?",
            (channel_b.position, channel_a.id),
            f'Error when updating the channel "{channel_a.name}".',
        )
        old_position = channel_a.position
        channel_a.position = channel_b.position
        self._execute(
            "UPDATE channel SET position=? WHERE id=?",
            (old_position, channel_b.id),
            f'Error when updating the channel "{channel_b.name}".',
        )
        channel_b.position = old_position