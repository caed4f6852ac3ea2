"""Data records for channels groups, channels, TV channels and recordings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class GroupType(IntEnum):
    """Kind of a channels group: a downloaded playlist or a user's favourites."""

    PLAYLIST = 0
    FAVORITES = 1


@dataclass
class ChannelsGroupInfos:
    """A group of channels, as stored in the channels_group table."""

    name: str
    type: GroupType = GroupType.PLAYLIST
    uri: str | None = None
    id: int = -1
    position: int = 0
    bregex: str | None = None
    eregex: str | None = None
    nb_channels: int = 0


@dataclass
class ChannelInfos:
    """A playable channel belonging to a channels group."""

    name: str
    url: str
    id: int = -1
    position: int = 0
    logo_name: str | None = None
    vlc_options: list[str] = field(default_factory=list)
    deinterlace_mode: str | None = None
    channels_group: ChannelsGroupInfos | None = None


@dataclass
class TvChannelInfos:
    """A known TV channel with its logo and the alternative labels it goes by."""

    name: str
    logo_filename: str | None = None
    labels: list[str] = field(default_factory=list)
    id: int = -1


class RecordingStatus(IntEnum):
    """State of a scheduled recording."""

    NOTSET = 0
    WAITING = 1
    PROCESSING = 2
    FINISHED = 3
    SKIPPED = 4
    ERROR = 5


@dataclass
class RecordingInfos:
    """A recording of a channel between two points in time."""

    title: str
    begin_time: int
    end_time: int
    channel_id: int = -1
    id: int = -1
    status: RecordingStatus = RecordingStatus.NOTSET
    filename: str | None = None

    def has_time(self, ref_time: int) -> bool:
        """Return True if ref_time falls within the recording, bounds included."""
        return self.begin_time <= ref_time <= self.end_time

    def is_time_greater(self, ref_time: int) -> bool:
        """Return True if ref_time lies after the end of the recording."""
        return ref_time > self.end_time