"""SQLite storage for IPTV channel groups, channels, TV channels and recordings."""

__version__ = "0.1.0"

__all__ = [
    "records",
    "fileutils",
    "catalog",
    "database",
    "group_store",
    "channel_store",
    "tvchannel_store",
    "recording_store",
]