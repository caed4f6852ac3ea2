import pytest

from tuxtvlists.channel_store import ChannelStore
from tuxtvlists.database import Database, DBQueryError, DBSyncError
from tuxtvlists.group_store import GroupStore
from tuxtvlists.records import ChannelInfos, ChannelsGroupInfos, GroupType

SCHEMA = """
CREATE TABLE tvchannel (id INTEGER PRIMARY KEY, name TEXT, logo_filename TEXT);
CREATE TABLE label_tvchannel (id INTEGER PRIMARY KEY, label TEXT, tvchannel_id INTEGER);
CREATE TABLE channels_group (id INTEGER PRIMARY KEY, position INTEGER, name TEXT,
    type INTEGER, uri TEXT, bregex TEXT, eregex TEXT, last_update TEXT);
CREATE TABLE channel (id INTEGER PRIMARY KEY, name TEXT, position INTEGER, uri TEXT,
    vlc_options TEXT, deinterlace_mode TEXT, updated INTEGER DEFAULT 0,
    channelsgroup_id INTEGER, tvchannel_id INTEGER);
"""


@pytest.fixture
def db(tmp_path):
    database = Database(tmp_path / "cfg" / "test.db")
    database.open()
    database.exec_query(SCHEMA)
    yield database
    database.close()


@pytest.fixture
def store(db):
    return ChannelStore(db)


def make_group(db, name="Group"):
    group = ChannelsGroupInfos(name=name, type=GroupType.PLAYLIST, uri="/tmp/x.m3u")
    GroupStore(db).add_channels_group(group)
    return group


def add(store, group, name, url, position, **kwargs):
    channel = ChannelInfos(name=name, url=url, position=position, channels_group=group, **kwargs)
    store.add_channel(channel, False)
    return channel


def test_add_and_select_round_trip(db, store):
    group = make_group(db)
    channel = add(store, group, "Arte", "rtsp://a", 1, vlc_options=[":opt1", ":opt2"])
    reread = ChannelsGroupInfos(name=group.name, id=group.id)
    channels = store.select_channels_of_channels_group(reread)
    assert len(channels) == 1
    got = channels[0]
    assert got.id == channel.id
    assert got.name == "Arte"
    assert got.url == "rtsp://a"
    assert got.position == 1
    assert got.vlc_options == [":opt1", ":opt2"]
    assert got.channels_group is reread
    assert got.logo_name is None


def test_select_orders_by_position_and_counts(db, store):
    group = make_group(db)
    add(store, group, "Second", "u2", 2)
    add(store, group, "First", "u1", 1)
    reread = ChannelsGroupInfos(name=group.name, id=group.id)
    channels = store.select_channels_of_channels_group(reread)
    assert [c.name for c in channels] == ["First", "Second"]
    assert reread.nb_channels == len(channels)


def test_select_only_channels_of_group(db, store):
    group_a = make_group(db, "A")
    group_b = make_group(db, "B")
    add(store, group_a, "One", "u1", 1)
    add(store, group_b, "Two", "u2", 1)
    names = [c.name for c in store.select_channels_of_channels_group(group_b)]
    assert names == ["Two"]


def test_insert_links_tvchannel_by_name_prefix(db, store):
    db.connection.execute(
        "INSERT INTO tvchannel (name, logo_filename) VALUES ('TF1', 'tf1.png')"
    )
    group = make_group(db)
    add(store, group, "TF1 HD", "u1", 1)
    channels = store.select_channels_of_channels_group(group)
    assert channels[0].logo_name == "tf1.png"


def test_insert_links_tvchannel_by_label(db, store):
    cur = db.connection.execute(
        "INSERT INTO tvchannel (name, logo_filename) VALUES ('France 2', 'f2.png')"
    )
    db.connection.execute(
        "INSERT INTO label_tvchannel (label, tvchannel_id) VALUES ('FR2', ?)",
        (cur.lastrowid,),
    )
    group = make_group(db)
    add(store, group, "FR2 SD", "u1", 1)
    channels = store.select_channels_of_channels_group(group)
    assert channels[0].logo_name == "f2.png"


def test_update_rewrites_existing_not_updated_channel(db, store):
    group = make_group(db)
    original = add(store, group, "Old", "rtsp://same", 1)
    groups = GroupStore(db)
    groups.start_update_channels_of_channels_group(group)
    renamed = ChannelInfos(name="New", url="rtsp://same", position=3, channels_group=group)
    store.add_channel(renamed, True)
    assert renamed.id == original.id
    groups.end_update_channels_of_channels_group(group)
    channels = store.select_channels_of_channels_group(group)
    assert [(c.id, c.name, c.position) for c in channels] == [(original.id, "New", 3)]


def test_update_inserts_when_no_match(db, store):
    group = make_group(db)
    first = add(store, group, "A", "u1", 1)
    other = ChannelInfos(name="B", url="u2", position=2, channels_group=group)
    store.add_channel(other, True)
    assert other.id != first.id
    assert len(store.select_channels_of_channels_group(group)) == 2


def test_add_requires_group(store):
    with pytest.raises(ValueError):
        store.add_channel(ChannelInfos(name="x", url="y"), False)


def test_delete_channel_shifts_positions(db, store):
    group = make_group(db)
    first = add(store, group, "A", "u1", 1)
    add(store, group, "B", "u2", 2)
    add(store, group, "C", "u3", 3)
    store.delete_channel(first)
    channels = store.select_channels_of_channels_group(group)
    assert [c.name for c in channels] == ["B", "C"]
    assert [c.position for c in channels] == [1, 2]


def test_delete_does_not_shift_other_groups(db, store):
    group_a = make_group(db, "A")
    group_b = make_group(db, "B")
    victim = add(store, group_a, "A1", "u1", 1)
    add(store, group_b, "B2", "u2", 2)
    store.delete_channel(victim)
    assert [c.position for c in store.select_channels_of_channels_group(group_b)] == [2]


def test_get_channel_id_by_name(db, store):
    group = make_group(db)
    channel = add(store, group, "Arte", "u1", 1)
    assert store.get_channel_id_by_name("Arte") == channel.id


def test_get_channel_id_by_tvchannel_name(db, store):
    db.connection.execute("INSERT INTO tvchannel (name) VALUES ('M6')")
    group = make_group(db)
    channel = add(store, group, "M6 HD", "u1", 1)
    assert store.get_channel_id_by_name("M6") == channel.id


def test_get_channel_id_by_name_missing(db, store):
    assert store.get_channel_id_by_name("Nothing") == -1


def test_get_channel_id_prefers_first_group(db, store):
    group_a = make_group(db, "A")
    group_b = make_group(db, "B")
    in_a = add(store, group_a, "Same", "u1", 5)
    add(store, group_b, "Same", "u2", 1)
    assert store.get_channel_id_by_name("Same") == in_a.id


def test_update_deinterlace_mode(db, store):
    group = make_group(db)
    channel = add(store, group, "A", "u1", 1)
    store.update_channel_deinterlace_mode(channel, "blend")
    assert channel.deinterlace_mode == "blend"
    assert store.select_channels_of_channels_group(group)[0].deinterlace_mode == "blend"


def test_switch_position_channel(db, store):
    group = make_group(db)
    a = add(store, group, "A", "u1", 1)
    b = add(store, group, "B", "u2", 2)
    store.switch_position_channel(a, b)
    assert (a.position, b.position) == (2, 1)
    assert [c.name for c in store.select_channels_of_channels_group(group)] == ["B", "A"]


def test_query_error_raises(tmp_path):
    database = Database(tmp_path / "empty.db")
    with database:
        store = ChannelStore(database)
        with pytest.raises(DBQueryError):
            store.get_channel_id_by_name("x")


def test_closed_database_raises(tmp_path):
    store = ChannelStore(Database(tmp_path / "closed.db"))
    with pytest.raises(DBSyncError):
        store.select_channels_of_channels_group(ChannelsGroupInfos(name="g", id=1))