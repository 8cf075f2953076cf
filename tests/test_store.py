import uuid

import pytest

from toptracks.errors import InvalidKeyError, StoreQueryError
from toptracks.store import TrackStore, coerce_value
from tests.conftest import DRAKE_POP, DRAKE_RAP, make_track


class TestCoerceValue:
    def test_numeric_string_becomes_int(self):
        assert coerce_value("year", "2016") == 2016

    def test_fractional_string_stays_float(self):
        assert coerce_value("bpm", "80.5") == 80.5

    def test_string_column_keeps_text(self):
        assert coerce_value("artistName", "Drake") == "Drake"

    def test_non_numeric_raises(self):
        with pytest.raises(StoreQueryError):
            coerce_value("year", "last year")

    def test_nan_raises(self):
        with pytest.raises(StoreQueryError):
            coerce_value("energy", "nan")

    def test_key_keeps_text(self):
        assert coerce_value("key", "0123") == "0123"

    def test_integer_beyond_sqlite_range_raises(self):
        with pytest.raises(StoreQueryError):
            coerce_value("year", "1e20")


class TestFind:
    def test_exact_match_on_several_fields(self, example_store):
        tracks = example_store.find({"artistName": "Drake", "genre": "rap"})
        assert [t.id for t in tracks] == [2]

    def test_numeric_filter_from_query_string(self, example_store):
        tracks = example_store.find({"energy": "85"})
        assert [t.id for t in tracks] == [1]

    def test_no_filters_returns_everything_in_insert_order(self, example_store):
        assert [t.id for t in example_store.find({})] == [1, 2]

    def test_unknown_field_matches_nothing(self, example_store):
        assert example_store.find({"mood": "happy"}) == []

    def test_filter_by_key(self, example_store):
        key = example_store.find({"id": "2"})[0].key
        assert [t.id for t in example_store.find({"key": key})] == [2]

    def test_position_is_not_filterable(self, example_store):
        assert example_store.find({"position": "0"}) == []

    def test_limit(self, store):
        store.replace_all([make_track(i) for i in range(15)])
        tracks = store.find({}, limit=10)
        assert [t.id for t in tracks] == list(range(10))

    def test_bad_value_raises(self, example_store):
        with pytest.raises(StoreQueryError):
            example_store.find({"year": "abc"})


class TestThreshold:
    def test_greater_than_is_strict(self, example_store):
        assert [t.id for t in example_store.threshold("danceability", ">", 70)] == []
        assert [t.id for t in example_store.threshold("danceability", ">", "69")] == [1]

    def test_inclusive_bounds(self, store):
        store.replace_all([make_track(1, energy=80), make_track(2, energy=20), make_track(3, energy=50)])
        assert [t.id for t in store.threshold("energy", ">=", 80)] == [1]
        assert [t.id for t in store.threshold("energy", "<=", 20)] == [2]
        assert [t.id for t in store.threshold("energy", "<", 50)] == [2]

    def test_unsupported_operator(self, example_store):
        with pytest.raises(StoreQueryError):
            example_store.threshold("energy", "!=", 10)

    def test_unknown_field_matches_nothing(self, example_store):
        assert example_store.threshold("mood", ">", 1) == []


class TestByKey:
    def test_returns_record(self, example_store):
        first = example_store.find({"id": "1"})[0]
        track = example_store.by_key(first.key)
        assert track.trackName == DRAKE_POP["trackName"]

    def test_accepts_hyphenated_uuid(self, example_store):
        first = example_store.find({"id": "1"})[0]
        assert example_store.by_key(str(uuid.UUID(first.key))).key == first.key

    def test_missing_key_returns_none(self, example_store):
        assert example_store.by_key(uuid.uuid4().hex) is None

    def test_malformed_key_raises(self, example_store):
        with pytest.raises(InvalidKeyError):
            example_store.by_key("123")


class TestLifecycle:
    def test_unreachable_database_stays_not_ready(self, tmp_path):
        store = TrackStore.from_url(f"sqlite:///{tmp_path / 'missing' / 'db.sqlite3'}")
        assert not store.connect()
        assert not store.is_ready()

    def test_not_ready_until_connected(self, engine):
        store = TrackStore(engine)
        assert not store.is_ready()
        assert store.connect()
        assert store.is_ready()

    def test_replace_all_clears_previous_records(self, example_store):
        assert example_store.count() == 2
        example_store.replace_all([DRAKE_RAP])
        assert example_store.count() == 1
        assert [t.id for t in example_store.find({})] == [2]

    def test_replace_all_casts_values(self, store):
        store.replace_all([make_track(7, year="2018", energy="81")])
        track = store.find({})[0]
        assert track.year == 2018
        assert track.energy == 81
