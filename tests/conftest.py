import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from toptracks.app import create_app
from toptracks.store import TrackStore


def make_track(id: int, **fields) -> dict:
    track = {
        "id": id,
        "trackName": f"Track {id}",
        "artistName": "Someone",
        "genre": "pop",
        "year": 2019,
        "bpm": 120,
        "energy": 50,
        "danceability": 50,
        "loudness": -6,
        "liveness": 10,
        "valence": 50,
        "length": 200,
        "acousticness": 10,
        "speechiness": 5,
        "popularity": 80,
    }
    track.update(fields)
    return track


# Two tracks from the service's documented example
DRAKE_POP = make_track(1, artistName="Drake", genre="pop", energy=85, danceability=70)
DRAKE_RAP = make_track(2, artistName="Drake", genre="rap", energy=15, danceability=40)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    store = TrackStore(engine)
    assert store.connect()
    return store


@pytest.fixture
def example_store(store):
    store.replace_all([DRAKE_POP, DRAKE_RAP])
    return store


@pytest.fixture
def client(example_store):
    return TestClient(create_app(store=example_store, reset_db=False))
