import uuid
from sqlmodel import SQLModel, Field


def new_key() -> str:
    return uuid.uuid4().hex


class TrackBase(SQLModel):
    id: int
    trackName: str
    artistName: str
    genre: str
    year: int
    bpm: int
    energy: int          # 0..100
    danceability: int    # 0..100
    loudness: int        # dB, usually negative
    liveness: int
    valence: int
    length: int          # seconds
    acousticness: int
    speechiness: int
    popularity: int


class Track(TrackBase, table=True):
    key: str = Field(default_factory=new_key, primary_key=True)
    position: int = Field(default=0, index=True)  # insertion order


class TrackRead(TrackBase):
    key: str
