"""
Track Query Resolver.

Turns a retrieval intent (filtered list, single key, named playlist) into one
store query and maps store failures onto service errors.

Error policy: a query that runs and matches nothing is a successful empty
list. Only a failure of the query itself (uncastable value, engine error)
becomes a 404 for collection endpoints.
"""
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from toptracks.errors import (
    InvalidKeyError,
    InvalidTrackKeyError,
    PlaylistNotFoundError,
    QueryFailedError,
    StoreQueryError,
    TrackNotFoundError,
)
from toptracks.models import Track
from toptracks.store import TrackStore

logger = logging.getLogger(__name__)

DANCEABILITY_PARAM = "danceability"


@dataclass(frozen=True)
class PlaylistTemplate:
    name: str
    path: str
    field: str
    op: str  # "==" for exact match, otherwise a threshold comparison
    value: Any
    summary: str = ""


PLAYLISTS: dict[str, PlaylistTemplate] = {
    t.name: t
    for t in (
        PlaylistTemplate("billie_eilish", "/tracks/artist/billie_eilish", "artistName", "==", "Billie Eilish",
                         "All songs by Billie Eilish"),
        PlaylistTemplate("pop", "/tracks/genre/pop", "genre", "==", "pop",
                         "Tracks from the pop genre"),
        PlaylistTemplate("workout", "/tracks/playlists/workout/", "energy", ">=", 80,
                         "Tracks for your workout (energy >= 80)"),
        PlaylistTemplate("calm", "/tracks/playlists/calm/", "energy", "<=", 20,
                         "Calm tracks for a cozy time at home (energy <= 20)"),
    )
}


class TrackQueryResolver:
    def __init__(self, store: TrackStore, page_limit: int = 10):
        self.store = store
        self.page_limit = page_limit

    def list_tracks(self, params: Mapping[str, Any]) -> list[Track]:
        """
        Exact match on every parameter, capped at ``page_limit``.

        ``danceability`` is not a filter: when present it replaces the whole
        query with ``danceability > value`` and every other parameter is ignored.
        """
        try:
            if DANCEABILITY_PARAM in params:
                return self.store.threshold(
                    DANCEABILITY_PARAM, ">", params[DANCEABILITY_PARAM], limit=self.page_limit
                )
            return self.store.find(params, limit=self.page_limit)
        except StoreQueryError as exc:
            logger.warning("Track list query failed: %s", exc)
            raise QueryFailedError() from exc

    def get_track(self, key: str) -> Track:
        try:
            track = self.store.by_key(key)
        except InvalidKeyError as exc:
            logger.info("Rejected malformed key %r", key)
            raise InvalidTrackKeyError() from exc
        except StoreQueryError as exc:
            raise TrackNotFoundError() from exc
        if track is None:
            raise TrackNotFoundError()
        return track

    def playlist(self, name: str) -> list[Track]:
        template = PLAYLISTS.get(name)
        if template is None:
            raise PlaylistNotFoundError()
        try:
            if template.op == "==":
                return self.store.find({template.field: template.value})
            return self.store.threshold(template.field, template.op, template.value)
        except StoreQueryError as exc:
            logger.warning("Playlist %s query failed: %s", name, exc)
            raise QueryFailedError() from exc
