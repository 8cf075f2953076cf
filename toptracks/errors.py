"""Exceptions raised by the record store and the query resolver."""


class StoreQueryError(Exception):
    """The store could not execute a query (bad value for a column, engine failure)."""


class InvalidKeyError(StoreQueryError):
    """The supplied primary key does not have the store's key shape."""


class TrackServiceError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class QueryFailedError(TrackServiceError):
    status_code = 404
    default_message = "Not found"


class TrackNotFoundError(TrackServiceError):
    status_code = 404
    default_message = "Track not found"


class PlaylistNotFoundError(TrackServiceError):
    status_code = 404
    default_message = "Playlist not found"


class InvalidTrackKeyError(TrackServiceError):
    status_code = 400
    default_message = "Invalid Id"


class ServiceUnavailableError(TrackServiceError):
    status_code = 503
    default_message = "Service unavailable"
