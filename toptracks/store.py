"""
Record store for Track documents, backed by a SQLModel engine.

The store is the only place that knows about sessions and SQL. Callers pass
raw query values (usually strings from a query string); they are cast to the
column type here, the same way the schema casts them on insert.
"""
import logging
import math
import operator
import uuid
from typing import Any, Iterable, Mapping

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine, func, select

from toptracks.errors import InvalidKeyError, StoreQueryError
from toptracks.models import Track, TrackBase

logger = logging.getLogger(__name__)

# position is bookkeeping, not something callers can filter on
QUERYABLE_FIELDS = frozenset(TrackBase.model_fields) | {"key"}

THRESHOLD_OPS = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


def make_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, echo=False)


# SQLite INTEGER range
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def coerce_value(field: str, raw: Any) -> Any:
    """Cast a raw query value to the python type of the field."""
    if Track.model_fields[field].annotation is str:
        return str(raw)
    try:
        number = float(raw)
    except (TypeError, ValueError) as exc:
        raise StoreQueryError(f"Cast to number failed for value {raw!r} at path '{field}'") from exc
    if not math.isfinite(number):
        raise StoreQueryError(f"Cast to number failed for value {raw!r} at path '{field}'")
    if not number.is_integer():
        return number
    value = int(number)
    if not INT64_MIN <= value <= INT64_MAX:
        raise StoreQueryError(f"Value {raw!r} at path '{field}' is out of range")
    return value


class TrackStore:
    def __init__(self, engine):
        self.engine = engine
        self._ready = False

    @classmethod
    def from_url(cls, url: str) -> "TrackStore":
        return cls(make_engine(url))

    def connect(self) -> bool:
        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError:
            logger.exception("Database initialization failed")
            self._ready = False
        else:
            self._ready = True
        return self._ready

    def is_ready(self) -> bool:
        return self._ready

    def _all(self, statement) -> list[Track]:
        try:
            with Session(self.engine) as session:
                return list(session.exec(statement).all())
        except (SQLAlchemyError, OverflowError) as exc:
            logger.exception("Track query failed")
            raise StoreQueryError(str(exc)) from exc

    def find(self, filters: Mapping[str, Any], limit: int | None = None) -> list[Track]:
        """Exact match on every field in ``filters``. Unknown fields match nothing."""
        statement = select(Track)
        for field, raw in filters.items():
            if field not in QUERYABLE_FIELDS:
                return []
            statement = statement.where(Track.__table__.columns[field] == coerce_value(field, raw))
        statement = statement.order_by(Track.position)
        if limit is not None:
            statement = statement.limit(limit)
        return self._all(statement)

    def threshold(self, field: str, op: str, value: Any, limit: int | None = None) -> list[Track]:
        compare = THRESHOLD_OPS.get(op)
        if compare is None:
            raise StoreQueryError(f"Unsupported comparison {op!r}")
        if field not in QUERYABLE_FIELDS:
            return []
        statement = (
            select(Track)
            .where(compare(Track.__table__.columns[field], coerce_value(field, value)))
            .order_by(Track.position)
        )
        if limit is not None:
            statement = statement.limit(limit)
        return self._all(statement)

    def by_key(self, key: str) -> Track | None:
        try:
            normalized = uuid.UUID(key).hex
        except ValueError as exc:
            raise InvalidKeyError(f"Cast to key failed for value {key!r}") from exc
        try:
            with Session(self.engine) as session:
                return session.get(Track, normalized)
        except (SQLAlchemyError, OverflowError) as exc:
            logger.exception("Track lookup failed")
            raise StoreQueryError(str(exc)) from exc

    def count(self) -> int:
        with Session(self.engine) as session:
            return session.exec(select(func.count()).select_from(Track)).one()

    def replace_all(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Clear the collection and insert ``records`` in order."""
        tracks = []
        for position, item in enumerate(records):
            track = Track.model_validate(dict(item))
            track.position = position
            tracks.append(track)

        with Session(self.engine) as session:
            session.exec(delete(Track))
            session.add_all(tracks)
            session.commit()
        return len(tracks)
