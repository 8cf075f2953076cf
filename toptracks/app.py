import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from toptracks import config
from toptracks.errors import ServiceUnavailableError, TrackServiceError
from toptracks.models import TrackRead
from toptracks.resolver import PLAYLISTS, TrackQueryResolver
from toptracks.seed import seed_database
from toptracks.store import TrackStore

logger = logging.getLogger(__name__)


def create_app(
    store: TrackStore | None = None,
    reset_db: bool | None = None,
    dataset_path: Path | None = None,
    page_limit: int | None = None,
) -> FastAPI:
    if store is None:
        store = TrackStore.from_url(config.DATABASE_URL)
    if reset_db is None:
        reset_db = config.RESET_DB
    if dataset_path is None:
        dataset_path = config.DATASET_PATH
    if page_limit is None:
        page_limit = config.TRACKS_PAGE_LIMIT
    resolver = TrackQueryResolver(store, page_limit=page_limit)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not store.connect():
            logger.error("Database is not reachable; every request will get 503")
        elif reset_db:
            seed_database(store, dataset_path)
        yield

    app = FastAPI(
        title="Top Tracks API",
        description="Read-only catalog of top music tracks with filters and curated playlists",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Every route needs the database, so check it before anything else
    @app.middleware("http")
    async def require_store(request: Request, call_next):
        if not store.is_ready():
            err = ServiceUnavailableError()
            return JSONResponse(status_code=err.status_code, content={"error": err.message})
        return await call_next(request)

    # Added after the guard so 503s carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrackServiceError)
    async def track_service_error(request: Request, exc: TrackServiceError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Type /endpoints in the URL bar to start."

    @app.get("/endpoints")
    def endpoints():
        return [
            {"path": route.path, "methods": sorted(route.methods)}
            for route in app.routes
            if isinstance(route, APIRoute)
        ]

    # Optional filters: any track field, e.g. /tracks/?year=2016 or /tracks/?bpm=80
    # /tracks/?danceability=60 overrides every other filter with danceability > 60
    @app.get("/tracks/", response_model=list[TrackRead])
    def list_tracks(request: Request):
        return resolver.list_tracks(dict(request.query_params))

    @app.get("/tracks/id/{key}", response_model=TrackRead)
    def get_track(key: str):
        return resolver.get_track(key)

    for template in PLAYLISTS.values():
        app.add_api_route(
            template.path,
            _playlist_endpoint(resolver, template.name),
            methods=["GET"],
            response_model=list[TrackRead],
            summary=template.summary,
            name=f"playlist_{template.name}",
        )

    return app


def _playlist_endpoint(resolver: TrackQueryResolver, name: str):
    def endpoint():
        return resolver.playlist(name)
    return endpoint


app = create_app()
