import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.core.config import Settings, get_settings
from todo_api.core.errors import ApiError, error_response
from todo_api.core.logger import configure_logging
from todo_api.database import build_engine, build_session_factory, create_db_and_tables
from todo_api.routers import logs, tags, todos

logger = logging.getLogger(__name__)

_LOC_SOURCES = ("body", "path", "query")


def _log_endpoints(app: FastAPI) -> None:
    for path, operations in app.openapi()["paths"].items():
        for method in operations:
            logger.info("%-7s %s", method.upper(), path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    if settings.create_tables:
        await create_db_and_tables(app.state.engine)
    _log_endpoints(app)
    yield
    await app.state.engine.dispose()


async def api_error_handler(request: Request, exc: ApiError):
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed input (non-numeric ids, wrong types, bad JSON) is a 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = [
            part
            for part in first.get("loc", ())
            if isinstance(part, str) and part not in _LOC_SOURCES
        ]
        field = ".".join(loc)
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return error_response(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal Server Error")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo API",
        description="Async todo, tag and audit log API with SQLModel",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = build_engine(settings.database_url, echo=settings.database_echo)
    app.state.settings = settings
    app.state.engine = engine
    app.state.async_session = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(todos.router)
    app.include_router(tags.router)
    app.include_router(logs.router)

    @app.get("/", response_model=str)
    async def root():
        return "up"

    return app


app = create_app()
