import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import api, health, ui
from .services.controller import AppState, startup
from .services.rates import PriceFeed, RateProvider, make_price_feed


def create_app(
    settings_override: Settings | None = None,
    price_feed: PriceFeed | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp image dir). Falls back to cached get_settings().
    price_feed: inject a feed (tests) instead of the one named by settings.
    """
    settings = settings_override or get_settings()
    settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)

    feed = price_feed or make_price_feed(settings.price_feed_kind, settings)
    state = AppState.from_settings(settings, RateProvider(feed))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Images first, then the rate; first render may still lack a rate
        await startup(state, fail_fast=settings.preload_fail_fast)
        yield

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.picker = state

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.UnknownDenomination, errors.unknown_denomination_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(api.router)
    app.include_router(ui.router)

    app.mount(
        "/static",
        StaticFiles(directory=str(settings.static_dir), check_dir=False),
        name="static",
    )

    logging.getLogger("denom_picker").debug(
        "app created with %d denominations", len(state.catalog)
    )
    return app


app = create_app()
