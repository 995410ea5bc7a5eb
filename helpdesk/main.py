# helpdesk/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.auth.routes import router as auth_router
from helpdesk.core.config import Settings, get_settings
from helpdesk.core.handlers import register_exception_handlers
from helpdesk.core.logging import configure_logging
from helpdesk.core.sessions import SessionStore
from helpdesk.pages.routes import router as pages_router
from helpdesk.ticket.repository import JsonFileTicketRepository
from helpdesk.ticket.routes import router as ticket_router
from helpdesk.ticket.services import TicketStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.ticket_store.initialize(seed=settings.SEED_SAMPLE_TICKETS)
    logger.info("%s %s serving tickets from %s", settings.APP_NAME, settings.APP_VERSION, settings.TICKETS_FILE)
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.sessions = SessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)
    app.state.ticket_store = TicketStore(
        JsonFileTicketRepository(settings.TICKETS_FILE, strict=settings.STRICT_STORAGE)
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Routers
    app.include_router(pages_router)
    app.include_router(auth_router)
    app.include_router(ticket_router)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()
