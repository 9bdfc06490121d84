import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

load_dotenv()

from saunalog.database import Database
from saunalog.errors import LedgerError
from saunalog.routes import auth_router, sessions_router, history_router
from saunalog.services.ledger import SessionLedger

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


def create_app(database: Database = None) -> FastAPI:
    """Build the application around one storage handle.

    The handle (and its connection pool) belongs to the process: it is
    created here unless one is passed in, and disposed on shutdown.
    """
    if database is None:
        database = Database()

    app = FastAPI(
        title="Sauna Log",
        description="Personal sauna session log",
        version="1.0.0",
    )
    app.state.database = database
    app.state.ledger = SessionLedger(database)

    app.include_router(auth_router)
    app.include_router(sessions_router)
    app.include_router(history_router)

    @app.on_event("startup")
    def on_startup():
        """Ensure the store is reachable; SQLite dev databases get their tables created."""
        try:
            database.init_db()
        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            raise RuntimeError(f"Database initialization failed: {e}") from e

    @app.on_event("shutdown")
    def on_shutdown():
        database.dispose()

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        """Render ledger errors as JSON with their own status code."""
        return JSONResponse(
            {"detail": str(exc), "error": exc.code},
            status_code=exc.status_code,
        )

    return app


app = create_app()
