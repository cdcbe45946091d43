from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lunch.api.routes import restaurants
from lunch.domain.errors import StorageError
from lunch.infra.Lunch_Store import LunchStore
from lunch.utilities.config import DEBUG, LUNCH_DB_PATH, LUNCH_SEED_FILE

# Logging
logger = logging.getLogger("lunch_app")


def create_app(store: Optional[LunchStore] = None) -> FastAPI:
    """Build the API around one shared store.

    When no store is injected, the database at LUNCH_DB_PATH is opened (and
    seeded on first launch) at startup and closed at shutdown.
    """
    app = FastAPI(title="Lunch - Restaurant Selector", debug=DEBUG)
    app.state.store = store
    app.include_router(restaurants.router)

    @app.on_event("startup")
    def _open_store():
        if app.state.store is None:
            app.state.store = LunchStore.open(LUNCH_DB_PATH, seed_file=LUNCH_SEED_FILE)
            app.state.owns_store = True
            logger.info("Lunch store ready (%s)", LUNCH_DB_PATH)

    @app.on_event("shutdown")
    def _close_store():
        if getattr(app.state, "owns_store", False):
            app.state.store.close()
            app.state.store = None
            app.state.owns_store = False

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return app


app = create_app()
