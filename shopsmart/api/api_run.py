from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from shopsmart.domain.exceptions import (
    ConfigurationError,
    ItemNotFoundError,
    ProfileError,
    StorageError,
    SuggestionError,
)
from shopsmart.events.web_observers import start as start_event_observers, get_events as get_web_events
from shopsmart.api.dependencies import close_document_store

# Routers
from shopsmart.api.routes import profiles, shopping
from shopsmart.api.api_ai import router as ai_router, SUGGESTION_FAILED_MESSAGE

# Logging
logger = logging.getLogger("shopsmart_app")

# Initialize FastAPI app
app = FastAPI(title="ShopSmart Diet & Shopping List API")

# Include routers
app.include_router(profiles.router)
app.include_router(shopping.router)
app.include_router(ai_router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web notices when the app starts."""
    start_event_observers()
    logger.info("Web observers for shopping list events started")


@app.on_event("shutdown")
def _shutdown_document_store():
    close_document_store()


# -------------------- Error mapping --------------------
@app.exception_handler(ConfigurationError)
async def _configuration_error(request: Request, exc: ConfigurationError):
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def _storage_error(request: Request, exc: StorageError):
    logger.error("Storage error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(ProfileError)
async def _profile_error(request: Request, exc: ProfileError):
    return JSONResponse(status_code=400, content={"detail": str(exc), "profile_id": exc.profile_id})


@app.exception_handler(ItemNotFoundError)
async def _item_not_found(request: Request, exc: ItemNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(SuggestionError)
async def _suggestion_error(request: Request, exc: SuggestionError):
    logger.warning("AI suggestion failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": SUGGESTION_FAILED_MESSAGE, "retryable": True})


# -------------------- Notices --------------------
@app.get('/api/notices')
def api_notices(since: Optional[int] = Query(default=None, ge=0)):
    """Poll user-facing notices newer than the given cursor."""
    return get_web_events(since)


@app.get('/health')
def health():
    return {"status": "ok"}
