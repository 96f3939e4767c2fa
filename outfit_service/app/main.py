"""
Outfit Service v1.0.0
Prompt-driven outfit generation over a user's cataloged wardrobe.

API ROUTES:
-----------
- /api/outfits                      - Generate / list outfits
- /api/outfits/regenerate           - New outfit from prompt + feedback
- /api/outfits/{id}                 - Outfit details
- /api/outfits/{id}/regenerate      - New outfit from a stored outfit + feedback
- /api/outfits/{id}/feedback        - Ratings (append-only)
- /api/wardrobe/items[/{id}]         - Wardrobe listing and item details
- /api/users                        - API key issuance
- /health, /metrics                 - Health and monitoring
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from outfit_service.app.routes import router, SERVICE_VERSION
from outfit_service.config import get_settings
from outfit_service.core.errors import OutfitServiceError, AuthenticationError, ValidationError
from outfit_service.db import mongo
from outfit_service.observability import is_logging_enabled

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 50)
    logger.info(f"Outfit Service v{SERVICE_VERSION} Starting...")
    logger.info("=" * 50)

    settings = get_settings()

    mongo_connected = mongo.connect()
    logger.info(f"MongoDB: {'connected' if mongo_connected else 'disconnected'}")
    if mongo_connected:
        try:
            mongo.ensure_indexes()
        except Exception as e:
            logger.warning(f"Index creation skipped: {e}")

    logger.info(f"OpenAI: {'configured' if settings.has_openai() else 'NOT configured'}")
    logger.info(f"Models: chat={settings.chat_model}, embedding={settings.embedding_model}")
    logger.info(f"Logging: {'enabled' if is_logging_enabled() else 'disabled'}")
    logger.info("=" * 50)

    yield

    logger.info("Service shutting down...")
    mongo.close()


app = FastAPI(
    title="Outfit Service",
    description="Prompt-driven outfit generation from a cataloged wardrobe",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# ============================================================================
# MIDDLEWARE
# ============================================================================
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


# ============================================================================
# ERROR MAPPING
# ============================================================================
@app.exception_handler(OutfitServiceError)
async def outfit_service_error_handler(request: Request, exc: OutfitServiceError):
    """Map each error kind to its status and a user-visible message."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.kind}: {exc.message}")

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "ApiKey"}

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and query params use the same error shape."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    error = ValidationError(problems or "Invalid request", status_code=422)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("outfit_service.app.main:app", host="0.0.0.0", port=8000, reload=False)
