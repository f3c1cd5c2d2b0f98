from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory_service.adapters.primary.api.error_handlers import setup_exception_handlers
from inventory_service.adapters.primary.api.inventory_router import router as inventory_router
from inventory_service.adapters.secondary.database.config import init_db
from inventory_service.adapters.secondary.storage.filesystem_blob_store import FilesystemBlobStore
from inventory_service.config.settings import get_settings
from inventory_service.core.logging_config import setup_logging

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir, settings.log_format)
    FilesystemBlobStore(settings.cache_dir).ensure_directory()
    init_db()
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(title="Inventory API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(inventory_router)

    @app.get("/health", tags=["Health"])
    def health_check():
        return {"status": "ok"}

    # Registered last: anything no other route matched
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def method_not_allowed(path: str):
        return JSONResponse(status_code=405, content={"error": "Method Not Allowed"})

    return app


app = create_app()
