# backend/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from config import Settings, load_settings
from routers import datasets_router, plot_router, stats_router, upload_router
from services.errors import DatasetError, IOFailure, NotFound, ParseError, ValidationError
from utils.data_store import DatasetStore, DirectoryDatasetStore

logger = logging.getLogger(__name__)

# Client errors are the caller's input; IOFailure is ours.
ERROR_STATUS = {
    ValidationError: 400,
    NotFound: 400,
    ParseError: 400,
    IOFailure: 500,
}


def status_for(exc: DatasetError) -> int:
    for cls, status in ERROR_STATUS.items():
        if isinstance(exc, cls):
            return status
    return 500


async def dataset_error_handler(request: Request, exc: DatasetError):
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.store
    # The data directory must exist before serving; listing a missing
    # directory is a server error, not an empty catalog.
    if isinstance(store, DirectoryDatasetStore):
        store.ensure()
        logger.info("Serving datasets from %s", store.root.resolve())
    yield


def create_app(settings: Optional[Settings] = None, store: Optional[DatasetStore] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="CSV Scatter API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store if store is not None else DirectoryDatasetStore(settings.data_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DatasetError, dataset_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(upload_router)
    app.include_router(datasets_router)
    app.include_router(plot_router)
    app.include_router(stats_router)

    @app.get("/", include_in_schema=False)
    def index():
        if not settings.index_path.is_file():
            raise HTTPException(status_code=404, detail="Index page not found")
        return FileResponse(settings.index_path, media_type="text/html")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


SETTINGS = load_settings()

logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = create_app(SETTINGS)


if __name__ == "__main__":
    import uvicorn

    logger.info("Listening on %s:%d...", SETTINGS.host, SETTINGS.port)
    uvicorn.run(app, host=SETTINGS.host, port=SETTINGS.port)
