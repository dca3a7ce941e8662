import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docrag.api.routes import router as api_router
from docrag.config import public_settings, setup_logging
from docrag.errors import CorruptStateError, DocRagError, InvalidInputError, ProviderError, StorageError

logger = logging.getLogger("docrag")

ERROR_STATUS = (
    (InvalidInputError, 400),
    (CorruptStateError, 409),
    (ProviderError, 502),
    (StorageError, 500),
)


def _status_for(exc: DocRagError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


def create_app() -> FastAPI:
    app = FastAPI(title="docrag")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.exception_handler(DocRagError)
    async def docrag_error_handler(request: Request, exc: DocRagError):
        status_code = _status_for(exc)
        logger.log(
            logging.ERROR if status_code >= 500 else logging.WARNING,
            "Request failed",
            exc_info=exc if status_code >= 500 else None,
            extra={"path": request.url.path, "kind": type(exc).__name__},
        )
        return JSONResponse(status_code=status_code, content={"error": str(exc), "kind": type(exc).__name__})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(api_router)
    return app


setup_logging()
logger.info("Application starting")
logger.info("Loaded settings: %s", public_settings())
app = create_app()
