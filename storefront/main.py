import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.api.v1.router import api_router
from storefront.core.config import settings
from storefront.core.db import Database
from storefront.core.errors import CatalogError, ErrorKind


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(settings.database_url, echo=settings.database_echo)
    app.state.database = database
    logger.info("Catalog store opened")
    try:
        yield
    finally:
        database.dispose()


app = FastAPI(title="Storefront Catalog", lifespan=lifespan)
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request %s failed: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "kind": exc.kind.value},
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body"
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Write endpoints answer malformed bodies with the catalog error envelope.
    if request.method != "POST":
        return await request_validation_exception_handler(request, exc)

    details = _describe_validation_errors(exc)
    logger.info("Rejected request body for %s: %s", request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": f"Invalid request body: {details}",
            "kind": ErrorKind.VALIDATION.value,
        },
    )


@app.get("/")
def root():
    return {"status": "ok", "message": "Storefront catalog backend running"}
