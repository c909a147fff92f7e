"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cooking_cost.api import completed_foods, dishes, ingredients, memos, reports
from cooking_cost.config import get_settings
from cooking_cost.database import dispose_engine
from cooking_cost.exceptions import AppError, InternalError
from cooking_cost.logging_config import setup_logging
from cooking_cost.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings)
    logger.info("Cooking Cost API starting")
    yield
    dispose_engine()
    logger.info("Cooking Cost API stopped")


app = FastAPI(
    title="Cooking Cost API",
    description="Ingredient, dish and menu cost accounting for restaurants",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration from environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Error handlers
# ============================================================================


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details=None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


def _field_errors(errors) -> list[dict]:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        # Drop the "body"/"query"/"path" prefix FastAPI adds
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        details.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return details


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message}")
    return error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = _field_errors(exc.errors())
    logger.warning(f"{request.method} {request.url.path} -> 400 invalid request ({len(details)} error(s))")
    return error_response(request, 400, "VALIDATION_ERROR", "Request validation failed", details)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_handler(request: Request, exc: PydanticValidationError):
    details = _field_errors(exc.errors())
    logger.warning(f"{request.method} {request.url.path} -> 400 invalid data ({len(details)} error(s))")
    return error_response(request, 400, "VALIDATION_ERROR", "Invalid data", details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
    return error_response(request, exc.status_code, error, str(exc.detail))


@app.exception_handler(PoolTimeoutError)
async def pool_timeout_handler(request: Request, exc: PoolTimeoutError):
    logger.error(f"{request.method} {request.url.path}: database connection pool exhausted")
    return error_response(
        request, 503, "SERVICE_UNAVAILABLE", "Database is busy, please retry shortly"
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    err = InternalError("Internal server error" if settings.is_production else f"Internal server error: {exc}")
    return error_response(request, err.status_code, err.error_code, err.message)


# ============================================================================
# Routers
# ============================================================================

app.include_router(ingredients.router, prefix="/api/v1")
app.include_router(dishes.router, prefix="/api/v1")
app.include_router(completed_foods.router, prefix="/api/v1")
app.include_router(reports.router, prefix="/api/v1")
app.include_router(memos.router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.ENVIRONMENT}


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Cooking Cost API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("cooking_cost.main:app", host="0.0.0.0", port=8000, reload=False)
