import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .custom import AppError, AuthenticationError, RateLimitError, SupabaseError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Internal server error"


def _is_production(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.is_production)


def error_body(code: str, message: str, details: dict | None = None) -> dict:
    error: dict = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"success": False, "error": error}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.is_operational:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        message = exc.message
    else:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        message = GENERIC_MESSAGE if _is_production(request) else exc.message
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, message, exc.details),
    )


async def supabase_error_handler(request: Request, exc: SupabaseError) -> JSONResponse:
    logger.error("Supabase error: %s (status=%s)", exc.message, exc.status_code)
    message = GENERIC_MESSAGE if _is_production(request) else f"Supabase error: {exc.message}"
    return JSONResponse(
        status_code=502,
        content=error_body("DATABASE_ERROR", message),
    )


async def authentication_error_handler(_request: Request, exc: AuthenticationError) -> JSONResponse:
    logger.info("Authentication failed: %s", exc.message)
    return JSONResponse(
        status_code=401,
        content=error_body(exc.code, exc.message),
    )


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.service)
    return JSONResponse(
        status_code=429,
        content=error_body("RATE_LIMITED", f"Rate limit exceeded for {exc.service}"),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Validation failed on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=422,
        content=error_body(
            "VALIDATION_ERROR", "Request validation failed",
            {"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content=error_body("NOT_FOUND", "Not Found", {"path": request.url.path}),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTP_ERROR", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = GENERIC_MESSAGE if _is_production(request) else str(exc)
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", message),
    )
