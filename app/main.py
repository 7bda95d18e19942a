import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings
from app.exceptions.custom import (
    AppError,
    AuthenticationError,
    RateLimitError,
    SupabaseError,
)
from app.exceptions.handlers import (
    app_error_handler,
    authentication_error_handler,
    http_exception_handler,
    rate_limit_error_handler,
    supabase_error_handler,
    unhandled_error_handler,
    validation_error_handler,
)
from app.routers.auth import router as auth_router
from app.routers.pricing import router as pricing_router
from app.routers.secure_bookings import router as secure_bookings_router
from app.routers.system import router as system_router
from app.services.line import LineService
from app.services.secure_bookings import SecureBookingService
from app.services.session import SessionMonitor
from app.services.supabase import SupabaseService
from app.services.supabase_auth import SupabaseAuthService

logger = logging.getLogger(__name__)


async def start_session_monitor(
    auth: SupabaseAuthService, settings: Settings
) -> SessionMonitor | None:
    try:
        session = await auth.sign_in_with_password(
            settings.service_account_email, settings.service_account_password
        )
    except (AuthenticationError, SupabaseError, RateLimitError, httpx.HTTPError):
        logger.exception("Service account sign-in failed, session monitor disabled")
        return None

    monitor = SessionMonitor(
        auth,
        session,
        check_interval=settings.session_check_interval,
        refresh_threshold=settings.session_refresh_threshold,
    )
    monitor.start()
    return monitor


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=30.0) as client:
        supabase = SupabaseService(
            client, settings.supabase_url, settings.supabase_service_role_key
        )
        auth = SupabaseAuthService(
            client,
            settings.supabase_url,
            settings.supabase_anon_key or settings.supabase_service_role_key,
        )

        # LINE (conditional, only when a channel token is configured)
        line: LineService | None = None
        if settings.line_channel_access_token:
            line = LineService(client, settings.line_channel_access_token)

        app.state.settings = settings
        app.state.supabase_service = supabase
        app.state.supabase_auth = auth
        app.state.secure_booking_service = SecureBookingService(
            supabase, line=line, admin_line_ids=settings.admin_line_ids
        )

        monitor: SessionMonitor | None = None
        if settings.has_service_account:
            monitor = await start_session_monitor(auth, settings)
        app.state.session_monitor = monitor

        logger.info("Bliss server started (environment=%s)", settings.environment)
        try:
            yield
        finally:
            if monitor is not None:
                await monitor.stop()


app = FastAPI(title="Bliss at Home API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(SupabaseError, supabase_error_handler)
app.add_exception_handler(AuthenticationError, authentication_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(system_router)
app.include_router(auth_router)
app.include_router(pricing_router)
app.include_router(secure_bookings_router)
