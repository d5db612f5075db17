import hmac
import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware
from acts.api.routes import router
from acts.config import settings
from acts.database import init_db
from acts.schemas.common import BaseResponse

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables at startup."""
    init_db()
    logger.info("ACTS %s started (database: %s)", settings.VERSION, settings.DATABASE_URL.split("://")[0])
    yield


app = FastAPI(
    title="ACTS",
    description="Astronaut Career Tracking System: personnel records and duty-assignment history.",
    version=settings.VERSION,
    lifespan=lifespan,
)

# CORS origins from settings (supports comma-separated env var)
cors_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Simple API key check. If ACTS_API_KEY is unset, all requests pass."""

    async def dispatch(self, request: Request, call_next):
        if settings.ACTS_API_KEY is not None:
            # Allow health check and OpenAPI docs without auth
            if request.url.path not in ("/health", "/docs", "/openapi.json", "/redoc"):
                api_key = request.headers.get("X-API-Key")
                if not hmac.compare_digest(api_key or "", settings.ACTS_API_KEY):
                    return JSONResponse(
                        status_code=401,
                        content=BaseResponse(
                            success=False, message="Invalid or missing API key", response_code=401
                        ).to_content(),
                    )
        return await call_next(request)


app.add_middleware(APIKeyMiddleware)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    enabled=settings.RATE_LIMIT_ENABLED,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 in the response envelope. Sync so SlowAPIMiddleware can call it directly."""
    response = JSONResponse(
        status_code=429,
        content=BaseResponse(
            success=False, message=f"Rate limit exceeded: {exc.detail}", response_code=429
        ).to_content(),
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response


app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(router)


# ── Envelope error handlers ───────────────────────────────────────────────────

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body') or 'body'}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content=BaseResponse(success=False, message=f"Validation error: {problems}", response_code=400).to_content(),
    )


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s:\n%s", request.method, request.url.path, traceback.format_exc())
    return JSONResponse(
        status_code=500,
        content=BaseResponse(success=False, message="An unexpected error occurred.", response_code=500).to_content(),
    )
