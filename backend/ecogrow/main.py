"""Main FastAPI application."""
import json
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ecogrow.settings import settings
from ecogrow.api.admin import router as admin_router
from ecogrow.api.auth import router as auth_router
from ecogrow.api.dashboard import router as dashboard_router
from ecogrow.api.home import router as home_router
from ecogrow.api.marketplace import router as marketplace_router
from ecogrow.api.navigation import router as navigation_router
from ecogrow.api.orders import router as orders_router
from ecogrow.api.scan import router as scan_router
from ecogrow.domain.common.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RemoteCallError,
    ValidationError,
)
from ecogrow.infra.db import base as db_base
# Import all models to ensure they're registered with Base
from ecogrow.infra.db.models import (  # noqa: F401
    AuthSessionModel,
    CredentialModel,
    MarketplaceItemModel,
    OrderModel,
    ProfileModel,
    TreeModel,
    UserRoleModel,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    engine = db_base.engine
    if engine is not None:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(db_base.Base.metadata.create_all)
        except Exception as e:
            # Database might not be ready yet; /ready reports it
            logger.warning("Could not connect to database during startup: %s", e)

    yield

    if engine is not None:
        await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["*"],
    max_age=3600,
)


def mask_authorization(headers: dict) -> dict:
    """Copy of the headers with the bearer token shortened."""
    headers = dict(headers)
    auth_header = headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header[7:]
        headers["authorization"] = f"Bearer {token[:20]}..." if len(token) > 20 else "Bearer ***"
    return headers


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        logger.info(f"[REQUEST] {request.method} {request.url.path}")
        logger.debug(f"   Query params: {dict(request.query_params)}")
        if request.headers:
            logger.debug(f"   Headers: {mask_authorization(request.headers)}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"[RESPONSE] {request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")
        return response


# Add logging middleware AFTER CORS (CORS must be first)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed logging."""
    logger.error(f"[VALIDATION ERROR] {request.method} {request.url.path}")
    errors = exc.errors()
    for i, error in enumerate(errors, 1):
        logger.error(f"   Error {i}: {json.dumps(error, default=str)}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(errors)},
    )


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "notice": {"message": message, "type": "error"}},
    )


# Domain error handlers: map domain exceptions to HTTP status
@app.exception_handler(NotFoundError)
async def domain_not_found_handler(request: Request, exc: NotFoundError):
    """Return 404 when a resource is not found."""
    return error_response(404, str(exc))


@app.exception_handler(AuthenticationError)
async def domain_authentication_handler(request: Request, exc: AuthenticationError):
    """Return 401 when there is no valid signed-in identity."""
    response = error_response(401, exc.message)
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(AuthorizationError)
async def domain_authorization_handler(request: Request, exc: AuthorizationError):
    """Return 403 when the user is not authorized."""
    return error_response(403, exc.message)


@app.exception_handler(ValidationError)
async def domain_validation_handler(request: Request, exc: ValidationError):
    """Return 422 for domain validation errors."""
    return error_response(422, exc.message)


@app.exception_handler(ConflictError)
async def domain_conflict_handler(request: Request, exc: ConflictError):
    """Return 409 for conflict errors."""
    return error_response(409, exc.message)


@app.exception_handler(RemoteCallError)
async def domain_remote_call_handler(request: Request, exc: RemoteCallError):
    """Return 502 when a data service call failed; the message is passed through."""
    logger.error("Remote call failed in %s %s (%s): %s", request.method, request.url.path, exc.operation, exc.message)
    return error_response(502, exc.message)


# Health check (root and under /v1)
@app.get("/health")
@app.get(f"{settings.api_v1_prefix}/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


# Readiness: config, packages, DB
@app.get("/ready")
async def readiness():
    """Readiness endpoint: run all checks and return 200 if ready, 503 otherwise."""
    from ecogrow.readiness import is_ready, run_all_checks_async
    checks = await run_all_checks_async()
    ready, summary = is_ready(checks)
    if ready:
        return {"ready": True, "checks": summary}
    return JSONResponse(
        status_code=503,
        content={"ready": False, "checks": summary},
    )


# API v1 routes
app.include_router(home_router, prefix=settings.api_v1_prefix)
app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(navigation_router, prefix=settings.api_v1_prefix)
app.include_router(dashboard_router, prefix=settings.api_v1_prefix)
app.include_router(scan_router, prefix=settings.api_v1_prefix)
app.include_router(marketplace_router, prefix=settings.api_v1_prefix)
app.include_router(orders_router, prefix=settings.api_v1_prefix)
app.include_router(admin_router, prefix=settings.api_v1_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("ecogrow.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
