"""FastAPI application for flashgen."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from flashgen.config import configure_logging, get_settings
from flashgen.database import dispose_engine, initialize_database
from flashgen.domain.common.exceptions import (
    AuthorizationError,
    DomainError,
    EntityNotFoundError,
)
from flashgen.domain.identity.exceptions import (
    InvalidCredentialsError,
    RegistrationDisabledError,
)
from flashgen.exceptions import FlashgenError
from flashgen.infrastructure.common.rate_limit import limiter
from flashgen.infrastructure.common.routers import settings as settings_router
from flashgen.infrastructure.common.validation import field_errors
from flashgen.infrastructure.generation.routers import generation_error_logs, generations
from flashgen.infrastructure.identity.routers import auth
from flashgen.infrastructure.learning.routers import flashcards

logger = structlog.get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)
    logger.info(
        "application_started",
        environment=settings.ENVIRONMENT,
        ai_enabled=settings.ai_enabled,
    )
    yield
    dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _domain_error_status(exc: DomainError) -> int:
    if isinstance(exc, InvalidCredentialsError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, RegistrationDisabledError | AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(FlashgenError)
async def flashgen_error_handler(request: Request, exc: FlashgenError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "request_failed",
            path=request.url.path,
            kind=exc.kind.value,
            error=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    content: dict[str, object] = {"error": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=_domain_error_status(exc), content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request data",
            "details": [error.to_dict() for error in field_errors(exc.errors())],
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


api_router = APIRouter(prefix=settings.API_V1_PREFIX)
api_router.include_router(auth.router)
api_router.include_router(flashcards.router)
api_router.include_router(generations.router)
api_router.include_router(generation_error_logs.router)
api_router.include_router(settings_router.router)


@api_router.get("/")
async def api_root() -> dict[str, str]:
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }


app.include_router(api_router)


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
