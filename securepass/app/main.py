import traceback
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from securepass.app.api.bot import router as bot_router
from securepass.app.api.passwords import router as passwords_router
from securepass.app.core.config import Settings, settings as default_settings
from securepass.app.core.logging import get_logger, setup_logging
from securepass.app.core.security import SecureRandom, SystemSecureRandom
from securepass.app.exceptions import RateLimitExceededError, SecurePassException
from securepass.app.middleware.rate_limit import SlidingWindowRateLimiter, get_rate_limiter
from securepass.app.middleware.request_id import RequestIdMiddleware, get_request_id
from securepass.app.services.bot import PasswordBot
from securepass.app.services.issuer import PasswordIssuer


def create_app(
    app_settings: Optional[Settings] = None,
    rng: Optional[SecureRandom] = None,
    rate_limiter: Optional[SlidingWindowRateLimiter] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        app_settings: Settings override (defaults to environment settings)
        rng: Random source override (defaults to the OS-backed source)
        rate_limiter: Rate limiter override (defaults to a fresh in-memory one)

    Returns:
        Configured FastAPI application instance
    """
    config = app_settings or default_settings

    setup_logging()
    logger = get_logger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan context manager.

        Builds the process-wide rate limiter, the random source and the
        services using them; they live until shutdown and are never persisted.
        """
        limiter = rate_limiter or SlidingWindowRateLimiter(
            window_seconds=config.rate_limit_window_seconds
        )
        source = rng or SystemSecureRandom()
        issuer = PasswordIssuer.from_settings(config, limiter, source)

        app.state.settings = config
        app.state.rate_limiter = limiter
        app.state.rng = source
        app.state.issuer = issuer
        app.state.bot = PasswordBot(issuer, config)

        logger.info(
            "Application startup complete",
            extra={
                "default_password_length": config.default_password_length,
                "password_length_range": f"{config.min_password_length}-{config.max_password_length}",
                "rate_limit_per_minute": config.rate_limit_per_minute,
                "debug_mode": config.debug,
            },
        )

        yield

        logger.info("Application shutdown complete")

    app = FastAPI(
        title=f"{config.bot_name} Password Generator",
        description="Secure password generation with strength estimation and per-client rate limiting",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIdMiddleware)

    app.include_router(passwords_router)
    app.include_router(bot_router)

    @app.get("/health")
    async def health(request: Request) -> dict[str, Any]:
        """Health check endpoint with rate limiter and random source status."""
        health_status: dict[str, Any] = {"status": "ok", "components": {}}

        limiter = get_rate_limiter(request)
        health_status["components"]["rate_limiter"] = {
            "status": "ok",
            "tracked_keys": limiter.tracked_keys(),
        }

        source = request.app.state.rng
        try:
            source.randbelow(2)
            health_status["components"]["random_source"] = {
                "status": "ok",
                "type": type(source).__name__,
            }
        except Exception as e:
            health_status["status"] = "degraded"
            health_status["components"]["random_source"] = {
                "status": "error",
                "error": str(e)[:100],
            }

        return health_status

    @app.exception_handler(RateLimitExceededError)
    async def rate_limit_handler(request: Request, exc: RateLimitExceededError) -> JSONResponse:
        """Handle RateLimitExceededError and return HTTP 429 response."""
        retry_after = exc.retry_after or config.rate_limit_window_seconds
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "retry_after": retry_after,
            },
            headers={
                "X-RateLimit-Limit": str(exc.limit),
                "X-RateLimit-Remaining": "0",
                "Retry-After": str(retry_after),
            },
        )

    @app.exception_handler(SecurePassException)
    async def securepass_error_handler(request: Request, exc: SecurePassException) -> JSONResponse:
        """Handle generation and parsing errors with their own status code."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error_code, "message": exc.message},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled exceptions.

        The traceback is logged server-side and never returned to the client.
        """
        request_id = get_request_id(request)

        logger.exception(
            f"Unhandled exception [request_id={request_id}]",
            extra={
                "request_id": request_id,
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc(),
            },
        )

        if config.debug:
            return JSONResponse(
                status_code=500,
                content={
                    "error": "internal_error",
                    "message": str(exc),
                    "exception_type": type(exc).__name__,
                    "request_id": request_id,
                },
            )

        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "Internal server error",
                "request_id": request_id,
            },
        )

    return app


# Create the application instance
app = create_app()
