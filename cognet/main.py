"""FastAPI application entry point.

Configures application, middleware, and routes.
"""

import uuid
from contextlib import asynccontextmanager
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cognet import __version__
from cognet.api import router
from cognet.api.dependencies import ServiceContainer
from cognet.config import get_settings
from cognet.observ import bind_request, clear_context, get_logger, log_request
from cognet.errors import CognetError, ErrorDetail, ErrorCode

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan for startup/shutdown tasks."""
    logger.info("application_startup", version=app.version)
    await ServiceContainer.initialize()
    yield
    logger.info("application_shutdown")
    await ServiceContainer.cleanup()


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the application; tests pass `use_lifespan=False` and inject services."""
    settings = get_settings()

    app = FastAPI(
        title="Cognet API",
        description="Cognate chain discovery across languages",
        version=__version__,
        lifespan=lifespan if use_lifespan else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["Origin", "Content-Type", "Accept"],
    )

    app.include_router(router)
    register_error_handlers(app)
    app.middleware("http")(logging_middleware)
    return app


# ═════════════════════════════════════════════════════════════════════════════
# Error Handlers
# ═════════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, detail: ErrorDetail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": detail.model_dump(mode="json")})


async def cognet_error_handler(request: Request, exc: CognetError) -> JSONResponse:
    logger.warning("application_error", error_code=exc.code.value, error=exc.message, **exc.context)
    return error_response(exc.status_code, exc.to_detail())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed query or body parameters are a 400, like any other bad input."""
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("validation_error", details=details)
    return error_response(400, ErrorDetail(
        code=ErrorCode.INVALID_INPUT,
        message="Invalid request data",
        context={"details": details}
    ))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": "http_error", "message": exc.detail}}
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error_type=type(exc).__name__)
    return error_response(500, ErrorDetail(
        code=ErrorCode.EXTERNAL_SERVICE_ERROR,
        message="An unexpected error occurred"
    ))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CognetError, cognet_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


# ═════════════════════════════════════════════════════════════════════════════
# Request Logging Middleware
# ═════════════════════════════════════════════════════════════════════════════

async def logging_middleware(request: Request, call_next) -> Response:
    """Time each request and tag its log entries with an X-Request-ID."""
    request_id = str(uuid.uuid4())
    bind_request(request_id)
    start = perf_counter()
    try:
        response = await call_next(request)
        log_request(
            logger,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=(perf_counter() - start) * 1000
        )
    finally:
        clear_context()

    response.headers["X-Request-ID"] = request_id
    return response


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "cognet.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
