from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from .error import ClientError, ServerError
from .middleware import handle_preflight, log_requests
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(
        status_code=exc.status_code, content={"error": exc.base_error.message}
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.base_error.message},
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


def make_unexpected_error_handler(allowed_origins):
    # Runs in ServerErrorMiddleware, outside CORSMiddleware
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unexpected error")
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
        origin = request.headers.get("origin")
        if "*" in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
        return response

    return handle_unexpected_error


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Care Team Invite API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last runs first
    app.add_middleware(BaseHTTPMiddleware, dispatch=handle_preflight)
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)

    from src.api.routes import health_check, invite_codes, profiles

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(invite_codes.router, tags=["Invite Codes"])
    app.include_router(profiles.router, tags=["Profiles"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(
        Exception, make_unexpected_error_handler(ApplicationConfig.CORS_ORIGINS)
    )

    return app
