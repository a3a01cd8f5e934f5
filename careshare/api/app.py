import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(ApplicationConfig, lifespan=None) -> FastAPI:
    app = FastAPI(title="CareShare API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from careshare.api.routes import (
        access_grants,
        admin,
        health_check,
        invitations,
        organizations,
        otp,
        password_reset,
        profiles,
    )

    prefix = ApplicationConfig.API_PREFIX

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(profiles.router, prefix=prefix)
    app.include_router(organizations.router, prefix=prefix)
    app.include_router(organizations.partnerships_router, prefix=prefix)
    app.include_router(invitations.router, prefix=prefix)
    app.include_router(password_reset.router, prefix=prefix)
    app.include_router(otp.router, prefix=prefix)
    app.include_router(access_grants.router, prefix=prefix)
    app.include_router(access_grants.patients_router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
