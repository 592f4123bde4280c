from __future__ import annotations

from typing import Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from application.services import AuthService
from interfaces.http.routes import failure_response, router as auth_router

SERVICE_NAME = "LINCOLN API"
SERVICE_VERSION = "0.1.0"


async def _invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "invalid body") if errors else "invalid body"
    return failure_response(status.HTTP_400_BAD_REQUEST, f"Invalid JSON format: {detail}")


def create_app(
    auth_service: AuthService,
    cors_origins: Optional[Sequence[str]] = None,
) -> FastAPI:
    """
    Build the HTTP application around an already-wired `AuthService`.

    The app contains only transport concerns: request parsing, CORS and
    mapping `AuthResult` values to status codes.
    """

    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    app.state.auth_service = auth_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins or ["*"]),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=3600,
    )

    app.add_exception_handler(RequestValidationError, _invalid_body_handler)

    app.include_router(auth_router, prefix="/api/auth")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "service": SERVICE_NAME, "version": SERVICE_VERSION}

    return app
