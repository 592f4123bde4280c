"""
Auth API routes: register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from application.services import AuthService
from domain.models import AuthErrorKind, AuthResult
from interfaces.http.schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

_FAILURE_STATUS: Dict[AuthErrorKind, int] = {
    AuthErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    AuthErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    AuthErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.HASHING_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def failure_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def result_response(result: AuthResult, success_status: int) -> JSONResponse:
    if result.success:
        return JSONResponse(status_code=success_status, content=result.to_payload())
    code = _FAILURE_STATUS.get(result.error_kind, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=code, content=result.to_payload())


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register")
def register(
    req: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Register a new user."""
    if not req.name or not req.email or not req.password:
        return failure_response(
            status.HTTP_400_BAD_REQUEST, "Name, email, and password are required"
        )

    try:
        result = auth_service.register(req.name, req.email, req.password)
    except Exception as exc:
        logger.exception("Exception in register endpoint")
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Registration failed: {exc}"
        )

    if not result.success:
        logger.info("Registration failed: %s", result.message)
    return result_response(result, status.HTTP_201_CREATED)


@router.post("/login")
def login(
    req: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Login with email + password."""
    if not req.email or not req.password:
        return failure_response(status.HTTP_400_BAD_REQUEST, "Email and password are required")

    try:
        result = auth_service.login(req.email, req.password)
    except Exception as exc:
        logger.exception("Exception in login endpoint")
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Internal server error: {exc}"
        )

    if not result.success:
        logger.info("Login failed: %s", result.message)
    return result_response(result, status.HTTP_200_OK)
