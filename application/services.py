from __future__ import annotations

import logging
from typing import Optional

from domain.models import Account, AuthErrorKind, AuthResult
from domain.repositories import AccountRepository
from domain.validation import is_valid_email, is_valid_name, validate_password
from infrastructure.crypto.password_hasher import HashingUnavailable, PasswordHasher

logger = logging.getLogger(__name__)

TOKEN_RANDOM_BYTES = 16

MSG_INVALID_NAME = "Name must be at least 2 characters long"
MSG_INVALID_EMAIL = "Invalid email format"
MSG_ALREADY_EXISTS = "User with this email already exists"
MSG_CREATE_FAILED = "Failed to create user account"
MSG_RETRIEVE_FAILED = "Failed to retrieve created user"
MSG_REGISTERED = "User registered successfully"
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_LOGGED_IN = "Login successful"
MSG_STORAGE_FAILED = "Operation failed"


class AuthService:
    """
    Registration and login on top of an `AccountRepository`.

    The service holds its repository for its whole lifetime and never lets
    an exception escape: every call returns an `AuthResult` with `success`
    and `message` populated. Transport layers (HTTP, CLI, ...) only map
    the result to their own response format.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        hasher: Optional[PasswordHasher] = None,
    ) -> None:
        self._accounts = account_repo
        self._hasher = hasher or PasswordHasher()

    def issue_token(self, account: Account) -> str:
        """
        Return an opaque `id:email:random` bearer string.

        The token is neither signed nor recorded anywhere, so nothing can
        verify it later; callers needing real sessions must add them.
        """

        return f"{account.id}:{account.email}:{self._hasher.generate_token(TOKEN_RANDOM_BYTES)}"

    def register(self, name: str, email: str, password: str) -> AuthResult:
        try:
            return self._register(name, email, password)
        except Exception:
            logger.exception("Unexpected error while registering %s", email)
            return AuthResult.failure(AuthErrorKind.STORAGE, MSG_STORAGE_FAILED)

    def login(self, email: str, password: str) -> AuthResult:
        try:
            return self._login(email, password)
        except Exception:
            logger.exception("Unexpected error during login for %s", email)
            return AuthResult.failure(AuthErrorKind.STORAGE, MSG_STORAGE_FAILED)

    def _register(self, name: str, email: str, password: str) -> AuthResult:
        logger.info("Registering user: %s", email)

        if not is_valid_name(name):
            return AuthResult.failure(AuthErrorKind.VALIDATION, MSG_INVALID_NAME)

        if not is_valid_email(email):
            return AuthResult.failure(AuthErrorKind.VALIDATION, MSG_INVALID_EMAIL)

        ok, reason = validate_password(password)
        if not ok:
            return AuthResult.failure(AuthErrorKind.VALIDATION, reason or "Invalid password")

        if self._accounts.exists(email):
            logger.info("Registration rejected, email already in use: %s", email)
            return AuthResult.failure(AuthErrorKind.CONFLICT, MSG_ALREADY_EXISTS)

        try:
            password_hash = self._hasher.hash_password(password)
        except HashingUnavailable as exc:
            logger.error("Failed to hash password for %s: %s", email, exc)
            return AuthResult.failure(
                AuthErrorKind.HASHING_UNAVAILABLE, f"Failed to hash password: {exc}"
            )

        if not self._accounts.create(name, email, password_hash):
            # A concurrent registration may have passed the existence check
            # too; the store's uniqueness constraint decides the winner.
            if self._accounts.exists(email):
                logger.info("Registration lost race for existing email: %s", email)
                return AuthResult.failure(AuthErrorKind.CONFLICT, MSG_ALREADY_EXISTS)
            logger.error("Failed to create account for %s", email)
            return AuthResult.failure(AuthErrorKind.STORAGE, MSG_CREATE_FAILED)

        account = self._accounts.find_by_email(email)
        if account is None:
            logger.error("Account for %s was created but cannot be read back", email)
            return AuthResult.failure(AuthErrorKind.STORAGE, MSG_RETRIEVE_FAILED)

        logger.info("Registered user %s (id=%s)", account.email, account.id)
        return AuthResult(
            success=True,
            message=MSG_REGISTERED,
            token=self.issue_token(account),
            account=account,
        )

    def _login(self, email: str, password: str) -> AuthResult:
        logger.info("Login attempt for: %s", email)

        if not is_valid_email(email):
            return AuthResult.failure(AuthErrorKind.VALIDATION, MSG_INVALID_EMAIL)

        account = self._accounts.find_by_email(email)
        # Unknown email and wrong password share one message.
        if account is None or not self._hasher.verify_password(password, account.password_hash):
            logger.warning("Login failed for %s", email)
            return AuthResult.failure(AuthErrorKind.INVALID_CREDENTIALS, MSG_INVALID_CREDENTIALS)

        logger.info("Login: %s (id=%s)", account.email, account.id)
        return AuthResult(
            success=True,
            message=MSG_LOGGED_IN,
            token=self.issue_token(account),
            account=account,
        )
