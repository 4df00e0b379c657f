"""
Custom exception classes and FastAPI exception handlers.

The service layer raises these domain-specific errors without importing
HTTP concepts. The handler layer translates them into HTTP responses with
a consistent body: {"detail": "...", "error_type": "..."}.

Exception hierarchy:
    AccountsAPIError (base)
    ├── ValidationError               — malformed/missing/out-of-range field
    ├── DuplicateEmailError           — email already registered
    ├── DuplicateCodeError            — profile code already in use
    ├── DuplicateProfileError         — account already owns a profile
    ├── NotFoundError                 — referenced record does not exist
    ├── CodeGenerationExhaustedError  — no unique code within the retry budget
    └── InvalidCredentialsError       — login/credential check failed

Authorization failures are deliberately absent: a denied caller gets an
empty or null result, never an error (see app/services/access_service.py).
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class AccountsAPIError(Exception):
    """Base exception for all Accounts API domain errors."""

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class ValidationError(AccountsAPIError):
    """
    Raised when an input field is missing, malformed, or out of range.

    Attributes:
        field: Name of the first field that failed validation.
    """

    def __init__(self, field: str, detail: str):
        self.field = field
        super().__init__(detail)


class DuplicateEmailError(AccountsAPIError):
    """Raised when an email is already used by another account."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} is already registered")


class DuplicateCodeError(AccountsAPIError):
    """Raised when a profile code is already in use."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Profile code {code} is already in use")


class DuplicateProfileError(AccountsAPIError):
    """Raised when an account already owns a profile."""

    def __init__(self, account_id: uuid.UUID):
        self.account_id = account_id
        super().__init__(f"Account {account_id} already has a profile")


class NotFoundError(AccountsAPIError):
    """Raised when a mutation references a record that does not exist."""

    def __init__(self, entity: str, identifier: object):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")


class CodeGenerationExhaustedError(AccountsAPIError):
    """Raised when no unique profile code was found within the retry budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Could not generate a unique profile code after {attempts} attempts"
        )


class InvalidCredentialsError(AccountsAPIError):
    """Raised when login credentials are incorrect."""

    def __init__(self):
        super().__init__("Invalid email or password")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    This is called once during app startup in main.py.
    """

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "detail": exc.detail,
                "error_type": "validation_error",
                "field": exc.field,
            },
        )

    @app.exception_handler(DuplicateEmailError)
    async def duplicate_email_handler(
        request: Request, exc: DuplicateEmailError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": exc.detail, "error_type": "duplicate_email"},
        )

    @app.exception_handler(DuplicateCodeError)
    async def duplicate_code_handler(
        request: Request, exc: DuplicateCodeError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": exc.detail, "error_type": "duplicate_code"},
        )

    @app.exception_handler(DuplicateProfileError)
    async def duplicate_profile_handler(
        request: Request, exc: DuplicateProfileError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": exc.detail, "error_type": "duplicate_profile"},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(
        request: Request, exc: NotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"detail": exc.detail, "error_type": "not_found"},
        )

    @app.exception_handler(CodeGenerationExhaustedError)
    async def code_generation_exhausted_handler(
        request: Request, exc: CodeGenerationExhaustedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=503,  # Retryable: the collision burst is transient
            content={"detail": exc.detail, "error_type": "code_generation_exhausted"},
        )

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(
        request: Request, exc: InvalidCredentialsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"detail": exc.detail, "error_type": "invalid_credentials"},
            headers={"WWW-Authenticate": "Basic"},
        )
