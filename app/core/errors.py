# app/core/errors.py
"""
Errores tipados del dominio.

Los services lanzan estas excepciones; solo la frontera HTTP (app/main.py)
traduce `kind` -> status code. Ninguna se reintenta.
"""
from __future__ import annotations


class AppError(Exception):
    kind = "app_error"
    status_code = 500
    default_detail = "internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AppError):
    kind = "validation_error"
    status_code = 400
    default_detail = "invalid input"


class AuthenticationError(AppError):
    kind = "authentication_error"
    status_code = 401
    default_detail = "not authenticated"


class InvalidCredentialsError(AuthenticationError):
    # mismo mensaje para usuario inexistente y password incorrecto
    kind = "invalid_credentials"
    status_code = 400
    default_detail = "invalid credentials"


class ForbiddenError(AppError):
    kind = "forbidden"
    status_code = 403
    default_detail = "forbidden"


class NotFoundError(AppError):
    kind = "not_found"
    status_code = 404
    default_detail = "not found"


class ConflictError(AppError):
    kind = "conflict"
    status_code = 400
    default_detail = "already exists"


class DuplicateUsernameError(ConflictError):
    default_detail = "username already exists"


class StorageError(AppError):
    kind = "storage_error"
    status_code = 500
    default_detail = "storage error"
