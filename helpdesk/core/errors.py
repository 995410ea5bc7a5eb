# helpdesk/core/errors.py
"""Failures a request can end in.

Every handler raises one of these and the exception handlers in
``helpdesk.main`` turn it into a flash message plus redirect, or a JSON body
when the client asked for one.
"""


class AppError(Exception):
    status_code = 500
    redirect_to = "/"

    def __init__(self, message: str, redirect_to: str | None = None):
        super().__init__(message)
        self.message = message
        if redirect_to is not None:
            self.redirect_to = redirect_to


class ValidationFailure(AppError):
    status_code = 400


class NotFound(AppError):
    status_code = 404
    redirect_to = "/tickets"


class StorageError(AppError):
    status_code = 500


class AuthRequired(AppError):
    status_code = 401
    redirect_to = "/login"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


__all__ = ["AppError", "ValidationFailure", "NotFound", "StorageError", "AuthRequired"]
