# helpdesk/auth/services.py
"""Credential checks.

There is no account database: any well-formed login is accepted and the
session user is built from what the form carried.
"""
import logging

from pydantic import ValidationError

from helpdesk.auth.schemas import LoginForm, SignupForm
from helpdesk.core.errors import ValidationFailure
from helpdesk.core.sessions import User

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Admin User"


def authenticate(email: str, password: str) -> User:
    try:
        form = LoginForm(email=email, password=password)
    except ValidationError as exc:
        logger.info("Rejected login for %r", email)
        raise ValidationFailure("Invalid credentials", redirect_to="/login") from exc
    return User(name=PLACEHOLDER_NAME, email=form.email)


def register(name: str, email: str, password: str) -> User:
    try:
        form = SignupForm(name=name, email=email, password=password)
    except ValidationError as exc:
        logger.info("Rejected signup for %r", email)
        raise ValidationFailure("Invalid signup data", redirect_to="/signup") from exc
    return User(name=form.name, email=form.email)
