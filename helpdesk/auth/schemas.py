# helpdesk/auth/schemas.py
from pydantic import BaseModel, Field


class LoginForm(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class SignupForm(LoginForm):
    name: str = Field(..., min_length=1)
