import re

from pydantic import BaseModel, field_validator

from delivery.auth.permissions import ROLES

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class LoginIn(BaseModel):
    email: str
    password: str


class RegisterForm(LoginIn):
    role: str


class RegisterIn(RegisterForm):
    """A registration whose fields passed the format checks."""

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email format")
        return v

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if len(v) < 4 or len(v) > 10:
            raise ValueError("Password must be between 4 and 10 characters long")
        return v

    @field_validator("role")
    @classmethod
    def check_role(cls, v: str) -> str:
        if v not in ROLES:
            raise ValueError("Invalid role. It must be one of admin, user, or driver")
        return v

