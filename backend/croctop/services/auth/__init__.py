"""Authentication services: signup, signin and token refresh."""

from .dto import AccessTokenOut, SigninIn, SigninOut, SignupIn
from .service import AuthService

__all__ = ["AccessTokenOut", "AuthService", "SigninIn", "SigninOut", "SignupIn"]
