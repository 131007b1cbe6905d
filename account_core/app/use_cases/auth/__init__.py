"""
Authentication Use Cases

Login, logout, session listing and token authentication.
"""

from .login_user_use_case import LoginUserUseCase
from .logout_user_use_case import LogoutUserUseCase
from .list_login_use_case import ListLoginUseCase
from .auth_user_use_case import AuthUserUseCase

__all__ = [
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "ListLoginUseCase",
    "AuthUserUseCase",
]
