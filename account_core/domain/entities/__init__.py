"""
Account Core Domain Entities

One entity per file; every collection is addressed by a stable canon name.
"""

from .account import Account
from .login import Login
from .verification import Verification

__all__ = [
    "Account",
    "Login",
    "Verification",
]
