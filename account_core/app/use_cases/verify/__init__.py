"""
Verification Use Cases
"""

from .make_verify_use_case import MakeVerifyUseCase
from .list_verify_use_case import ListVerifyUseCase
from .check_verify_use_case import CheckVerifyUseCase

__all__ = [
    "MakeVerifyUseCase",
    "ListVerifyUseCase",
    "CheckVerifyUseCase",
]
