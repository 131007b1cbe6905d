"""
User Use Cases

Account lifecycle: register, read, adjust, update, remove, change-*, exists.
"""

from .register_user_use_case import RegisterUserUseCase
from .get_user_use_case import GetUserUseCase
from .list_user_use_case import ListUserUseCase
from .adjust_user_use_case import AdjustUserUseCase
from .update_user_use_case import UpdateUserUseCase
from .remove_user_use_case import RemoveUserUseCase
from .change_pass_use_case import ChangePassUseCase
from .change_handle_use_case import ChangeHandleUseCase
from .change_email_use_case import ChangeEmailUseCase
from .check_exists_use_case import CheckExistsUseCase

__all__ = [
    "RegisterUserUseCase",
    "GetUserUseCase",
    "ListUserUseCase",
    "AdjustUserUseCase",
    "UpdateUserUseCase",
    "RemoveUserUseCase",
    "ChangePassUseCase",
    "ChangeHandleUseCase",
    "ChangeEmailUseCase",
    "CheckExistsUseCase",
]
