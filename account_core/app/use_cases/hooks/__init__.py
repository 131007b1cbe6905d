from .encrypt_hook_use_case import EncryptHookUseCase
from .pass_hook_use_case import PassHookUseCase

__all__ = ["EncryptHookUseCase", "PassHookUseCase"]
