from .error import MessageError
from .router import UserMessages

__all__ = ["MessageError", "UserMessages"]
