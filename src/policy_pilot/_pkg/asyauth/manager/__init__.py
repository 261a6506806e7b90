from .base import BaseManager
from .password_policy import PasswordPolicyManager

__all__ = (
    "BaseManager",
    "PasswordPolicyManager",
)
