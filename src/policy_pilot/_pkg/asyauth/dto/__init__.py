from .password_policy import PasswordPolicyUpdateDTO

__all__ = ("PasswordPolicyUpdateDTO",)
