from ._password_policy import PasswordPolicyService, compose_payload

__all__ = (
    "PasswordPolicyService",
    "compose_payload",
)
