__all__ = (
    "dto",
    "exc",
    "AbstractAuthenticator",
    "ApiKeyAuthenticator",
    "BearerTokenAuthenticator",
    "Client",
    "PasswordPolicy",
    "PasswordPolicyUpdateDTO",
)
__version__ = "0.1.0"

from . import dto, exc
from .authenticator import (
    AbstractAuthenticator,
    ApiKeyAuthenticator,
    BearerTokenAuthenticator,
)
from .client import Client
from .dto import PasswordPolicyUpdateDTO
from .entity import PasswordPolicy
