import abc
import logging
from dataclasses import dataclass

import pydantic
from typing_extensions import override

from . import constants

__all__ = "AbstractAuthenticator", "ApiKeyAuthenticator", "BearerTokenAuthenticator"


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AbstractAuthenticator(abc.ABC):
    """
    An abstract class that defines the interface for obtaining the credentials that
    are attached to every request sent to the admin API.
    """

    @abc.abstractmethod
    async def authenticate(self) -> pydantic.SecretStr:
        """Returns the value of the ``Authorization`` header."""


@dataclass(slots=True)
class ApiKeyAuthenticator(AbstractAuthenticator):
    name: str
    secret: pydantic.SecretStr

    @override
    async def authenticate(self) -> pydantic.SecretStr:
        logger.debug("authenticating with API key %r", self.name)
        return pydantic.SecretStr(
            "%s %s$%s"
            % (constants.API_KEY_SCHEME, self.name, self.secret.get_secret_value())
        )


@dataclass(slots=True)
class BearerTokenAuthenticator(AbstractAuthenticator):
    token: pydantic.SecretStr

    @override
    async def authenticate(self) -> pydantic.SecretStr:
        logger.debug("authenticating with bearer token")
        return pydantic.SecretStr(
            "%s %s" % (constants.BEARER_SCHEME, self.token.get_secret_value())
        )
