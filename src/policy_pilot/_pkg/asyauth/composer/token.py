from dataclasses import dataclass

import pydantic

from .. import constants
from .base import BaseComposer, HeadersContainer


@dataclass(kw_only=True)
class TokenComposer(BaseComposer):
    token: pydantic.SecretStr

    def compose_default_headers(
        self,
    ) -> HeadersContainer:
        headers = super().compose_default_headers()

        # the token already carries its scheme, e.g. "API-Key name$secret"
        headers.setdefault(
            constants.AUTHORIZATION_HEADER, self.token.get_secret_value()
        )

        return headers
