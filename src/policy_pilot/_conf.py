from typing import Literal

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic.dataclasses import dataclass
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ._pkg import asyauth
from .editor import SAVED_INDICATOR_TIMEOUT

_config = ConfigDict(alias_generator=to_camel, extra="forbid")


@dataclass(slots=True, config=_config, kw_only=True)
class ApiKeyAuthMethod(asyauth.ApiKeyAuthenticator):
    method: Literal["api-key"]


@dataclass(slots=True, config=_config, kw_only=True)
class TokenAuthMethod(asyauth.BearerTokenAuthenticator):
    method: Literal["token"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        validate_default=False,
        env_nested_delimiter="__",
    )

    base_url: str
    auth: ApiKeyAuthMethod | TokenAuthMethod = Field(discriminator="method")
    saved_indicator_timeout: float = Field(default=SAVED_INDICATOR_TIMEOUT, gt=0)

    @classmethod
    def settings_customise_sources(
        cls,
        _: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, file_secret_settings, init_settings
