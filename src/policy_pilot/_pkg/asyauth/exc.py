from dataclasses import dataclass
from typing import Any

import aiohttp
from typing_extensions import TypedDict, override


@dataclass(slots=True)
class AsyauthError(Exception):
    """
    Base exception for all asyauth errors.
    """

    class Context(TypedDict): ...

    message: str
    ctx: Context

    def format_message(self) -> str:
        return f"{self.message.format(ctx=self.ctx or {})}.\n\n{[self.ctx]}"

    @override
    def __str__(self) -> str:
        return self.format_message()


async def read_body(response: aiohttp.ClientResponse) -> dict[str, Any]:
    """Returns the decoded JSON body, wrapping a plain text body as a message."""
    try:
        body = await response.json(content_type=None)
    except ValueError:
        return {"message": (await response.text()).strip()}

    return body if isinstance(body, dict) else {}


@dataclass(slots=True)
class APIError(AsyauthError):
    class Context(TypedDict):
        response: dict[str, Any]
        http_method: str
        request_url: str
        status: int

    @property
    def detail(self) -> str:
        """
        The human-readable message provided by the server, falling back to the
        client-side message if the response body carries none.
        """
        response = (self.ctx or {}).get("response") or {}
        return str(response.get("message") or self.message)

    @classmethod
    async def compose_context(cls, response: aiohttp.ClientResponse) -> "Context":
        return cls.Context(
            response=await read_body(response),
            http_method=response.method,
            request_url=str(response.url),
            status=response.status,
        )

    @classmethod
    async def from_response(
        cls, message: str, response: aiohttp.ClientResponse
    ) -> "APIError":
        _STATUS_EXCEPTION_MAP: dict[int, type[APIError]] = {
            400: InvalidRequestError,
            401: UnauthorizedError,
            403: ForbiddenError,
            404: InvalidPathError,
            429: RateLimitExceededError,
            500: InternalServerErrorError,
            502: BadGatewayError,
            503: ServiceUnavailableError,
        }

        return _STATUS_EXCEPTION_MAP.get(response.status, UnexpectedError)(
            message=message, ctx=await cls.compose_context(response)
        )


@dataclass(slots=True)
class InvalidRequestError(APIError):
    pass


@dataclass(slots=True)
class ForbiddenError(APIError):
    pass


@dataclass(slots=True)
class InvalidPathError(APIError):
    pass


@dataclass(slots=True)
class RateLimitExceededError(APIError):
    pass


@dataclass(slots=True)
class InternalServerErrorError(APIError):
    pass


@dataclass(slots=True)
class ServiceUnavailableError(APIError):
    pass


@dataclass(slots=True)
class UnexpectedError(APIError):
    pass


@dataclass(slots=True)
class BadGatewayError(APIError):
    pass


@dataclass(slots=True)
class UnauthorizedError(APIError):
    """
    Raised when the server rejects the credentials attached to the session. This can
    happen for a variety of reasons, including an unknown or expired API key, a
    revoked token, or a session that lacks the admin role.
    """


class ServerConnectionError(ConnectionError):
    """
    Raised when the server drops the connection or doesn't answer in time, as opposed
    to refusing it outright.
    """
