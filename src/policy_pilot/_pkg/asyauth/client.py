import asyncio
import functools
from collections.abc import Awaitable, Coroutine
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    ParamSpec,
    Self,
    TypeVar,
)

import aiohttp
from typing_extensions import Unpack

from . import authenticator, composer, exc
from .dto import PasswordPolicyUpdateDTO
from .entity import PasswordPolicy
from .manager import password_policy

P = ParamSpec("P")
T = TypeVar("T")


def login_required(func: Callable[P, T]) -> Callable[P, T]:
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        assert isinstance((client := args[0]), Client), (
            "Expected instance of %r, got %r" % (Client, client)
        )
        assert (
            client.is_authenticated
        ), "The client must be authenticated before calling this method."
        return func(*args, **kwargs)

    return wrapper


def exception_handler(
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Coroutine[Any, Any, T]]:
    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except aiohttp.ClientConnectorError as ex:
            raise ConnectionRefusedError(
                (
                    'The connection to the server "%s:%s" was refused - did you '
                    "specify the right host or port?"
                )
                % (ex.host, ex.port)
            ) from ex
        except (aiohttp.ClientError, asyncio.TimeoutError) as ex:
            raise exc.ServerConnectionError(
                "The request to the server failed: %s" % (str(ex) or type(ex).__name__)
            ) from ex

    return wrapper


@dataclass(slots=True)
class Client:
    _authn_sess: aiohttp.ClientSession | None = field(init=False, default=None)
    _pwd_policy_mgr: password_policy.PasswordPolicyManager = field(
        init=False, default_factory=password_policy.PasswordPolicyManager
    )

    @property
    def is_authenticated(self) -> bool:
        return bool(self._authn_sess)

    async def authenticate(
        self,
        base_url: str,
        authn: authenticator.AbstractAuthenticator,
    ) -> Self:
        # Obtain the value of the Authorization header
        token = await authn.authenticate()

        # Provide the managers with an authenticated session, allowing them to access
        # the admin endpoints
        self._authn_sess = composer.TokenComposer(
            base_url=base_url, token=token
        ).create()

        self._pwd_policy_mgr.configure(sess=self._authn_sess)

        return self

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *_: Any) -> None:
        if self._authn_sess:
            await self._authn_sess.close()
            self._authn_sess = None

    @exception_handler
    @login_required
    async def read_password_policy(self) -> PasswordPolicy:
        """
        Reads the current password policy.

        Raises:
            APIError: If the server rejects the request.
        """
        return await self._pwd_policy_mgr.read()

    @exception_handler
    @login_required
    async def update_password_policy(
        self, **payload: Unpack[PasswordPolicyUpdateDTO]
    ) -> PasswordPolicy | None:
        """
        Replaces the password policy.

        Args:
            length_min: Minimum password length.
            length_max: Maximum password length.
            include_lower_case: Minimum number of lower case characters. Leave out to
                stop enforcing the rule, the same applies to the rest of the optional
                rules.
            include_upper_case: Minimum number of upper case characters.
            include_digits: Minimum number of digits.
            include_special: Minimum number of special characters.
            not_recently_used: Number of previous passwords that may not be reused.
            valid_days: Days before a new password expires.

        Returns:
            The policy as stored by the server, or ``None`` if the server doesn't echo
            it back.

        Raises:
            APIError: If the server rejects the policy.
        """
        return await self._pwd_policy_mgr.update(**payload)
