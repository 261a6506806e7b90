import contextlib
import logging
from collections.abc import AsyncIterator
from typing import NoReturn

import pydantic

from .. import _conf, exc
from .._pkg import asyauth
from ..editor import PolicyEditor
from ..service import PasswordPolicyService
from ..util.model import convert_errors
from .exc import CLIError

__all__ = "open_editor", "handle_exception"


logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def open_editor(settings: _conf.Settings) -> AsyncIterator[PolicyEditor]:
    """
    Yields an editor with the current policy loaded.

    Raises:
        CLIError: If the policy could not be loaded.
    """
    async with asyauth.Client() as client:
        await client.authenticate(base_url=settings.base_url, authn=settings.auth)

        editor = PolicyEditor(
            service=PasswordPolicyService(client),
            saved_timeout=settings.saved_indicator_timeout,
        )

        try:
            if not await editor.load():
                raise CLIError(
                    "The password policy could not be loaded, run with --debug for "
                    "more details."
                )
            yield editor
        finally:
            await editor.aclose()


def raise_unexpected_exc(ex: Exception) -> NoReturn:
    logger.debug(ex, exc_info=ex)
    raise CLIError("Unexpected error: %r" % ex, exit_code=128) from ex


def handle_exception(ex: Exception) -> NoReturn:
    while True:
        if isinstance(ex, ExceptionGroup):
            ex = ex.exceptions[0]
            continue
        break

    if isinstance(ex, CLIError):
        raise ex

    if isinstance(ex, asyauth.exc.UnauthorizedError):
        raise CLIError("Authorization failed: %s" % ex.detail) from ex

    if isinstance(ex, ConnectionError):
        raise CLIError(str(ex)) from ex

    if isinstance(ex, pydantic.ValidationError):
        raise CLIError("Invalid input.\n\n%s" % convert_errors(ex), exit_code=64) from ex

    if isinstance(ex, exc.ApplicationError):
        raise CLIError(str(ex), exit_code=65) from ex

    raise_unexpected_exc(ex)
