import asyncio

import click
from rich.console import Console

from ... import _conf
from ..render import render_policy
from ..session import handle_exception, open_editor

__all__ = ["show"]


async def async_show(settings: _conf.Settings, console: Console) -> None:
    async with open_editor(settings) as editor:
        assert editor.policy is not None
        console.print(render_policy(editor.policy))


@click.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """
    Show the password policy currently enforced by the server.

    Rules rendered as "-" are not enforced.

    Examples:

    \b
      $ policy-pilot -c config.yaml show
    """
    if not (settings := ctx.find_object(_conf.Settings)):
        raise RuntimeError("Configuration not found")

    try:
        asyncio.run(async_show(settings, Console()))
    except Exception as ex:
        handle_exception(ex)
