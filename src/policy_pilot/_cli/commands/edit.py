import asyncio
import logging

import click
from rich.console import Console

from ... import _conf, event, validator
from ...editor import EditorState
from ..exc import CLIError
from ..render import render_changes, render_policy
from ..session import handle_exception, open_editor

__all__ = ["edit"]


logger = logging.getLogger(__name__)


async def async_edit(
    settings: _conf.Settings,
    console: Console,
    edits: dict[str, int],
    dry_run: bool,
) -> None:
    async with open_editor(settings) as editor:

        async def on_state_changed(ev: event.StateChanged) -> None:
            logger.debug("editor state: %s -> %s", ev.previous, ev.current)

        async def on_submit_error(ev: event.PolicySubmitError) -> None:
            console.print("=> Rejected by the server: %s" % ev.message, style="yellow")

        editor.subscribe((event.StateChanged,), on_state_changed)
        editor.subscribe((event.PolicySubmitError,), on_submit_error)

        await editor.update(**edits)
        console.print(render_changes(editor.changes()))

        assert editor.policy is not None
        if dry_run:
            validator.validate(editor.policy)
            console.print(render_policy(editor.policy))
            return

        if not await editor.submit():
            raise CLIError(
                editor.error_message,
                exit_code=69 if editor.state == EditorState.SUBMIT_ERROR else 65,
            )

        console.print("=> Saved", style="green")


@click.command()
@click.option("--length-min", type=int, help="Minimum password length (8-128).")
@click.option("--length-max", type=int, help="Maximum password length (8-128).")
@click.option(
    "--lower",
    "include_lower_case",
    type=int,
    help="Minimum number of lower case characters (0-32).",
)
@click.option(
    "--upper",
    "include_upper_case",
    type=int,
    help="Minimum number of upper case characters (0-32).",
)
@click.option(
    "--digits", "include_digits", type=int, help="Minimum number of digits (0-32)."
)
@click.option(
    "--special",
    "include_special",
    type=int,
    help="Minimum number of special characters (0-32).",
)
@click.option(
    "--not-recently-used",
    type=int,
    help="Number of previous passwords that may not be reused (0-32).",
)
@click.option(
    "--valid-days",
    type=int,
    help="Days before a newly set password expires (0-3650).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Validate the edited policy and show it without submitting.",
)
@click.pass_context
def edit(ctx: click.Context, dry_run: bool, **options: int | None) -> None:
    """
    Edit the password policy enforced by the server.

    Rules that are not given keep their current value. Setting a rule to 0 disables
    it.

    Examples:

    \b
      # Require passwords of 12 to 64 characters with at least two digits
      $ policy-pilot edit --length-min 12 --length-max 64 --digits 2
    \b
      # Check an edit without applying it
      $ policy-pilot edit --special 4 --dry-run
    """
    if not (settings := ctx.find_object(_conf.Settings)):
        raise RuntimeError("Configuration not found")

    edits = {name: value for name, value in options.items() if value is not None}

    try:
        asyncio.run(async_edit(settings, Console(), edits, dry_run))
    except Exception as ex:
        handle_exception(ex)
