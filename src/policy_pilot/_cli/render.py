from typing import Any

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from .. import validator
from ..form import OPTIONAL_FIELDS, PasswordPolicyForm

__all__ = "LABELS", "render_policy", "render_changes"

LABELS = {
    "length_min": "Min Length",
    "length_max": "Max Length",
    "include_lower_case": "Lowercase Min",
    "include_upper_case": "Uppercase Min",
    "include_digits": "Digits Min",
    "include_special": "Special Min",
    "not_recently_used": "Not Recently Used",
    "valid_days": "Valid For Days",
}


def render_policy(policy: PasswordPolicyForm) -> RenderableType:
    table = Table(title="Password Policy", show_header=True)
    table.add_column("Rule")
    table.add_column("Value", justify="right")

    for name, label in LABELS.items():
        value = getattr(policy, name)
        if name in OPTIONAL_FIELDS and not value:
            table.add_row(label, Text("-", style="dim"))
        else:
            table.add_row(label, str(value))

    return Group(
        table,
        Text(
            "Characters required by the includes: %d" % validator.quota(policy),
            style="steel_blue3",
        ),
        Text(
            "The validity only applies to newly set passwords. "
            "Set a rule to 0 to disable it.",
            style="dim",
        ),
    )


def render_changes(changes: dict[str, Any]) -> RenderableType:
    values_changed = changes.get("values_changed") or {}
    if not values_changed:
        return Text("=> No changes", style="dim")

    lines = []
    for path, change in values_changed.items():
        # paths look like "root['length_min']"
        name = path.removeprefix("root['").removesuffix("']")
        lines.append(
            Text(
                "=> %s: %s -> %s"
                % (LABELS.get(name, name), change["old_value"], change["new_value"]),
                style="steel_blue3",
            )
        )

    return Group(*lines)
