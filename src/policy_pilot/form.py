from typing import Annotated

import annotated_types
import pydantic
from typing_extensions import Self

from ._pkg import asyauth
from ._pkg.asyauth.dto.base import CharClassMin

__all__ = "PasswordPolicyForm", "OPTIONAL_FIELDS", "CHAR_CLASS_FIELDS"

CHAR_CLASS_FIELDS = (
    "include_lower_case",
    "include_upper_case",
    "include_digits",
    "include_special",
)
OPTIONAL_FIELDS = (*CHAR_CLASS_FIELDS, "not_recently_used", "valid_days")


class PasswordPolicyForm(pydantic.BaseModel):
    """
    The editable copy of a password policy.

    Every field is always defined: rules the server does not enforce are held as
    ``0``. Bounds are checked on each assignment, while the rules spanning several
    fields are left to :func:`policy_pilot.validator.validate`.
    """

    model_config = pydantic.ConfigDict(validate_assignment=True, extra="forbid")

    length_min: int = pydantic.Field(ge=8, le=128)
    length_max: int = pydantic.Field(ge=8, le=128)
    include_lower_case: CharClassMin = 0
    include_upper_case: CharClassMin = 0
    include_digits: CharClassMin = 0
    include_special: CharClassMin = 0
    not_recently_used: CharClassMin = 0
    valid_days: Annotated[
        int, annotated_types.Ge(0), annotated_types.Le(3650)
    ] = 0

    @classmethod
    def from_entity(cls, entity: asyauth.PasswordPolicy) -> Self:
        return cls(
            length_min=entity.length_min,
            length_max=entity.length_max,
            **{name: getattr(entity, name) or 0 for name in OPTIONAL_FIELDS},
        )
