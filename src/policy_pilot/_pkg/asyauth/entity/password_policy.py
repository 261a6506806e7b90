from typing import Annotated, Optional

import annotated_types
import pydantic

from ..dto.base import CharClassMin


class PasswordPolicy(pydantic.BaseModel):
    """The password policy as the server reports it."""

    length_min: int = pydantic.Field(ge=8, le=128)
    length_max: int = pydantic.Field(ge=8, le=128)
    include_lower_case: Optional[CharClassMin] = None
    include_upper_case: Optional[CharClassMin] = None
    include_digits: Optional[CharClassMin] = None
    include_special: Optional[CharClassMin] = None
    not_recently_used: Optional[CharClassMin] = None
    valid_days: Optional[
        Annotated[int, annotated_types.Ge(0), annotated_types.Le(3650)]
    ] = None
