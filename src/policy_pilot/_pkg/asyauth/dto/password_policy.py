from typing import Annotated

import annotated_types
from typing_extensions import NotRequired

from .base import CharClassMin, LengthMixin


class PasswordPolicyUpdateDTO(LengthMixin):
    """
    Request body of the password policy update endpoint.

    Optional rules that are left out are not enforced by the server.
    """

    include_lower_case: NotRequired[CharClassMin]
    include_upper_case: NotRequired[CharClassMin]
    include_digits: NotRequired[CharClassMin]
    include_special: NotRequired[CharClassMin]
    not_recently_used: NotRequired[CharClassMin]
    valid_days: NotRequired[
        Annotated[int, annotated_types.Ge(0), annotated_types.Le(3650)]
    ]
