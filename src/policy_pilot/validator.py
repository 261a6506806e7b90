"""
Consistency checks for an edited password policy.

The field bounds are already enforced by :class:`~policy_pilot.form.PasswordPolicyForm`,
what is left are the rules spanning several fields which the server would reject.
"""

from .exc import (
    LENGTH_ORDER_MESSAGE,
    QUOTA_OVERFLOW_MESSAGE,
    LengthOrderError,
    PolicyValidationError,
    QuotaOverflowError,
)
from .form import CHAR_CLASS_FIELDS, PasswordPolicyForm

__all__ = "quota", "validate", "is_valid"


def quota(policy: PasswordPolicyForm) -> int:
    """Returns the number of characters a password must include at a minimum."""
    return sum(getattr(policy, name) or 0 for name in CHAR_CLASS_FIELDS)


def validate(policy: PasswordPolicyForm) -> None:
    """
    Checks that the policy is internally consistent.

    Raises:
        LengthOrderError: If ``length_max`` is lower than ``length_min``.
        QuotaOverflowError: If the character class minimums do not fit into
            ``length_max``.
    """
    if policy.length_max < policy.length_min:
        raise LengthOrderError(
            LENGTH_ORDER_MESSAGE,
            ctx=LengthOrderError.Context(
                length_min=policy.length_min, length_max=policy.length_max
            ),
        )

    if (total := quota(policy)) > policy.length_max:
        raise QuotaOverflowError(
            QUOTA_OVERFLOW_MESSAGE,
            ctx=QuotaOverflowError.Context(quota=total, length_max=policy.length_max),
        )


def is_valid(policy: PasswordPolicyForm) -> bool:
    try:
        validate(policy)
    except PolicyValidationError:
        return False
    return True
