from dataclasses import dataclass
from typing import TypedDict

from typing_extensions import override

__all__ = (
    "ApplicationError",
    "PolicyValidationError",
    "LengthOrderError",
    "QuotaOverflowError",
    "EditorError",
    "EditorNotReadyError",
    "UnknownFieldError",
)

LENGTH_ORDER_MESSAGE = "Max Length cannot be lower than Min Length"
QUOTA_OVERFLOW_MESSAGE = "The sum of all includes does not fit into Max Length"


@dataclass(slots=True)
class ApplicationError(Exception):
    class Context(TypedDict): ...

    message: str
    ctx: Context | None

    def format_message(self) -> str:
        return self.message.format(ctx=self.ctx or {})

    @override
    def __str__(self) -> str:
        return self.format_message()


@dataclass(slots=True)
class PolicyValidationError(ApplicationError):
    """
    Raised when an edited password policy is not internally consistent and therefore
    must not be submitted.
    """


@dataclass(slots=True)
class LengthOrderError(PolicyValidationError):
    """Raised when the maximum length is lower than the minimum length."""

    class Context(TypedDict):
        length_min: int
        length_max: int

    ctx: Context


@dataclass(slots=True)
class QuotaOverflowError(PolicyValidationError):
    """
    Raised when the character classes a password must include cannot fit into the
    maximum password length.
    """

    class Context(TypedDict):
        """
        Attributes:
            quota: The sum of all character class minimums.
            length_max: The maximum password length.
        """

        quota: int
        length_max: int

    ctx: Context


@dataclass(slots=True)
class EditorError(ApplicationError): ...


@dataclass(slots=True)
class EditorNotReadyError(EditorError):
    """
    Raised when the policy is edited before it has been loaded from the server.
    """


@dataclass(slots=True)
class UnknownFieldError(EditorError):
    class Context(TypedDict):
        field_name: str

    ctx: Context

    @override
    def format_message(self) -> str:
        return "Unknown password policy field %r" % self.ctx["field_name"]
