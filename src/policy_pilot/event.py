import asyncio
import typing
from collections.abc import Coroutine, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from .exc import PolicyValidationError

if typing.TYPE_CHECKING:
    from .editor import EditorState
    from .form import PasswordPolicyForm

T = TypeVar("T")

FilterType = Sequence[type[T]]
CallbackType = Callable[[Any], Coroutine[Any, Any, Any]]


@dataclass(slots=True)
class HandlerObject(Generic[T]):
    filter: FilterType[T]
    callback: CallbackType


@dataclass(slots=True)
class EventObserver(Generic[T]):
    _handlers: list[HandlerObject[T]] = field(init=False, default_factory=list)

    def register(self, filter_: FilterType[T], callback: CallbackType) -> None:
        """
        Registers a handler function to be called when an event of the specified type is
        emitted.

        Args:
            filter_: A sequence of types that the event must match in order for the
                handler to be called.
            callback: The function to call when an event matches the filter.
        """
        self._handlers.append(HandlerObject(filter_, callback))

    async def trigger(self, event: T) -> None:
        async with asyncio.TaskGroup() as tg:
            for handler in filter(lambda h: type(event) in h.filter, self._handlers):
                tg.create_task(handler.callback(event))


@dataclass(slots=True)
class PolicyLoaded:
    policy: "PasswordPolicyForm"


@dataclass(slots=True)
class PolicyLoadFailed:
    """
    Emitted when the current policy could not be fetched. The editor stays without a
    policy, so there is nothing to edit.
    """

    error: Exception


@dataclass(slots=True)
class FieldChanged:
    field_name: str
    old_value: int
    new_value: int


@dataclass(slots=True)
class PolicyReset:
    policy: "PasswordPolicyForm"


@dataclass(slots=True)
class PolicyValidationFailed:
    error: PolicyValidationError


@dataclass(slots=True)
class PolicySubmitInitiated:
    policy: "PasswordPolicyForm"


@dataclass(slots=True)
class PolicySaved:
    policy: "PasswordPolicyForm"


@dataclass(slots=True)
class PolicySubmitError:
    """
    Attributes:
        message: The message shown to the user, as returned by the server.
        error: The underlying exception.
    """

    message: str
    error: Exception


@dataclass(slots=True)
class SavedIndicatorCleared:
    pass


@dataclass(slots=True)
class StateChanged:
    previous: "EditorState"
    current: "EditorState"


EventType = (
    PolicyLoaded
    | PolicyLoadFailed
    | FieldChanged
    | PolicyReset
    | PolicyValidationFailed
    | PolicySubmitInitiated
    | PolicySaved
    | PolicySubmitError
    | SavedIndicatorCleared
    | StateChanged
)
