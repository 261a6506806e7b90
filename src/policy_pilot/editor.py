"""
The password policy editor.

:class:`PolicyEditor` holds the state of one editing session: the policy being
edited, the message shown inline, and the transient "saved" indicator. Views
subscribe to its events instead of polling the attributes.

The session goes through the following states::

    LOADING -> EDITING -> SAVING -> SAVED -> EDITING
                  |          |
                  v          v
               INVALID   SUBMIT_ERROR

An error message is only cleared when the next submit starts, editing a field keeps
it displayed.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

import pydantic

from . import event, validator
from ._pkg import asyauth
from .exc import EditorNotReadyError, PolicyValidationError, UnknownFieldError
from .form import PasswordPolicyForm
from .service import PasswordPolicyService

__all__ = "EditorState", "PolicyEditor", "SAVED_INDICATOR_TIMEOUT"

SAVED_INDICATOR_TIMEOUT = 3.0

logger = logging.getLogger(__name__)


class EditorState(StrEnum):
    LOADING = "loading"
    EDITING = "editing"
    INVALID = "invalid"
    SAVING = "saving"
    SAVED = "saved"
    SUBMIT_ERROR = "submit_error"


def _identity(message: str) -> str:
    return message


@dataclass(slots=True)
class PolicyEditor:
    """
    Attributes:
        service: Loads and submits the policy.
        saved_timeout: Seconds the "saved" indicator stays on after a successful
            submit.
        translate: Looks up the localized version of a server message.
        policy: The policy being edited, ``None`` until it has been loaded.
        baseline: The policy as last loaded from or saved to the server.
        error_message: The message shown inline, empty if there is none.
        is_saved: Whether the "saved" indicator is shown.
    """

    service: PasswordPolicyService
    saved_timeout: float = SAVED_INDICATOR_TIMEOUT
    translate: Callable[[str], str] = _identity
    observer: event.EventObserver[event.EventType] = field(
        default_factory=event.EventObserver
    )

    policy: PasswordPolicyForm | None = field(init=False, default=None)
    baseline: PasswordPolicyForm | None = field(init=False, default=None)
    error_message: str = field(init=False, default="")
    is_saved: bool = field(init=False, default=False)
    state: EditorState = field(init=False, default=EditorState.LOADING)

    _saved_timer: asyncio.Task[None] | None = field(init=False, default=None)

    def subscribe(
        self, filter_: event.FilterType[event.EventType], callback: event.CallbackType
    ) -> None:
        self.observer.register(filter_, callback)

    async def load(self) -> bool:
        """
        Fetches the current policy from the server.

        A failure is logged and leaves the editor without a policy, no inline message
        is set for it.

        Returns:
            Whether a policy is loaded.
        """
        try:
            policy = await self.service.load()
        except (
            asyauth.exc.APIError,
            ConnectionError,
            pydantic.ValidationError,
        ) as ex:
            logger.error("failed to load the password policy: %s", ex)
            await self.observer.trigger(event.PolicyLoadFailed(error=ex))
            return False

        self.policy, self.baseline = policy, policy.model_copy()
        await self._transition(EditorState.EDITING)
        await self.observer.trigger(event.PolicyLoaded(policy=policy))
        return True

    async def set_field(self, name: str, value: int) -> None:
        """
        Changes a single field of the policy.

        Raises:
            EditorNotReadyError: If the policy has not been loaded yet.
            UnknownFieldError: If the policy has no field called ``name``.
            pydantic.ValidationError: If the value is out of the field's bounds, the
                policy is left unchanged.
        """
        if self.policy is None:
            raise EditorNotReadyError(
                "The password policy has not been loaded yet", ctx=None
            )

        if name not in PasswordPolicyForm.model_fields:
            raise UnknownFieldError(
                "Unknown field", ctx=UnknownFieldError.Context(field_name=name)
            )

        old_value = getattr(self.policy, name)
        setattr(self.policy, name, value)

        await self.observer.trigger(
            event.FieldChanged(field_name=name, old_value=old_value, new_value=value)
        )

    async def update(self, **values: int) -> None:
        for name, value in values.items():
            await self.set_field(name, value)

    def changes(self) -> dict[str, Any]:
        """Returns the difference between the baseline and the edited policy."""
        if self.policy is None or self.baseline is None:
            return {}
        return self.service.diff(self.baseline, self.policy)

    async def reset(self) -> None:
        """Discards the unsaved edits."""
        if self.baseline is None:
            return

        self.policy = self.baseline.model_copy()
        await self.observer.trigger(event.PolicyReset(policy=self.policy))

    async def submit(self) -> bool:
        """
        Validates the edited policy and sends it to the server.

        Submitting before the policy has been loaded does nothing.

        Returns:
            Whether the policy has been saved.
        """
        self.error_message = ""
        self._cancel_saved_timer()
        self.is_saved = False

        if self.policy is None:
            return False

        try:
            validator.validate(self.policy)
        except PolicyValidationError as ex:
            self.error_message = ex.message
            await self._transition(EditorState.INVALID)
            await self.observer.trigger(event.PolicyValidationFailed(error=ex))
            return False

        submitted = self.policy.model_copy()

        await self._transition(EditorState.SAVING)
        await self.observer.trigger(event.PolicySubmitInitiated(policy=submitted))

        try:
            await self.service.submit(submitted)
        except asyauth.exc.APIError as ex:
            return await self._fail_submit(self.translate(ex.detail), ex)
        except ConnectionError as ex:
            return await self._fail_submit(self.translate(str(ex)), ex)

        logger.debug("password policy saved")
        self.baseline = submitted
        self.is_saved = True
        # a submit that started earlier may have finished in the meantime
        self._cancel_saved_timer()
        self._saved_timer = asyncio.create_task(self._clear_saved_indicator())

        await self._transition(EditorState.SAVED)
        await self.observer.trigger(event.PolicySaved(policy=submitted))
        return True

    async def aclose(self) -> None:
        self._cancel_saved_timer()

    async def _fail_submit(self, message: str, ex: Exception) -> bool:
        logger.debug("password policy rejected: %s", message)
        self.error_message = message
        self._cancel_saved_timer()
        self.is_saved = False
        await self._transition(EditorState.SUBMIT_ERROR)
        await self.observer.trigger(event.PolicySubmitError(message=message, error=ex))
        return False

    async def _clear_saved_indicator(self) -> None:
        await asyncio.sleep(self.saved_timeout)

        self.is_saved = False
        if self._saved_timer is asyncio.current_task():
            self._saved_timer = None
        logger.debug("saved indicator cleared")

        if self.state == EditorState.SAVED:
            await self._transition(EditorState.EDITING)
        await self.observer.trigger(event.SavedIndicatorCleared())

    def _cancel_saved_timer(self) -> None:
        if self._saved_timer is not None and not self._saved_timer.done():
            self._saved_timer.cancel()
        self._saved_timer = None

    async def _transition(self, state: EditorState) -> None:
        if state == self.state:
            return

        previous, self.state = self.state, state
        await self.observer.trigger(event.StateChanged(previous=previous, current=state))
