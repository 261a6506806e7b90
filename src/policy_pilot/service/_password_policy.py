import logging
from dataclasses import dataclass
from typing import Any

from deepdiff import DeepDiff

from .._pkg import asyauth
from ..form import OPTIONAL_FIELDS, PasswordPolicyForm

logger = logging.getLogger(__name__)


def compose_payload(policy: PasswordPolicyForm) -> asyauth.PasswordPolicyUpdateDTO:
    """
    Builds the update request body. Optional rules held as ``0`` are left out, which
    the server takes as "not enforced".
    """
    payload = asyauth.PasswordPolicyUpdateDTO(
        length_min=policy.length_min, length_max=policy.length_max
    )

    for name in OPTIONAL_FIELDS:
        if value := getattr(policy, name):
            payload[name] = value  # type: ignore[literal-required]

    return payload


@dataclass(slots=True)
class PasswordPolicyService:
    client: asyauth.Client

    def diff(
        self, baseline: PasswordPolicyForm, policy: PasswordPolicyForm
    ) -> dict[str, Any]:
        return DeepDiff(
            baseline.model_dump(),
            policy.model_dump(),
            verbose_level=2,
        )

    async def load(self) -> PasswordPolicyForm:
        return PasswordPolicyForm.from_entity(await self.client.read_password_policy())

    async def submit(self, policy: PasswordPolicyForm) -> None:
        payload = compose_payload(policy)
        logger.debug("submitting password policy %r", payload)
        await self.client.update_password_policy(**payload)
