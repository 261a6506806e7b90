import logging
from http import HTTPStatus

from typing_extensions import Unpack

from .. import constants
from ..dto import PasswordPolicyUpdateDTO
from ..entity import PasswordPolicy
from ..exc import APIError, read_body
from .base import BaseManager

logger = logging.getLogger(__name__)


class PasswordPolicyManager(BaseManager):
    async def read(self) -> PasswordPolicy:
        async with self.new_session() as sess:
            resp = await sess.get(constants.PASSWORD_POLICY_PATH)

        if resp.status == HTTPStatus.OK:
            return PasswordPolicy.model_validate(await read_body(resp))

        raise await APIError.from_response("Failed to read password policy", resp)

    async def update(
        self, **payload: Unpack[PasswordPolicyUpdateDTO]
    ) -> PasswordPolicy | None:
        async with self.new_session() as sess:
            resp = await sess.put(constants.PASSWORD_POLICY_PATH, json=payload)

        match resp.status:
            case HTTPStatus.OK:
                return PasswordPolicy.model_validate(await read_body(resp))
            case HTTPStatus.NO_CONTENT:
                return None
            case _:
                pass

        logger.debug("password policy update rejected with status %d", resp.status)
        raise await APIError.from_response("Failed to update password policy", resp)
