import asyncio
from dataclasses import dataclass, field
from typing import Any

import pydantic
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from policy_pilot._pkg import asyauth
from policy_pilot._pkg.asyauth import constants
from policy_pilot.form import PasswordPolicyForm
from policy_pilot.service import PasswordPolicyService, compose_payload


@dataclass
class PolicyServerState:
    policy: dict[str, Any]
    read_error: tuple[int, str] | None = None
    update_error: tuple[int, str] | None = None
    drop_connection: bool = False
    requests: list[tuple[str, str | None, Any]] = field(default_factory=list)


@dataclass
class FakeService(PasswordPolicyService):
    entity: asyauth.PasswordPolicy | None = None
    load_error: Exception | None = None
    submit_error: Exception | None = None
    submitted: list[asyauth.PasswordPolicyUpdateDTO] = field(default_factory=list)
    submit_delays: list[float] = field(default_factory=list)

    async def load(self) -> PasswordPolicyForm:
        if self.load_error is not None:
            raise self.load_error
        assert self.entity is not None
        return PasswordPolicyForm.from_entity(self.entity)

    async def submit(self, policy: PasswordPolicyForm) -> None:
        self.submitted.append(compose_payload(policy))
        if self.submit_delays:
            await asyncio.sleep(self.submit_delays.pop(0))
        if self.submit_error is not None:
            raise self.submit_error


def make_api_error(
    message: str, status: int = 400, cls: type[asyauth.exc.APIError] | None = None
) -> asyauth.exc.APIError:
    return (cls or asyauth.exc.InvalidRequestError)(
        "Failed to update password policy",
        ctx=asyauth.exc.APIError.Context(
            response={"error": "BadRequest", "message": message},
            http_method="PUT",
            request_url="http://policy.test" + constants.PASSWORD_POLICY_PATH,
            status=status,
        ),
    )


@pytest.fixture
def entity() -> asyauth.PasswordPolicy:
    return asyauth.PasswordPolicy(
        length_min=14,
        length_max=128,
        include_lower_case=1,
        include_upper_case=1,
        include_digits=1,
        include_special=1,
        not_recently_used=3,
    )


@pytest.fixture
def fake_service(entity: asyauth.PasswordPolicy) -> FakeService:
    return FakeService(client=None, entity=entity)  # type: ignore[arg-type]


@pytest.fixture
def server_state() -> PolicyServerState:
    return PolicyServerState(
        policy={
            "length_min": 14,
            "length_max": 128,
            "include_lower_case": 1,
            "include_upper_case": 1,
            "include_digits": 1,
            "include_special": 1,
            "valid_days": 180,
        }
    )


@pytest_asyncio.fixture
async def policy_server(server_state: PolicyServerState):
    def drop(request: web.Request) -> web.Response:
        assert request.transport is not None
        request.transport.close()
        return web.Response()

    async def read(request: web.Request) -> web.Response:
        server_state.requests.append(
            ("GET", request.headers.get(constants.AUTHORIZATION_HEADER), None)
        )
        if server_state.drop_connection:
            return drop(request)
        if server_state.read_error is not None:
            status, message = server_state.read_error
            return web.json_response(
                {"error": "Error", "message": message}, status=status
            )
        return web.json_response(server_state.policy)

    async def update(request: web.Request) -> web.Response:
        body = await request.json()
        server_state.requests.append(
            ("PUT", request.headers.get(constants.AUTHORIZATION_HEADER), body)
        )
        if server_state.drop_connection:
            return drop(request)
        if server_state.update_error is not None:
            status, message = server_state.update_error
            return web.json_response(
                {"error": "Error", "message": message}, status=status
            )
        server_state.policy = body
        return web.json_response(body)

    app = web.Application()
    app.router.add_get(constants.PASSWORD_POLICY_PATH, read)
    app.router.add_put(constants.PASSWORD_POLICY_PATH, update)

    server = TestServer(app)
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


@pytest_asyncio.fixture
async def client(policy_server: TestServer):
    async with asyauth.Client() as client:
        await client.authenticate(
            base_url="http://%s:%d" % (policy_server.host, policy_server.port),
            authn=asyauth.ApiKeyAuthenticator(
                name="admin", secret=pydantic.SecretStr("s3cret")
            ),
        )
        yield client
