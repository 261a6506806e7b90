import asyncio

import pydantic
import pytest

from policy_pilot._pkg import asyauth
from policy_pilot._pkg.asyauth.client import exception_handler


class TestReadPasswordPolicy:
    @pytest.mark.asyncio
    async def test_returns_policy(self, client, server_state):
        policy = await client.read_password_policy()

        assert policy == asyauth.PasswordPolicy(
            length_min=14,
            length_max=128,
            include_lower_case=1,
            include_upper_case=1,
            include_digits=1,
            include_special=1,
            valid_days=180,
        )
        assert policy.not_recently_used is None

    @pytest.mark.asyncio
    async def test_sends_api_key(self, client, server_state):
        await client.read_password_policy()

        assert server_state.requests == [("GET", "API-Key admin$s3cret", None)]

    @pytest.mark.asyncio
    async def test_maps_status_to_error(self, client, server_state):
        server_state.read_error = (401, "Unauthorized session")

        with pytest.raises(asyauth.exc.UnauthorizedError) as ex_info:
            await client.read_password_policy()

        assert ex_info.value.detail == "Unauthorized session"
        assert ex_info.value.ctx["status"] == 401
        assert ex_info.value.ctx["http_method"] == "GET"

    @pytest.mark.asyncio
    async def test_unknown_status_is_unexpected_error(self, client, server_state):
        server_state.read_error = (418, "teapot")

        with pytest.raises(asyauth.exc.UnexpectedError):
            await client.read_password_policy()


class TestUpdatePasswordPolicy:
    @pytest.mark.asyncio
    async def test_puts_payload(self, client, server_state):
        result = await client.update_password_policy(
            length_min=10, length_max=20, include_digits=2
        )

        assert server_state.requests[-1] == (
            "PUT",
            "API-Key admin$s3cret",
            {"length_min": 10, "length_max": 20, "include_digits": 2},
        )
        assert result == asyauth.PasswordPolicy(
            length_min=10, length_max=20, include_digits=2
        )

    @pytest.mark.asyncio
    async def test_server_message_is_exposed(self, client, server_state):
        server_state.update_error = (500, "backend down")

        with pytest.raises(asyauth.exc.InternalServerErrorError) as ex_info:
            await client.update_password_policy(length_min=10, length_max=20)

        assert ex_info.value.detail == "backend down"
        assert ex_info.value.message == "Failed to update password policy"

    @pytest.mark.asyncio
    async def test_dropped_connection(self, client, server_state):
        server_state.drop_connection = True

        with pytest.raises(asyauth.exc.ServerConnectionError) as ex_info:
            await client.update_password_policy(length_min=12, length_max=64)

        assert isinstance(ex_info.value, ConnectionError)
        assert str(ex_info.value).startswith("The request to the server failed")


class TestClient:
    @pytest.mark.asyncio
    async def test_bearer_token(self, policy_server, server_state):
        async with asyauth.Client() as client:
            await client.authenticate(
                base_url="http://%s:%d" % (policy_server.host, policy_server.port),
                authn=asyauth.BearerTokenAuthenticator(
                    token=pydantic.SecretStr("t0ken")
                ),
            )
            await client.read_password_policy()

        assert server_state.requests == [("GET", "Bearer t0ken", None)]

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        async with asyauth.Client() as client:
            await client.authenticate(
                base_url="http://127.0.0.1:1",
                authn=asyauth.BearerTokenAuthenticator(
                    token=pydantic.SecretStr("t0ken")
                ),
            )

            with pytest.raises(ConnectionRefusedError):
                await client.read_password_policy()

    def test_is_not_authenticated_by_default(self):
        assert asyauth.Client().is_authenticated is False

    @pytest.mark.asyncio
    async def test_close_discards_session(self):
        client = asyauth.Client()
        await client.authenticate(
            base_url="http://policy.test",
            authn=asyauth.BearerTokenAuthenticator(token=pydantic.SecretStr("t0ken")),
        )
        assert client.is_authenticated is True

        await client.__aexit__(None, None, None)

        assert client.is_authenticated is False

    @pytest.mark.asyncio
    async def test_timeout_is_a_connection_error(self):
        @exception_handler
        async def wait_for_server() -> None:
            raise asyncio.TimeoutError

        with pytest.raises(asyauth.exc.ServerConnectionError) as ex_info:
            await wait_for_server()

        assert str(ex_info.value) == "The request to the server failed: TimeoutError"
