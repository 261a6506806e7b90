import pathlib

import pytest
from click.testing import CliRunner

from policy_pilot.__main__ import cli
from policy_pilot._cli import session
from policy_pilot._cli.exc import CLIError, ConfigValidationError
from policy_pilot._conf import Settings
from policy_pilot._pkg import asyauth

from .conftest import FakeService, make_api_error

CONFIG = """\
baseUrl: http://policy.test
auth:
  method: api-key
  name: admin
  secret: s3cret
"""


@pytest.fixture
def config_file(tmp_path: pathlib.Path) -> pathlib.Path:
    fn = tmp_path / "config.yaml"
    fn.write_text(CONFIG)
    return fn


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch, fake_service: FakeService) -> FakeService:
    monkeypatch.setattr(session, "PasswordPolicyService", lambda client: fake_service)
    return fake_service


def invoke(config_file: pathlib.Path, *args: str):
    return CliRunner().invoke(cli, ["-c", str(config_file), *args])


class TestShow:
    def test_renders_policy(self, config_file, service):
        result = invoke(config_file, "show")

        assert result.exit_code == 0, result.output
        assert "Min Length" in result.output
        assert "Not Recently Used" in result.output
        assert "Characters required by the includes: 4" in result.output

    def test_load_failure(self, config_file, service):
        service.load_error = make_api_error("no session", status=401)

        result = invoke(config_file, "show")

        assert result.exit_code == 1
        assert "could not be loaded" in result.output


class TestEdit:
    def test_submits_changes(self, config_file, service):
        result = invoke(config_file, "edit", "--length-min", "16", "--special", "0")

        assert result.exit_code == 0, result.output
        assert "Min Length: 14 -> 16" in result.output
        assert "Saved" in result.output
        assert service.submitted == [
            {
                "length_min": 16,
                "length_max": 128,
                "include_lower_case": 1,
                "include_upper_case": 1,
                "include_digits": 1,
                "not_recently_used": 3,
            }
        ]

    def test_dry_run_does_not_submit(self, config_file, service):
        result = invoke(config_file, "edit", "--valid-days", "90", "--dry-run")

        assert result.exit_code == 0, result.output
        assert "Valid For Days: 0 -> 90" in result.output
        assert service.submitted == []

    def test_validation_error(self, config_file, service):
        result = invoke(config_file, "edit", "--length-min", "20", "--length-max", "16")

        assert result.exit_code == 65
        assert "Max Length cannot be lower than Min Length" in result.output
        assert service.submitted == []

    def test_dry_run_validation_error(self, config_file, service):
        result = invoke(
            config_file,
            "edit",
            "--length-min",
            "8",
            "--length-max",
            "8",
            "--digits",
            "8",
            "--dry-run",
        )

        assert result.exit_code == 65
        assert "The sum of all includes does not fit into Max Length" in result.output

    def test_out_of_bounds_input(self, config_file, service):
        result = invoke(config_file, "edit", "--valid-days", "5000")

        assert result.exit_code == 64
        assert "valid_days" in result.output
        assert service.submitted == []

    def test_server_rejection(self, config_file, service):
        service.submit_error = make_api_error("backend down", status=500)

        result = invoke(config_file, "edit", "--length-min", "16")

        assert result.exit_code == 69
        assert "backend down" in result.output

    def test_dropped_connection(self, config_file, service):
        service.submit_error = asyauth.exc.ServerConnectionError(
            "The request to the server failed: Server disconnected"
        )

        result = invoke(config_file, "edit", "--length-min", "16")

        assert result.exit_code == 69
        assert "Server disconnected" in result.output


class TestConfig:
    def test_missing_auth(self, tmp_path: pathlib.Path, service):
        fn = tmp_path / "config.yaml"
        fn.write_text("baseUrl: http://policy.test\n")

        result = CliRunner().invoke(cli, ["-c", str(fn), "show"])

        assert result.exit_code == 1
        assert "Invalid configuration input" in result.output
        assert "Field is required" in result.output

    def test_unknown_auth_method(self, tmp_path: pathlib.Path, service):
        fn = tmp_path / "config.yaml"
        fn.write_text("baseUrl: http://policy.test\nauth:\n  method: ldap\n")

        result = CliRunner().invoke(cli, ["-c", str(fn), "show"])

        assert result.exit_code == 1
        assert "'api-key', 'token'" in result.output

    def test_syntax_error(self, tmp_path: pathlib.Path, service):
        fn = tmp_path / "config.yaml"
        fn.write_text("baseUrl: [unclosed\n")

        result = CliRunner().invoke(cli, ["-c", str(fn), "show"])

        assert result.exit_code == 1
        assert "Decoding failed for configuration file" in result.output

    def test_default_saved_indicator_timeout(self):
        settings = Settings(
            base_url="http://policy.test",
            auth={"method": "api-key", "name": "admin", "secret": "s3cret"},
        )

        assert settings.saved_indicator_timeout == 3.0


class TestCLIError:
    def test_keeps_exit_code(self):
        ex = CLIError("Policy rejected", exit_code=65)

        assert ex.exit_code == 65
        assert ex.format_message() == "Policy rejected"
        assert str(ex) == "Policy rejected"

    def test_show_writes_message(self, capsys: pytest.CaptureFixture[str]):
        CLIError("Policy rejected", exit_code=65).show()

        assert capsys.readouterr().err == "Error: Policy rejected\n"

    def test_config_error_formats_message(self):
        ex = ConfigValidationError("Field is required")

        assert ex.exit_code == 1
        assert ex.format_message() == "Invalid configuration input.\n\nField is required"
