"""Tests for the envlaunch and envlaunchctl entrypoints."""
import json
import logging
import sys
from argparse import Namespace
from unittest import mock

import pytest

from conftest import FakeLauncher, FakeSecretStore
from agent_envlauncher.cli import launch
from agent_envlauncher.cli import main as ctl
from agent_envlauncher.launcher.domains.errors import ProcessLaunchError, SecretStoreError
from agent_envlauncher.launcher.domains.events import EVENT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_event_logger():
    yield
    logger = logging.getLogger(EVENT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


def run_launch(argv, store, launcher):
    with mock.patch.object(launch, "ConfiguredSecretStore", return_value=store), \
            mock.patch.object(launch, "SubprocessLauncher", return_value=launcher):
        with pytest.raises(SystemExit) as exc_info:
            launch.main(argv)
    return exc_info.value.code


def stderr_events(capsys):
    return [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]


class TestLaunchEntrypoint:

    def test_success_exits_zero(self, capsys):
        store = FakeSecretStore({"db-creds": '{"DB_USER":"admin"}'})
        launcher = FakeLauncher()

        code = run_launch(["envlaunch", "/usr/bin/env", "--key", "db-creds"], store, launcher)

        assert code == 0
        assert "DB_USER=admin" in launcher.calls[0]["env"]
        messages = [event["message"] for event in stderr_events(capsys)]
        assert messages == [
            "Fetching secret",
            "Retrieved secret keys",
            "Executing command",
            "Command executed successfully",
        ]

    def test_events_do_not_reach_stdout(self, capsys):
        run_launch(["envlaunch", "/bin/true"], FakeSecretStore(), FakeLauncher())
        assert capsys.readouterr().out == ""

    def test_usage_error_exits_one(self, capsys):
        store = FakeSecretStore()
        launcher = FakeLauncher()

        code = run_launch(["envlaunch"], store, launcher)

        assert code == 1
        assert store.calls == []
        assert launcher.calls == []
        [event] = stderr_events(capsys)
        assert event["level"] == "error"
        assert "Usage" in event["message"]

    def test_missing_secret_exits_one(self, capsys):
        launcher = FakeLauncher()

        code = run_launch(["envlaunch", "/bin/echo", "--key", "missing-secret"], FakeSecretStore(), launcher)

        assert code == 1
        assert launcher.calls == []
        assert stderr_events(capsys)[-1]["data"]["kind"] == "secret_fetch"

    def test_command_failure_exits_one(self):
        launcher = FakeLauncher(error=ProcessLaunchError("/bin/false exited with status 1", returncode=1))
        assert run_launch(["envlaunch", "/bin/false"], FakeSecretStore(), launcher) == 1

    def test_log_level_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("ENVLAUNCH_LOG_LEVEL", "error")

        run_launch(["envlaunch", "/bin/true"], FakeSecretStore(), FakeLauncher())

        assert stderr_events(capsys) == []

    def test_invalid_log_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("ENVLAUNCH_LOG_LEVEL", "chatty")
        assert launch._event_log_level() == "INFO"

    def test_keyboard_interrupt(self, capsys):
        launcher = FakeLauncher(error=KeyboardInterrupt())

        code = run_launch(["envlaunch", "/bin/sleep", "100"], FakeSecretStore(), launcher)

        assert code == 1
        assert "Interrupted" in capsys.readouterr().err

    def test_real_subprocess_sees_secret(self, tmp_path):
        out = tmp_path / "out.txt"
        store = FakeSecretStore({"api-keys": '{"API_KEY":"xyz"}'})
        script = "import os, sys; open(sys.argv[1], 'w').write(os.environ['API_KEY'])"

        with mock.patch.object(launch, "ConfiguredSecretStore", return_value=store):
            with pytest.raises(SystemExit) as exc_info:
                launch.main(["envlaunch", sys.executable, "-c", script, str(out), "--key", "api-keys"])

        assert exc_info.value.code == 0
        assert out.read_text() == "xyz"


class TestAdminCLI:

    def test_version(self, capsys):
        ctl.main(["version"])
        assert capsys.readouterr().out.strip() == f"agent-envlauncher {ctl.VERSION}"

    def test_no_command_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            ctl.main([])
        assert exc_info.value.code == 2

    def test_config_without_subcommand_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            ctl.main(["config"])
        assert exc_info.value.code == 2

    def test_secrets_keys_prints_names_only(self, temp_home, monkeypatch, capsys):
        monkeypatch.delenv("ENVLAUNCH_BACKEND", raising=False)
        with mock.patch("agent_envlauncher.secrets.workflows.secret_operations.get_secret_keys",
                        return_value=["DB_PASSWORD", "DB_USER"]) as get_keys:
            with pytest.raises(SystemExit) as exc_info:
                ctl.main(["secrets", "keys", "db-creds", "-q"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.splitlines() == ["DB_PASSWORD", "DB_USER"]
        get_keys.assert_called_once_with("db-creds", backend="gcp")

    def test_secrets_keys_fetch_failure(self, temp_home, monkeypatch, capsys):
        monkeypatch.delenv("ENVLAUNCH_BACKEND", raising=False)
        with mock.patch("agent_envlauncher.secrets.workflows.secret_operations.get_secret_keys",
                        side_effect=SecretStoreError("404")):
            with pytest.raises(SystemExit) as exc_info:
                ctl.main(["secrets", "keys", "missing-secret"])

        assert exc_info.value.code == 1
        assert "missing-secret" in capsys.readouterr().err

    def test_secrets_keys_invalid_name(self):
        with pytest.raises(SystemExit) as exc_info:
            ctl.cmd_secrets_keys(Namespace(secret_name="api.key", backend="gcp", quiet=True))
        assert exc_info.value.code == 2

    def test_secrets_keys_validates_against_env_backend(self, temp_home, monkeypatch, capsys):
        monkeypatch.setenv("ENVLAUNCH_BACKEND", "aws")
        with mock.patch("agent_envlauncher.secrets.workflows.secret_operations.get_secret_keys",
                        return_value=["DB_HOST"]) as get_keys:
            with pytest.raises(SystemExit) as exc_info:
                ctl.cmd_secrets_keys(Namespace(secret_name="prod/db-creds", backend=None, quiet=True))

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.splitlines() == ["DB_HOST"]
        get_keys.assert_called_once_with("prod/db-creds", backend="aws")

    def test_secrets_keys_validates_against_config_backend(self, temp_config_dir, monkeypatch):
        monkeypatch.delenv("ENVLAUNCH_BACKEND", raising=False)
        (temp_config_dir / "config.yml").write_text("backend: aws\n")
        with mock.patch("agent_envlauncher.secrets.workflows.secret_operations.get_secret_keys",
                        return_value=[]) as get_keys:
            with pytest.raises(SystemExit) as exc_info:
                ctl.cmd_secrets_keys(Namespace(secret_name="prod/db-creds", backend=None, quiet=True))

        assert exc_info.value.code == 0
        get_keys.assert_called_once_with("prod/db-creds", backend="aws")

    def test_explicit_backend_overrides_env_for_validation(self, temp_home, monkeypatch):
        monkeypatch.setenv("ENVLAUNCH_BACKEND", "aws")
        with pytest.raises(SystemExit) as exc_info:
            ctl.cmd_secrets_keys(Namespace(secret_name="prod/db-creds", backend="gcp", quiet=True))
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("name,backend", [
        ("MY_SECRET", None),
        ("projects/p/secrets/db-creds", "gcp"),
        ("prod/db.creds", "aws"),
        ("arn:aws:secretsmanager:us-east-1:123456789012:secret:db-AbCdEf", "aws"),
    ])
    def test_valid_secret_names(self, name, backend):
        from agent_envlauncher.cli.validators import validate_secret_name

        validate_secret_name(name, backend)

    @pytest.mark.parametrize("name,backend", [
        ("", None),
        ("MY SECRET", "gcp"),
        ("prod/db creds", "aws"),
    ])
    def test_invalid_secret_names(self, name, backend):
        from agent_envlauncher.cli.validators import validate_secret_name

        with pytest.raises(SystemExit) as exc_info:
            validate_secret_name(name, backend)
        assert exc_info.value.code == 2
