"""Shared fixtures: deterministic collaborators and an isolated home directory."""
from pathlib import Path

import pytest

from agent_envlauncher.launcher.domains.errors import ProcessLaunchError, SecretStoreError
from agent_envlauncher.secrets.domains import preferences


class FakeSecretStore:
    """Secret store backed by a dict; names in ``failing`` raise."""

    def __init__(self, secrets=None, failing=()):
        self.secrets = dict(secrets or {})
        self.failing = set(failing)
        self.calls = []

    def fetch(self, name):
        self.calls.append(name)
        if name in self.failing or name not in self.secrets:
            raise SecretStoreError(f"secret {name} not found")
        return self.secrets[name]


class FakeLauncher:
    """Records launch calls; raises ``error`` when set."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def launch(self, path, args, env):
        self.calls.append({"path": path, "args": list(args), "env": list(env)})
        if self.error is not None:
            raise self.error


class RecordingEventSink:
    def __init__(self):
        self.events = []

    def record(self, level, message, data=None):
        self.events.append((level, message, data))

    def messages(self, level=None):
        return [message for lvl, message, _ in self.events if level is None or lvl == level]


@pytest.fixture
def secret_store():
    return FakeSecretStore()


@pytest.fixture
def launcher():
    return FakeLauncher()


@pytest.fixture
def events():
    return RecordingEventSink()


@pytest.fixture
def failing_launcher():
    return FakeLauncher(error=ProcessLaunchError("/bin/false exited with status 1", returncode=1))


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to create a temporary home directory for testing."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)

    fake_config_dir = fake_home / ".config" / "agent-envlauncher"
    monkeypatch.setattr(preferences, "PREFERENCES_DIR", fake_config_dir)
    monkeypatch.setattr(preferences, "PREFERENCES_FILE", fake_config_dir / "preferences.json")

    return fake_home


@pytest.fixture
def temp_config_dir(temp_home):
    config_dir = temp_home / ".config" / "agent-envlauncher"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
