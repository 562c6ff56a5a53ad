import pytest
import yaml

from album_wallpaper.config import Config
from album_wallpaper.singleton_meta import SingletonMeta


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Every test starts from built-in defaults and fresh singletons."""
    monkeypatch.setenv(Config.CONFIG_ENV_VAR, str(tmp_path / "missing-config.yaml"))
    SingletonMeta.reset()
    yield
    SingletonMeta.reset()


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    def _write(data):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        monkeypatch.setenv(Config.CONFIG_ENV_VAR, str(path))
        SingletonMeta.reset()
        return path

    return _write


class FakeCompletedProcess:
    def __init__(self, args):
        self.args = args
        self.returncode = 0
        self.stdout = ""
        self.stderr = ""


@pytest.fixture
def dconf_calls(monkeypatch):
    """Record dconf invocations instead of touching the desktop settings."""
    calls = []

    def fake_run(args, **kwargs):
        calls.append(list(args))
        return FakeCompletedProcess(args)

    monkeypatch.setattr("album_wallpaper.service.wallpaper_service.subprocess.run", fake_run)
    return calls
