import pytest

from rcut.config import CONFIG_ENV_VAR


@pytest.fixture
def no_settings(tmp_path, monkeypatch):
    """Run with no settings file in reach."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
