import pytest

from configmaster.config.settings import Settings
from configmaster.main import create_app


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep host environment and stray properties files out of the tests."""
    for var in ("APP_NAME", "APP_DESCRIPTION", "APP_VERSION", "CONFIG_FILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings():
    return Settings(ENVIRONMENT="testing", DEBUG=False, LOG_LEVEL="WARNING", LOG_TO_FILE=False, CONFIG_FILE="")


@pytest.fixture
def make_app(settings):
    def _make(properties=None):
        return create_app(properties, settings)
    return _make
