import pytest

from fieldcmp.config import PRETTY_INDENT_ENV_VAR
from fieldcmp.plugins import PLUGIN_CONFIG_ENV_VAR, reset_plugin_runtime_cache


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(PRETTY_INDENT_ENV_VAR, raising=False)
    monkeypatch.delenv(PLUGIN_CONFIG_ENV_VAR, raising=False)
    reset_plugin_runtime_cache()
    yield
    reset_plugin_runtime_cache()
