"""Runtime plugin activation helpers."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import os
from pathlib import Path
from typing import Iterator
import warnings

from fieldcmp.plugins.base import PLUGIN_CONFIG_ENV_VAR
from fieldcmp.plugins.exceptions import PluginError
from fieldcmp.plugins.loader import load_plugin_manager_from_file
from fieldcmp.plugins.manager import PluginManager

_ACTIVE_MANAGER: ContextVar[PluginManager | None] = ContextVar(
    "fieldcmp_active_plugin_manager",
    default=None,
)
_NO_PLUGINS = PluginManager(plugins=())
_env_managers: dict[str, PluginManager] = {}


def get_active_plugin_manager() -> PluginManager:
    """Context override first, then ``FIELDCMP_PLUGIN_CONFIG``, else no plugins."""
    manager = _ACTIVE_MANAGER.get()
    if manager is not None:
        return manager

    config_path = os.environ.get(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not config_path:
        return _NO_PLUGINS

    cached = _env_managers.get(config_path)
    if cached is None:
        cached = _load_env_manager(config_path)
        _env_managers[config_path] = cached
    return cached


def _load_env_manager(config_path: str) -> PluginManager:
    # A broken env config disables plugins for that path; comparisons still run.
    try:
        return load_plugin_manager_from_file(config_path)
    except PluginError as error:
        warnings.warn(
            f"fieldcmp plugin config ignored: {PLUGIN_CONFIG_ENV_VAR}={config_path} "
            f"error={type(error).__name__}: {error}",
            RuntimeWarning,
            stacklevel=4,
        )
        return _NO_PLUGINS


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    """Route comparisons in the current context through ``manager``."""
    token = _ACTIVE_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _ACTIVE_MANAGER.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[PluginManager]:
    with use_plugin_manager(load_plugin_manager_from_file(path)) as manager:
        yield manager


def reset_plugin_runtime_cache() -> None:
    """Forget env-loaded plugin managers."""
    _env_managers.clear()
