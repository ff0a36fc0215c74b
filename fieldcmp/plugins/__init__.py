"""Plugin subsystem for comparison lifecycle extensions."""

from fieldcmp.plugins.base import (
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_ENV_VAR,
    PLUGIN_CONFIG_VERSION,
    CompareEndEvent,
    CompareStartEvent,
    LifecyclePlugin,
)
from fieldcmp.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from fieldcmp.plugins.loader import (
    PluginEntry,
    build_plugin_manager,
    load_plugin_manager_from_file,
    parse_plugin_config,
)
from fieldcmp.plugins.manager import PluginDiagnostic, PluginManager
from fieldcmp.plugins.reference import LifecycleTracePlugin
from fieldcmp.plugins.runtime import (
    get_active_plugin_manager,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)

__all__ = [
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_CONFIG_ENV_VAR",
    "PluginError",
    "PluginConfigError",
    "PluginLoadError",
    "CompareStartEvent",
    "CompareEndEvent",
    "LifecyclePlugin",
    "PluginDiagnostic",
    "PluginManager",
    "PluginEntry",
    "LifecycleTracePlugin",
    "build_plugin_manager",
    "load_plugin_manager_from_file",
    "parse_plugin_config",
    "get_active_plugin_manager",
    "use_plugin_manager",
    "use_plugins_from_config",
    "reset_plugin_runtime_cache",
]
