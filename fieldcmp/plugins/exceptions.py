"""Plugin subsystem exceptions."""


class PluginError(Exception):
    """Base class for comparison plugin errors."""


class PluginConfigError(PluginError):
    """The plugin config document is malformed or has an unsupported version."""


class PluginLoadError(PluginError):
    """A configured entrypoint could not be imported, built or version-checked."""
