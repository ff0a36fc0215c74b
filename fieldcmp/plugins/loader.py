"""Versioned plugin configuration loader."""

from __future__ import annotations

from dataclasses import dataclass, field
import importlib
import inspect
import json
from pathlib import Path
from typing import Any

from fieldcmp.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from fieldcmp.plugins.exceptions import PluginConfigError, PluginLoadError
from fieldcmp.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled"})


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """One enabled plugin declaration from a config document."""

    index: int
    entrypoint: str
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def module_name(self) -> str:
        return self.entrypoint.partition(":")[0]

    @property
    def attribute_path(self) -> str:
        return self.entrypoint.partition(":")[2]


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Load a plugin manager from a JSON config file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error
    except OSError as error:
        raise PluginConfigError(f"Cannot read plugin config ({config_path}): {error}") from error
    return build_plugin_manager(raw, source=str(config_path))


def build_plugin_manager(raw: Any, *, source: str = "<inline>") -> PluginManager:
    """Build a plugin manager from an already-parsed config document."""
    entries = parse_plugin_config(raw, source=source)
    return PluginManager(plugins=tuple(_instantiate(entry) for entry in entries))


def parse_plugin_config(raw: Any, *, source: str = "<inline>") -> list[PluginEntry]:
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({source}).")

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"Unsupported plugin config version {version!r} in {source}; "
            f"expected {PLUGIN_CONFIG_VERSION}."
        )

    payloads = raw.get("plugins")
    if not isinstance(payloads, list):
        raise PluginConfigError(f"Plugin config key 'plugins' must be a JSON array ({source}).")

    entries: list[PluginEntry] = []
    for index, payload in enumerate(payloads, start=1):
        entry = _parse_entry(payload, index=index)
        if entry is not None:
            entries.append(entry)
    return entries


def _parse_entry(payload: Any, *, index: int) -> PluginEntry | None:
    if not isinstance(payload, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.")

    unknown = sorted(set(payload) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} contains unsupported keys: {', '.join(unknown)}"
        )

    enabled = payload.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"Plugin entry #{index} key 'enabled' must be boolean.")
    if not enabled:
        return None

    entrypoint = payload.get("entrypoint")
    module_name, separator, attribute_path = (
        entrypoint.partition(":") if isinstance(entrypoint, str) else ("", "", "")
    )
    if not separator or not module_name or not attribute_path:
        raise PluginConfigError(
            f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'."
        )

    options = payload.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"Plugin entry #{index} key 'options' must be a JSON object.")

    return PluginEntry(index=index, entrypoint=entrypoint, options=options)


def _instantiate(entry: PluginEntry) -> object:
    target = _resolve_target(entry)
    if inspect.isclass(target) or callable(target):
        try:
            plugin = target(**entry.options)
        except Exception as error:
            raise PluginLoadError(
                f"Plugin entry #{entry.index} failed to instantiate '{entry.entrypoint}' "
                f"with options {sorted(entry.options)}: {error}"
            ) from error
    elif entry.options:
        raise PluginLoadError(
            f"Plugin entry #{entry.index} uses non-callable '{entry.entrypoint}' "
            "and cannot accept options."
        )
    else:
        plugin = target

    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if _major(declared) != _major(PLUGIN_API_VERSION):
        raise PluginLoadError(
            f"Plugin entry #{entry.index} '{entry.entrypoint}' declares unsupported "
            f"api_version {declared!r}; supported major version is {_major(PLUGIN_API_VERSION)}."
        )
    return plugin


def _resolve_target(entry: PluginEntry) -> object:
    try:
        target: object = importlib.import_module(entry.module_name)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{entry.index} failed to import module '{entry.module_name}': {error}"
        ) from error

    for part in entry.attribute_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as error:
            raise PluginLoadError(
                f"Plugin entry #{entry.index} could not find attribute "
                f"'{entry.attribute_path}' in '{entry.module_name}'."
            ) from error
    return target


def _major(version: str) -> str:
    return version.split(".", 1)[0]
