"""Runtime plugin manager with fault-isolated hook dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
import warnings

from fieldcmp.plugins.base import CompareEndEvent, CompareStartEvent


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    """A hook failure swallowed so the comparison could finish."""

    plugin_name: str
    hook: str
    error_type: str
    message: str

    def render(self) -> str:
        return (
            f"fieldcmp plugin failure: plugin={self.plugin_name} hook={self.hook} "
            f"error={self.error_type}: {self.message}"
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "plugin_name": self.plugin_name,
            "hook": self.hook,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class PluginManager:
    """Fans comparison events out to plugins; a failing hook never fails the comparison."""

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def on_compare_start(self, event: CompareStartEvent) -> None:
        self._dispatch("on_compare_start", event)

    def on_compare_end(self, event: CompareEndEvent) -> None:
        self._dispatch("on_compare_end", event)

    def _dispatch(self, hook: str, event: object) -> None:
        for plugin in self.plugins:
            callback = getattr(plugin, hook, None)
            if not callable(callback):
                continue
            try:
                callback(event)
            except Exception as error:
                self._record_failure(plugin, hook, error)

    def _record_failure(self, plugin: object, hook: str, error: Exception) -> None:
        diagnostic = PluginDiagnostic(
            plugin_name=str(getattr(plugin, "name", type(plugin).__name__)),
            hook=hook,
            error_type=type(error).__name__,
            message=str(error),
        )
        self.diagnostics.append(diagnostic)
        warnings.warn(diagnostic.render(), RuntimeWarning, stacklevel=4)
