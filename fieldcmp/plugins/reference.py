"""Reference lifecycle plugin implementation."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path

from fieldcmp.plugins.base import CompareEndEvent, CompareStartEvent, LifecyclePlugin


@dataclass(slots=True)
class LifecycleTracePlugin(LifecyclePlugin):
    """Appends one NDJSON line per comparison hook."""

    output_path: str = "fieldcmp-trace.ndjson"
    name: str = "lifecycle-trace"

    def on_compare_start(self, event: CompareStartEvent) -> None:
        self._write_record("on_compare_start", event.to_dict())

    def on_compare_end(self, event: CompareEndEvent) -> None:
        self._write_record("on_compare_end", event.to_dict())

    def _write_record(self, hook: str, event: dict) -> None:
        record = json.dumps(
            {"hook": hook, "plugin": self.name, "event": event},
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
        trace = Path(self.output_path)
        trace.parent.mkdir(parents=True, exist_ok=True)
        with trace.open("a", encoding="utf-8") as handle:
            handle.write(record + "\n")
