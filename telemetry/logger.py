from __future__ import annotations

import json
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


def _tally(values: Iterable[Optional[str]]) -> Dict[str, int]:
    return dict(Counter(v if v is not None else "-" for v in values))


@dataclass
class TelemetryLogger:
    """
    Appends one JSON object per event to a .jsonl file.

    Nothing is written until init() is called, and a failed write is dropped.
    """
    path: Optional[Path] = None
    enabled: bool = True
    flush_each_write: bool = False
    _events: Counter = field(default_factory=Counter)
    _started_at: float = field(default_factory=time.time)

    def init(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Append to an existing file
        self.path.touch(exist_ok=True)
        self.log("telemetry_init", file=str(self.path))

    @property
    def active(self) -> bool:
        return self.enabled and self.path is not None

    def log(self, event: str, **fields: Any) -> None:
        if not self.active:
            return

        self._events[event] += 1
        row: Dict[str, Any] = {
            "t": time.time(),
            "ts": _now_iso(),
            "n": self.event_count,
            "uptime": round(time.time() - self._started_at, 3),
            "event": event,
            **fields,
        }

        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(row, ensure_ascii=False, default=str) + "\n")
                if self.flush_each_write:
                    f.flush()
        except OSError:
            # Telemetry must never break generation.
            return

    def log_batch(self, area: Optional[str], requested: int, characters: list, seed: Optional[int] = None) -> None:
        """One `batch_generated` event with what the batch came out as."""
        if not self.active:
            return
        self.log(
            "batch_generated",
            area=area,
            requested=requested,
            produced=len(characters),
            seed=seed,
            races=_tally(c.race for c in characters),
            alignments=_tally(c.alignment for c in characters),
            lifestyles=_tally(c.lifestyle for c in characters),
            marked=sum(1 for c in characters if c.mark),
            nobles=sum(1 for c in characters if c.noble),
        )

    def summary(self) -> Dict[str, int]:
        """Events logged since init, by name."""
        return dict(self._events)

    def close(self) -> None:
        self.path = None
        self._events.clear()

    @property
    def event_count(self) -> int:
        return sum(self._events.values())


# global singleton (easy import everywhere)
telemetry = TelemetryLogger()
