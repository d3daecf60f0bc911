"""Trace events for debugging and replay."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class TraceEvent:
    """Single trace event capturing planner activity."""

    event_type: str
    timestamp_ms: int
    data: dict[str, Any] = field(default_factory=dict)
    task_name: Optional[str] = None
    method_name: Optional[str] = None
    depth: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type,
            "timestamp_ms": self.timestamp_ms,
            "data": self.data,
            "task": self.task_name,
            "method": self.method_name,
            "depth": self.depth,
        }


class TraceRecorder:
    """Records trace events during one planning call."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.events: list[TraceEvent] = []

    def log(
        self,
        event_type: str,
        data: Optional[dict[str, Any]] = None,
        *,
        task_name: Optional[str] = None,
        method_name: Optional[str] = None,
        depth: int = 0,
    ) -> None:
        """Log a trace event."""
        if not self.enabled:
            return
        self.events.append(
            TraceEvent(
                event_type=event_type,
                timestamp_ms=int(time.time() * 1000),
                data=data or {},
                task_name=task_name,
                method_name=method_name,
                depth=depth,
            )
        )
