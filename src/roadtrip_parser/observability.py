"""
Observability hooks for diagnosing Road Trip file loads.

The loader reports what it finds (section boundaries, row counts, decode
failures) to an ObservabilityManager passed in by the caller. A manager with
no hooks registered is a no-op sink, so the core works without one.

An ObservabilityManager is not thread-safe; concurrent loads should each use
their own manager.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class MetricType(Enum):
    """Types of metrics that can be emitted."""
    COUNTER = "counter"  # Monotonically increasing count
    GAUGE = "gauge"  # Point-in-time value
    TIMER = "timer"  # Duration measurement


class EventType(Enum):
    """Types of events that can be emitted."""
    FILE_START = "file_start"
    FILE_LOADED = "file_loaded"
    FILE_ERROR = "file_error"
    SECTION_LOCATED = "section_located"
    SECTION_MISSING = "section_missing"
    SECTION_DECODED = "section_decoded"
    ROW_ERROR = "row_error"
    VEHICLE_COUNT = "vehicle_count"
    UNSUPPORTED_VERSION = "unsupported_version"


# Events that describe something the caller probably wants to look at.
WARNING_EVENTS = frozenset({
    EventType.FILE_ERROR,
    EventType.ROW_ERROR,
    EventType.SECTION_MISSING,
    EventType.VEHICLE_COUNT,
    EventType.UNSUPPORTED_VERSION,
})


@dataclass
class MetricEvent:
    """Represents a metric event."""
    metric_type: MetricType
    name: str
    value: float
    timestamp: float = field(default_factory=time.time)
    tags: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        tags_str = ",".join(f"{k}={v}" for k, v in self.tags.items())
        return f"{self.name}:{self.value}|{self.metric_type.value}|{tags_str}"


@dataclass
class Event:
    """Represents a parsing event."""
    event_type: EventType
    timestamp: float = field(default_factory=time.time)
    filename: Optional[str] = None
    section: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [self.event_type.value]
        if self.filename:
            parts.append(f"file={self.filename}")
        if self.section:
            parts.append(f"section={self.section}")
        if self.details:
            details_str = ",".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(details_str)
        return " ".join(parts)


class ObservabilityHook:
    """Base class for observability hooks. Does nothing."""

    def on_metric(self, metric: MetricEvent) -> None:
        """Called when a metric is emitted."""
        pass

    def on_event(self, event: Event) -> None:
        """Called when an event occurs."""
        pass


class LoggingHook(ObservabilityHook):
    """Hook that logs metrics and events to Python logging."""

    def __init__(self, log_metrics: bool = True, log_events: bool = True,
                 log: Optional[logging.Logger] = None):
        self.log_metrics = log_metrics
        self.log_events = log_events
        self.log = log or logger

    def on_metric(self, metric: MetricEvent) -> None:
        if self.log_metrics:
            self.log.debug(f"METRIC: {metric}")

    def on_event(self, event: Event) -> None:
        if not self.log_events:
            return
        if event.event_type in WARNING_EVENTS:
            level = logging.WARNING
        elif event.event_type in (EventType.FILE_START, EventType.FILE_LOADED):
            level = logging.INFO
        else:
            level = logging.DEBUG
        self.log.log(level, f"EVENT: {event}")


class ObservabilityManager:
    """Manages observability hooks and emits metrics/events."""

    def __init__(self, hooks: Optional[List[ObservabilityHook]] = None):
        self.hooks: List[ObservabilityHook] = list(hooks or [])
        self._timers: Dict[str, float] = {}

    def register_hook(self, hook: ObservabilityHook) -> None:
        """Register an observability hook."""
        self.hooks.append(hook)

    def emit_metric(
        self,
        metric_type: MetricType,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        """Emit a metric to all registered hooks."""
        metric = MetricEvent(
            metric_type=metric_type,
            name=name,
            value=value,
            tags=tags or {}
        )

        for hook in self.hooks:
            try:
                hook.on_metric(metric)
            except Exception as e:
                logger.warning(f"Error in observability hook: {e}")

    def emit_event(
        self,
        event_type: EventType,
        filename: Optional[str] = None,
        section: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Emit an event to all registered hooks."""
        event = Event(
            event_type=event_type,
            filename=filename,
            section=str(section) if section is not None else None,
            details=details or {}
        )

        for hook in self.hooks:
            try:
                hook.on_event(event)
            except Exception as e:
                logger.warning(f"Error in observability hook: {e}")

    def start_timer(self, name: str) -> None:
        """Start a named timer."""
        self._timers[name] = time.time()

    def end_timer(self, name: str, tags: Optional[Dict[str, str]] = None) -> float:
        """End a named timer and emit the duration."""
        if name not in self._timers:
            logger.debug(f"Timer '{name}' was not started")
            return 0.0

        duration = time.time() - self._timers.pop(name)

        self.emit_metric(
            metric_type=MetricType.TIMER,
            name=name,
            value=duration * 1000,  # Convert to milliseconds
            tags=tags
        )

        return duration

    # Convenience methods

    def counter(self, name: str, value: float = 1.0, tags: Optional[Dict[str, str]] = None) -> None:
        """Emit a counter metric."""
        self.emit_metric(MetricType.COUNTER, name, value, tags)

    def gauge(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Emit a gauge metric."""
        self.emit_metric(MetricType.GAUGE, name, value, tags)
