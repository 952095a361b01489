"""Tests for observability hooks and the manager."""

import logging

from roadtrip_parser.observability import (
    Event,
    EventType,
    LoggingHook,
    MetricEvent,
    MetricType,
    ObservabilityHook,
    ObservabilityManager,
)


class BrokenHook(ObservabilityHook):
    def on_event(self, event):
        raise RuntimeError("boom")

    def on_metric(self, metric):
        raise RuntimeError("boom")


class CountingHook(ObservabilityHook):
    def __init__(self):
        self.count = 0

    def on_event(self, event):
        self.count += 1


def test_manager_without_hooks_is_noop():
    manager = ObservabilityManager()
    manager.emit_event(EventType.FILE_START, filename="a.csv")
    manager.counter("rows_decoded", 3)
    manager.start_timer("t")
    assert manager.end_timer("t") >= 0.0


def test_broken_hook_does_not_stop_others(caplog):
    counting = CountingHook()
    manager = ObservabilityManager([BrokenHook(), counting])

    with caplog.at_level(logging.WARNING, logger="roadtrip_parser.observability"):
        manager.emit_event(EventType.FILE_START)
        manager.gauge("bytes", 10)

    assert counting.count == 1
    assert "Error in observability hook: boom" in caplog.text


def test_end_timer_not_started():
    assert ObservabilityManager().end_timer("never") == 0.0


def test_event_str():
    event = Event(EventType.SECTION_DECODED, filename="Ranger.csv", section="TIRE LOG", details={"rows": 2})
    assert str(event) == "section_decoded file=Ranger.csv section=TIRE LOG rows=2"


def test_metric_str():
    metric = MetricEvent(MetricType.COUNTER, "rows_decoded", 2, tags={"section": "VEHICLE"})
    assert str(metric) == "rows_decoded:2|counter|section=VEHICLE"


def test_logging_hook_levels(caplog):
    hook = LoggingHook()
    manager = ObservabilityManager([hook])

    with caplog.at_level(logging.DEBUG, logger="roadtrip_parser.observability"):
        manager.emit_event(EventType.FILE_LOADED, filename="Ranger.csv")
        manager.emit_event(EventType.SECTION_MISSING, section="TIRE LOG")
        manager.emit_event(EventType.SECTION_LOCATED, section="VEHICLE")
        manager.counter("rows_decoded", 1)

    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert levels[0] == (logging.INFO, "EVENT: file_loaded file=Ranger.csv")
    assert levels[1] == (logging.WARNING, "EVENT: section_missing section=TIRE LOG")
    assert levels[2][0] == logging.DEBUG
    assert levels[3] == (logging.DEBUG, "METRIC: rows_decoded:1|counter|")


def test_logging_hook_can_be_silenced(caplog):
    manager = ObservabilityManager([LoggingHook(log_metrics=False, log_events=False)])

    with caplog.at_level(logging.DEBUG, logger="roadtrip_parser.observability"):
        manager.emit_event(EventType.FILE_ERROR)
        manager.counter("rows_decoded", 1)

    assert caplog.records == []
