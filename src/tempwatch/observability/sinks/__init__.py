"""Event sinks: where serialized events are written."""

from tempwatch.observability.sinks.jsonl_sink import JsonlSink

__all__ = ["JsonlSink"]
