"""Streaming package for the provider layer.

Exposes the event stream primitives, the stream controller and the adapter
base class under a single namespace.
"""

from .event_stream import EventStream
from .assistant_stream import AssistantStream
from .streaming_metrics import StreamMetrics
from .streaming_finalize import log_stream_end, log_stream_start
from .stream_controller import StreamController
from .streaming_adapter import BaseStreamingAdapter
from .agent_stream import AgentStream

__all__ = [
    "EventStream",
    "AssistantStream",
    "StreamMetrics",
    "log_stream_start",
    "log_stream_end",
    "StreamController",
    "BaseStreamingAdapter",
    "AgentStream",
]
