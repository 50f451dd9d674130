"""DTO validation package (pydantic models for call options)."""

from .stream_options import AgentOptions, ResolvedStreamOptions, StreamOptions

__all__ = [
    "StreamOptions",
    "ResolvedStreamOptions",
    "AgentOptions",
]
