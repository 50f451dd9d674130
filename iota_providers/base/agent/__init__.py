"""Agent runtime package.

Provides the multi-turn tool execution loop.
"""

from .runtime import AgentRuntime, ToolHandler, agent

__all__ = ["AgentRuntime", "ToolHandler", "agent"]
