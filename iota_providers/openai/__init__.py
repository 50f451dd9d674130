"""
OpenAI backend package.

Exports:
- OpenAIProvider: streaming adapter for the Responses API
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
