"""Anthropic backend adapter."""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]
