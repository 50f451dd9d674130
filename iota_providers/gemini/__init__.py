"""Gemini backend adapter."""

from .client import GeminiProvider

__all__ = ["GeminiProvider"]
