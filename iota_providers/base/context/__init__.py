"""Context normalization package.

Rewrites caller conversations into the form a backend adapter expects.
"""

from .normalizer import context_uses_tools, normalize_context_for_target

__all__ = ["context_uses_tools", "normalize_context_for_target"]
