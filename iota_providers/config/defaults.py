"""iota_providers.config.defaults
==============================

Central place for small, stable default values used across the package.
Only plain constants live here (no I/O, no imports from other subpackages)
so that any layer can import them without creating cycles.
"""

from __future__ import annotations

# ---- Call defaults ----
# Reasoning effort used when the caller does not request one.
DEFAULT_REASONING_EFFORT = "none"
# Turn budget of the agent loop when AgentOptions.max_turns is not given.
DEFAULT_MAX_TURNS = 10

# ---- Backend base URLs ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
GEMINI_API_VERSION = "v1beta"

# ---- Anthropic ----
ANTHROPIC_BETA_FINE_GRAINED_TOOL_STREAMING = "fine-grained-tool-streaming-2025-05-14"
ANTHROPIC_BETA_INTERLEAVED_THINKING = "interleaved-thinking-2025-05-14"
# Thinking budget per effort before capping at THINKING_BUDGET_MAX_FRACTION of max_tokens.
ANTHROPIC_THINKING_BUDGETS = {
    "minimal": 1024,
    "low": 8192,
    "medium": 16384,
    "high": 32768,
    "xhigh": 32768,
}
ANTHROPIC_MIN_THINKING_BUDGET = 1024
THINKING_BUDGET_MAX_FRACTION = 0.8

# ---- OpenAI ----
OPENAI_SERVICE_TIER_MULTIPLIERS = {
    "flex": 0.5,
    "standard": 1.0,
    "priority": 2.0,
}

# ---- Config / debug environment variables ----
CONFIG_FILE_ENV = "IOTA_PROVIDERS_CONFIG_FILE"
DEBUG_LOG_DIR_ENV = "IOTA_DEBUG_LOG_DIR"
