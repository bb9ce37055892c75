"""
LLM client used by the RHK Engine analyzer node.
"""

from .base import ConfigurationError, LLMClient

__all__ = ["LLMClient", "ConfigurationError"]
