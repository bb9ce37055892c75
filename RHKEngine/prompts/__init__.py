"""
RHK Engine prompt module.
"""

from .prompts import SYSTEM_PROMPT_ANALYSIS, build_analysis_prompt

__all__ = ["SYSTEM_PROMPT_ANALYSIS", "build_analysis_prompt"]
