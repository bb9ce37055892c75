"""
RHK Engine.

Turns an AI analysis of a classroom photo (or a student roster) into a
themed, print-ready teacher performance report (Rencana Hasil Kerja).
"""

from .agent import InputIncomplete, ReportAgent, create_agent

__version__ = "1.0.0"
__author__ = "RHK Engine Team"

__all__ = ["ReportAgent", "InputIncomplete", "create_agent"]
