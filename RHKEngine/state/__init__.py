"""
RHK Engine state module.

Exports ReportState/ReportMetadata, shared by the agent and the Flask interface.
"""

from .state import ReportMetadata, ReportState

__all__ = ["ReportState", "ReportMetadata"]
