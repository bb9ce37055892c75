"""
Utility modules for the RHK Engine.
"""

from .config import Settings, settings
from .dates import default_period, format_report_date, pick_report_date
from .json_parser import JSONParseError, RobustJSONParser

__all__ = [
    "Settings",
    "settings",
    "default_period",
    "format_report_date",
    "pick_report_date",
    "JSONParseError",
    "RobustJSONParser",
]
