"""
Session state for the RHK Engine.

One session holds at most one current report and at most one outstanding
analyzer request. The state is mutated only by the agent; the HTTP layer
reads it and guards `is_analyzing` under its own lock.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class ReportMetadata:
    """Bookkeeping for the last generation attempt."""

    category_id: str = ""
    model_name: str = ""
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    generation_time: float = 0.0
    warning_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category_id": self.category_id,
            "model_name": self.model_name,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "generation_time": self.generation_time,
            "warning_count": self.warning_count,
        }


@dataclass
class ReportState:
    """
    Current report plus the analyzing flag.

    `document` is replaced only by a successful composition and cleared only
    by reset(); a failed attempt records `error_message` and keeps it.
    """

    status: str = "idle"  # idle | analyzing | completed | failed
    is_analyzing: bool = False
    document: Any = None
    error_message: Optional[str] = None
    metadata: ReportMetadata = field(default_factory=ReportMetadata)

    def mark_processing(self, category_id: str = "", model_name: str = ""):
        self.status = "analyzing"
        self.is_analyzing = True
        self.error_message = None
        self.metadata = ReportMetadata(
            category_id=category_id,
            model_name=model_name,
            started_at=datetime.now().isoformat(timespec="seconds"),
        )

    def mark_completed(self, document):
        finished = datetime.now()
        self.document = document
        self.status = "completed"
        self.is_analyzing = False
        self.error_message = None
        if self.metadata.started_at:
            started = datetime.fromisoformat(self.metadata.started_at)
            self.metadata.generation_time = (finished - started).total_seconds()
        self.metadata.finished_at = finished.isoformat(timespec="seconds")
        self.metadata.warning_count = len(document.warnings)

    def mark_failed(self, error_message: str):
        self.status = "failed"
        self.is_analyzing = False
        self.error_message = error_message
        self.metadata.finished_at = datetime.now().isoformat(timespec="seconds")

    def reset(self):
        self.status = "idle"
        self.is_analyzing = False
        self.document = None
        self.error_message = None
        self.metadata = ReportMetadata()

    @property
    def has_report(self) -> bool:
        return self.document is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "is_analyzing": self.is_analyzing,
            "has_report": self.has_report,
            "display_title": self.document.display_title if self.document is not None else None,
            "error_message": self.error_message,
            "metadata": self.metadata.to_dict(),
        }

    def save_to_file(self, filepath: str):
        """Write the state summary plus the current document as JSON."""
        data = self.to_dict()
        if self.document is not None:
            data["document"] = self.document.to_dict()
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


__all__ = ["ReportState", "ReportMetadata"]
