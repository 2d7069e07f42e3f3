"""Saved report snapshots, kept in a local JSON file keyed by report ID.

Single writer, last write wins: saving a report whose ID already exists
replaces the previous snapshot.  There is no locking and no durability
guarantee beyond a plain file write.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from report.models import ReportRecord

logger = logging.getLogger(__name__)

_DEFAULT_PATH = Path(".carbonprospect_reports.json")


class ReportStore:
    """JSON-file backed store of :class:`~report.models.ReportRecord` snapshots.

    Each entry is the record's JSON form plus ``saved_at`` (UTC ISO-8601) and
    ``status`` (always ``"saved"``)::

        store = ReportStore(Path("reports.json"))
        report_id = store.save(record)
        store.get(report_id)["status"]   # "saved"
    """

    def __init__(self, path: Path = _DEFAULT_PATH) -> None:
        self.path = Path(path)

    def save(self, report: ReportRecord) -> str:
        """Upsert *report* and return its ID."""
        data = self._load()
        entry = report.model_dump(mode="json")
        entry["saved_at"] = datetime.now(timezone.utc).isoformat()
        entry["status"] = "saved"
        data[report.report_id] = entry
        self._write(data)
        logger.info("Saved report %s to %s", report.report_id, self.path)
        return report.report_id

    def get(self, report_id: str) -> dict[str, Any] | None:
        """Return the stored snapshot for *report_id*, or None if absent."""
        return self._load().get(report_id)

    def list_reports(self) -> list[dict[str, Any]]:
        """Return every snapshot, most recently saved first."""
        entries = list(self._load().values())
        entries.sort(key=lambda e: e.get("saved_at", ""), reverse=True)
        return entries

    def delete(self, report_id: str) -> bool:
        """Remove *report_id*.  Returns False if it was not stored."""
        data = self._load()
        if report_id not in data:
            return False
        del data[report_id]
        self._write(data)
        logger.info("Deleted report %s from %s", report_id, self.path)
        return True

    def _load(self) -> dict[str, Any]:
        """Load the store file, returning an empty dict if it doesn't exist."""
        if self.path.exists():
            return json.loads(self.path.read_text())
        return {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.write_text(json.dumps(data, indent=2))
