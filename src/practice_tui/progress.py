from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List, Optional, Union

from .config import DatasetCatalog
from .datamodels import (
    ATTEMPTED,
    SOLVED,
    STATUSES,
    UNSOLVED,
    CategoryStats,
    ProgressEntry,
    next_status,
)
from .errors import ParseError
from .storage import ProgressStorage

logger = logging.getLogger("practice")

ProgressData = Dict[str, Dict[str, Dict[str, Any]]]


class ProgressStore:
    """
    Completion and bookmark state per dataset and question.

    State is loaded once from the storage port and written back after every
    mutation. A question with no recorded entry behaves exactly like one
    that is unsolved and not bookmarked.
    """

    def __init__(self, storage: ProgressStorage, catalog: DatasetCatalog):
        self.storage = storage
        self.catalog = catalog
        self.last_stats: Dict[str, CategoryStats] = {}
        self.progress: ProgressData = self._load()

    def _empty(self) -> ProgressData:
        return {dataset_id: {} for dataset_id in self.catalog.ids}

    def _load(self) -> ProgressData:
        raw = self.storage.read()
        if raw is None:
            return self._empty()
        try:
            return _validate(json.loads(raw))
        except (json.JSONDecodeError, ParseError) as e:
            logger.warning("Stored progress is unreadable, starting fresh: %s", e)
            return self._empty()

    def _save(self) -> None:
        self.storage.write(json.dumps(self.progress))

    def _entry(self, category: str, question_id: str) -> Dict[str, Any]:
        entries = self.progress.setdefault(category, {})
        if question_id not in entries:
            entries[question_id] = ProgressEntry().to_dict()
        return entries[question_id]

    def get_status(self, category: str, question_id: str) -> ProgressEntry:
        entry = self.progress.get(category, {}).get(question_id)
        if not entry:
            return ProgressEntry()
        return ProgressEntry(
            status=entry.get("status", UNSOLVED),
            bookmarked=bool(entry.get("bookmarked", False)),
        )

    def set_status(self, category: str, question_id: str, status: str) -> CategoryStats:
        """Record a status and return the refreshed stats for the dataset."""
        if status not in STATUSES:
            raise ValueError(f"Unknown status {status!r}; expected one of {STATUSES}")
        self._entry(category, question_id)["status"] = status
        self._save()
        logger.debug("Set %s/%s to %s", category, question_id, status)

        stats = self.get_category_stats(category, self.catalog.total(category))
        self.last_stats[category] = stats
        return stats

    def cycle_status(self, category: str, question_id: str) -> str:
        status = next_status(self.get_status(category, question_id).status)
        self.set_status(category, question_id, status)
        return status

    def toggle_bookmark(self, category: str, question_id: str) -> bool:
        entry = self._entry(category, question_id)
        entry["bookmarked"] = not entry["bookmarked"]
        self._save()
        return entry["bookmarked"]

    def is_bookmarked(self, category: str, question_id: str) -> bool:
        return self.get_status(category, question_id).bookmarked

    def get_bookmarked(self, category: str) -> List[str]:
        entries = self.progress.get(category, {})
        return [qid for qid, entry in entries.items() if entry.get("bookmarked")]

    def get_category_stats(self, category: str, total: int) -> CategoryStats:
        solved = attempted = 0
        for entry in self.progress.get(category, {}).values():
            status = entry.get("status")
            if status == SOLVED:
                solved += 1
            elif status == ATTEMPTED:
                attempted += 1
        return CategoryStats(solved=solved, attempted=attempted, total=total)

    def export_snapshot(self) -> ProgressData:
        return copy.deepcopy(self.progress)

    def export_json(self) -> str:
        return json.dumps(self.progress, indent=2)

    def import_snapshot(self, blob: Union[str, bytes, Dict[str, Any]]) -> None:
        """
        Replace the whole state with an exported snapshot.

        The snapshot is validated before anything changes, so a rejected
        import leaves the current progress untouched.
        """
        if isinstance(blob, (str, bytes)):
            try:
                blob = json.loads(blob)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ParseError(f"Snapshot is not valid JSON: {e}") from e
        self.progress = _validate(blob)
        self._save()
        self.last_stats.clear()
        logger.info("Imported progress for %d datasets", len(self.progress))

    def clear(self, category: Optional[str] = None) -> None:
        if category is not None:
            self.progress[category] = {}
        else:
            self.progress = self._empty()
        self.last_stats.clear()
        self._save()
        logger.info("Cleared progress for %s", "all datasets" if category is None else repr(category))


def _validate(data: Any) -> ProgressData:
    """Check the snapshot shape and return a private copy of it."""
    if not isinstance(data, dict):
        raise ParseError("Snapshot must be an object of datasets")

    result: ProgressData = {}
    for category, entries in data.items():
        if not isinstance(entries, dict):
            raise ParseError(f"Progress for {category!r} must be an object")
        result[category] = {}
        for question_id, entry in entries.items():
            if not isinstance(entry, dict):
                raise ParseError(f"Entry {category}/{question_id} must be an object")
            status = entry.get("status", UNSOLVED)
            bookmarked = entry.get("bookmarked", False)
            if status not in STATUSES:
                raise ParseError(f"Entry {category}/{question_id} has unknown status {status!r}")
            if not isinstance(bookmarked, bool):
                raise ParseError(f"Entry {category}/{question_id} has a non-boolean bookmark")
            result[category][question_id] = {"status": status, "bookmarked": bookmarked}
    return result
