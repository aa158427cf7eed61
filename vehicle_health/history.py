"""History index: maintenance records grouped and date-sorted per category."""

from datetime import date
from typing import Dict, Iterable, List, Optional

from .calculations import to_date
from .category import Category, classify
from .maintenance_record import MaintenanceRecord


def _sorted_newest_first(
    records: Iterable[MaintenanceRecord], as_of: date
) -> List[MaintenanceRecord]:
    # sorted() is stable with reverse=True, so equal dates keep input order.
    # Undated records count as "now".
    return sorted(
        records, key=lambda r: to_date(r.date) or as_of, reverse=True
    )


def latest_record_for(
    category: Category,
    records: Iterable[MaintenanceRecord],
    as_of: Optional[date] = None,
) -> Optional[MaintenanceRecord]:
    """Get the most recent record classified under a category, or None."""
    as_of = as_of or date.today()
    matching = [r for r in records if category in classify(r.title)]
    if not matching:
        return None
    return _sorted_newest_first(matching, as_of)[0]


class HistoryIndex:
    """Records partitioned by category, each partition newest first."""

    def __init__(
        self, records: Iterable[MaintenanceRecord], as_of: Optional[date] = None
    ):
        self.as_of = as_of or date.today()
        grouped: Dict[Category, List[MaintenanceRecord]] = {c: [] for c in Category}
        for record in records:
            for category in classify(record.title):
                grouped[category].append(record)
        self._by_category = {
            category: _sorted_newest_first(entries, self.as_of)
            for category, entries in grouped.items()
        }

    def records_for(self, category: Category) -> List[MaintenanceRecord]:
        """All records for a category, newest first."""
        return list(self._by_category[category])

    def latest(self, category: Category) -> Optional[MaintenanceRecord]:
        """Most recent record for a category."""
        entries = self._by_category[category]
        return entries[0] if entries else None
