from enum import Enum
from typing import Dict, Iterable, List
from listing_catalog.data.base_source import Listing


class AvailabilityFilter(str, Enum):
    ALL = "ALL"
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"

    @classmethod
    def parse(cls, raw) -> "AvailabilityFilter":
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"unknown availability filter: {raw!r}")


class FilterEngine:
    def evaluate(self, listing: Listing, mode: AvailabilityFilter) -> bool:
        """
        Decides whether a listing is visible under the given mode.
        Availability is the only attribute consulted.
        """
        if mode is AvailabilityFilter.AVAILABLE:
            return listing.available is True
        if mode is AvailabilityFilter.UNAVAILABLE:
            return listing.available is False
        return True

    def apply(self, records: Iterable[Listing], mode: AvailabilityFilter) -> List[Listing]:
        mode = AvailabilityFilter.parse(mode)
        return [r for r in records if self.evaluate(r, mode)]


_engine = FilterEngine()


def filter_listings(records: Iterable[Listing], mode: AvailabilityFilter) -> List[Listing]:
    return _engine.apply(records, mode)


def count_by_availability(records: Iterable[Listing]) -> Dict[AvailabilityFilter, int]:
    # Tallies shown next to each option of the tri-state control
    counts = {mode: 0 for mode in AvailabilityFilter}
    for r in records:
        counts[AvailabilityFilter.ALL] += 1
        if r.available:
            counts[AvailabilityFilter.AVAILABLE] += 1
        else:
            counts[AvailabilityFilter.UNAVAILABLE] += 1
    return counts
