"""Record id generation."""

import itertools
from collections.abc import Iterable


class IdGenerator:
    """
    Issue ``<prefix>_<n>`` ids from an increasing counter.

    The counter starts after the largest numeric suffix among the existing
    ids, so ids loaded from storage (including legacy timestamp ids) are
    never reissued.
    """

    def __init__(self, prefix: str, existing: Iterable[str] = ()):
        """Initialize generator for a prefix, seeded from existing ids."""
        self.prefix = prefix
        self.reseed(existing)

    def reseed(self, existing: Iterable[str]) -> None:
        """Restart the counter after the highest existing suffix."""
        self._issued: set[str] = set(existing)
        self._counter = itertools.count(self._max_suffix(self._issued) + 1)

    def _max_suffix(self, ids: Iterable[str]) -> int:
        marker = f"{self.prefix}_"
        highest = 0
        for record_id in ids:
            if not record_id.startswith(marker):
                continue
            suffix = record_id[len(marker) :]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return highest

    def next_id(self) -> str:
        """Return an id not issued or seen before."""
        while True:
            candidate = f"{self.prefix}_{next(self._counter)}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
