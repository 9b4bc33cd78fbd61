"""
Suspect directory - chained hash table mapping clue text to a suspect.

Bucket = sum of the UTF-8 bytes of the clue, modulo the bucket count.
New entries are pushed onto the front of their chain and nothing is
de-duplicated, so a lookup sees the most recent insert for a key first.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

HASH_BUCKETS = 7
UNKNOWN_SUSPECT = "unknown"

SUSPECT_ASSOCIATIONS = {
    "mud footprints by the front door": "Gardener",
    "torn diary page": "Housekeeper",
    "broken glass with lipstick mark": "Madame Sinclair",
    "sealed envelope with red wax": "Housekeeper",
    "old key among the flowers": "Gardener",
    "torn portrait of an unknown woman": "Madame Sinclair",
}


@dataclass(eq=False)
class SuspectEntry:
    clue_key: str
    suspect_name: str
    next: Optional["SuspectEntry"] = None


def hash_clue(text: str, bucket_count: int = HASH_BUCKETS) -> int:
    return sum(text.encode("utf-8")) % bucket_count


class SuspectTable:
    def __init__(self, bucket_count: int = HASH_BUCKETS):
        if bucket_count < 1:
            raise ValueError("Suspect table needs at least one bucket")
        self.bucket_count = bucket_count
        self._buckets: list[Optional[SuspectEntry]] = [None] * bucket_count
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def _bucket(self, clue_key: str) -> int:
        return hash_clue(clue_key, self.bucket_count)

    def insert(self, clue_key: str, suspect_name: str):
        index = self._bucket(clue_key)
        self._buckets[index] = SuspectEntry(clue_key, suspect_name, self._buckets[index])
        self._size += 1
        logger.debug("Registered %r -> %s in bucket %d", clue_key, suspect_name, index)

    def lookup(self, clue_key: str) -> str:
        entry = self._buckets[self._bucket(clue_key)]
        while entry is not None:
            if entry.clue_key == clue_key:
                return entry.suspect_name
            entry = entry.next
        return UNKNOWN_SUSPECT

    def entries(self) -> Iterator[tuple[str, str]]:
        for head in self._buckets:
            entry = head
            while entry is not None:
                yield entry.clue_key, entry.suspect_name
                entry = entry.next

    def chain(self, index: int) -> list[tuple[str, str]]:
        """Entries of one bucket, front of the chain first."""
        out = []
        entry = self._buckets[index]
        while entry is not None:
            out.append((entry.clue_key, entry.suspect_name))
            entry = entry.next
        return out

    def suspects(self) -> list[str]:
        return sorted({name for _, name in self.entries()})

    def release(self) -> int:
        released = 0
        for i, head in enumerate(self._buckets):
            entry = head
            while entry is not None:
                following = entry.next
                entry.next = None
                entry = following
                released += 1
            self._buckets[i] = None
        self._size = 0
        return released


def build_suspect_table(
    associations: dict[str, str] = SUSPECT_ASSOCIATIONS,
    bucket_count: int = HASH_BUCKETS,
) -> SuspectTable:
    table = SuspectTable(bucket_count)
    for clue_key, suspect_name in associations.items():
        table.insert(clue_key, suspect_name)
    logger.info(
        "Suspect directory ready: %d clues across %d buckets",
        len(table),
        bucket_count,
    )
    return table
