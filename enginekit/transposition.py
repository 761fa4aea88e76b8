"""Bucketed transposition table keyed by 64-bit position hashes."""

from dataclasses import dataclass
from enum import IntFlag
from typing import Optional

MEGABYTE = 0x100000
BUCKET_SIZE = 3
BUCKET_BYTES = 32
NO_ENTRY = 0

_KEY_MASK = (1 << 64) - 1
_HASH_MASK = (1 << 32) - 1


class Bound(IntFlag):
    """Kind of bound a stored score represents."""

    LOWER = 1
    UPPER = 2
    EXACT = 4


@dataclass(frozen=True)
class TTEntry:
    """One stored search result."""

    flags: int = 0
    depth: int = 0
    eval: int = 0
    score: int = 0
    hash: int = 0
    move: int = 0


_EMPTY = TTEntry()


def tt_score(entry: TTEntry, ply: int, mate_bound: int) -> int:
    """Return the entry's score with mate distances made relative to ``ply``."""
    if entry.score > mate_bound:
        return entry.score - ply
    if entry.score < -mate_bound:
        return entry.score + ply
    return entry.score


class TranspositionTable:
    """A power-of-two sized table of buckets, each holding three entries."""

    def __init__(self, megabytes: int = 32, mate_bound: int = 30000) -> None:
        self.mate_bound = mate_bound
        self.mask = 0
        self.size = 0
        self._buckets: dict[int, list[TTEntry]] = {}
        self.resize(megabytes)

    def resize(self, megabytes: int) -> int:
        """Reallocate the table for ``megabytes`` and return its size in bytes."""
        if megabytes < 1:
            raise ValueError(f"table size must be at least 1 MB, got {megabytes}")
        key_size = (megabytes.bit_length() - 1) + ((MEGABYTE // BUCKET_BYTES).bit_length() - 1)
        self.mask = (1 << key_size) - 1
        self.size = (self.mask + 1) * BUCKET_BYTES
        self.clear()
        return self.size

    def clear(self) -> None:
        """Forget every stored entry."""
        self._buckets = {}

    def _bucket(self, key: int) -> list[TTEntry]:
        index = key & self.mask
        bucket = self._buckets.get(index)
        if bucket is None:
            bucket = [_EMPTY] * BUCKET_SIZE
            self._buckets[index] = bucket
        return bucket

    @staticmethod
    def _short_hash(key: int) -> int:
        return ((key & _KEY_MASK) >> 32) & _HASH_MASK

    def probe(self, key: int) -> Optional[TTEntry]:
        """Return the entry stored for ``key``, or None on a miss."""
        short_hash = self._short_hash(key)
        bucket = self._buckets.get(key & self.mask, [_EMPTY] * BUCKET_SIZE)
        return next((entry for entry in bucket if entry.hash == short_hash), None)

    def put(
        self,
        key: int,
        depth: int,
        score: int,
        flag: int,
        move: int,
        ply: int,
        eval: int,
    ) -> None:
        """Store a result, replacing an empty, matching or shallowest slot.

        A matching entry searched deeper is kept unless the new result is exact.
        Scores are stored as given; ``ply`` is accepted for call compatibility.
        """
        bucket = self._bucket(key)
        short_hash = self._short_hash(key)

        replacement_idx = 0
        replacement_depth: Optional[int] = None
        for idx, entry in enumerate(bucket):
            if not entry.hash:
                replacement_idx = idx
                break
            if entry.hash == short_hash:
                if entry.depth > depth and not (flag & Bound.EXACT):
                    return
                replacement_idx = idx
                break
            if replacement_depth is None or entry.depth < replacement_depth:
                replacement_idx = idx
                replacement_depth = entry.depth

        bucket[replacement_idx] = TTEntry(
            flags=int(flag), depth=depth, eval=eval, score=score, hash=short_hash, move=move
        )

    def hashfull(self) -> int:
        """Permille of used slots, sampled over the first buckets."""
        count = 1000 // BUCKET_SIZE
        used = sum(
            1
            for index in range(count)
            for entry in self._buckets.get(index, ())
            if entry.hash
        )
        return used * 1000 // (count * BUCKET_SIZE)