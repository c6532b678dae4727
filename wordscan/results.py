"""
Per-file outcomes and thread-safe result accumulation for WordScan.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from enum import Enum


class FileStatus(str, Enum):
    PROCESSED = "processed"
    SKIPPED = "skipped"
    ERRORED = "errored"


@dataclass(frozen=True)
class FileOutcome:
    """A file in which at least one forbidden word was masked."""

    path: str
    size: int
    replacements: int
    masked_path: str | None = None


@dataclass(frozen=True)
class FileRecord:
    """What happened to a single enumerated file."""

    path: str
    status: FileStatus
    reason: str | None = None
    outcome: FileOutcome | None = None

    @property
    def matched(self) -> bool:
        return self.outcome is not None


@dataclass(frozen=True)
class ScanStats:
    """Aggregate counters for one scan session."""

    total: int = 0
    processed: int = 0
    matched: int = 0
    skipped: int = 0
    errored: int = 0
    replacements: int = 0

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return self.processed / self.total * 100


def rank_outcomes(outcomes: list[FileOutcome]) -> list[FileOutcome]:
    """Sort outcomes by replacement count, highest first; ties keep their order."""
    return sorted(outcomes, key=lambda o: o.replacements, reverse=True)


class ResultStore:
    """
    Accumulates FileRecords for one session.

    Safe for concurrent writers and readers; readers always receive
    copies, never the live collections.
    """

    def __init__(self, total: int = 0) -> None:
        self._lock = threading.Lock()
        self._outcomes: list[FileOutcome] = []
        self._records: list[FileRecord] = []
        self._stats = ScanStats(total=total)

    def set_total(self, total: int) -> None:
        with self._lock:
            self._stats = replace(self._stats, total=total)

    def add(self, record: FileRecord) -> ScanStats:
        """Record a visited file and return the updated stats."""
        with self._lock:
            self._records.append(record)
            s = self._stats
            s = replace(
                s,
                processed=s.processed + 1,
                skipped=s.skipped + (record.status is FileStatus.SKIPPED),
                errored=s.errored + (record.status is FileStatus.ERRORED),
            )
            if record.outcome is not None:
                self._outcomes.append(record.outcome)
                s = replace(
                    s,
                    matched=s.matched + 1,
                    replacements=s.replacements + record.outcome.replacements,
                )
            self._stats = s
            return s

    def snapshot(self) -> list[FileOutcome]:
        with self._lock:
            outcomes = list(self._outcomes)
        return rank_outcomes(outcomes)

    def records(self) -> list[FileRecord]:
        with self._lock:
            return list(self._records)

    def stats(self) -> ScanStats:
        with self._lock:
            return self._stats

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)
