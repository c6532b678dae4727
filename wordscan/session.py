"""
Background scan sessions for WordScan.

A ScanSession validates its inputs, runs the scan loop on a single worker
thread, and exposes pause/resume/cancel to the controlling thread. The
caller only talks to the worker through the session's ControlSignal and
the progress/file/finished callbacks.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from wordscan.config_loader import AppConfig, default_config
from wordscan.control import ControlSignal
from wordscan.errors import ConfigurationError, ReportWriteError, WordScanError
from wordscan.report import write_text_report
from wordscan.results import FileOutcome, FileRecord, ResultStore, ScanStats
from wordscan.scanner import FileCallback, ProgressCallback, run_scan
from wordscan.word_set import WordSet, parse_words

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    CANCELLING = "cancelling"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class SessionResult:
    """Final result of a session, delivered once the worker finishes."""

    status: SessionStatus
    outcomes: list[FileOutcome] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)
    records: list[FileRecord] = field(default_factory=list)
    report_path: Path | None = None
    error: Exception | None = None
    report_error: ReportWriteError | None = None

    @property
    def cancelled(self) -> bool:
        return self.status is SessionStatus.CANCELLED


class ScanSession:
    """One scan from start to completion or cancellation."""

    def __init__(
        self,
        root: Path | str | None,
        words: WordSet | str | None,
        config: AppConfig | None = None,
        on_progress: ProgressCallback | None = None,
        on_file: FileCallback | None = None,
        on_finished: Callable[[SessionResult], None] | None = None,
    ) -> None:
        self.root = root
        self.words = words if isinstance(words, WordSet) else parse_words(words)
        self.config = config or default_config()
        self.signal = ControlSignal()
        self._on_progress = on_progress
        self._on_file = on_file
        self._on_finished = on_finished
        self._store = ResultStore()
        self._progress = 0.0
        self._thread: threading.Thread | None = None
        self._result: SessionResult | None = None
        self._done = threading.Event()

    # ── control surface ───────────────────────────────────────────────────

    def start(self) -> None:
        """Validate inputs and launch the worker. Raises ConfigurationError."""
        if self._thread is not None:
            raise RuntimeError("ScanSession can only be started once")

        if not self.words:
            raise ConfigurationError("No forbidden words supplied")
        if self.root is None or not str(self.root).strip():
            raise ConfigurationError("No scan root supplied")
        root = Path(self.root)
        if not root.is_dir():
            raise ConfigurationError(f"Scan root is not a directory: {root}")
        self.root = root

        logger.info("Starting scan of %s for %d word(s)", root, len(self.words))
        self._thread = threading.Thread(target=self._run, name="wordscan-worker", daemon=True)
        self._thread.start()

    def pause(self) -> None:
        self.signal.pause()

    def resume(self) -> None:
        self.signal.resume()

    def cancel(self) -> None:
        self.signal.cancel()

    def wait(self, timeout: float | None = None) -> SessionResult | None:
        """Block until the session finishes; None if the timeout expires first."""
        if self._thread is None:
            raise RuntimeError("ScanSession has not been started")
        self._done.wait(timeout)
        return self._result

    # ── read path ─────────────────────────────────────────────────────────

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def stats(self) -> ScanStats:
        return self._store.stats()

    def snapshot(self) -> list[FileOutcome]:
        return self._store.snapshot()

    @property
    def result(self) -> SessionResult | None:
        return self._result

    @property
    def state(self) -> SessionStatus:
        if self._result is not None:
            return self._result.status
        if self._thread is None:
            return SessionStatus.IDLE
        if self.signal.is_cancelled:
            return SessionStatus.CANCELLING
        if self.signal.is_paused:
            return SessionStatus.PAUSED
        return SessionStatus.RUNNING

    # ── worker ────────────────────────────────────────────────────────────

    def _emit_progress(self, value: float) -> None:
        self._progress = value
        if self._on_progress is not None:
            self._on_progress(value)

    def _run(self) -> None:
        try:
            self._execute()
        finally:
            self._done.set()

    def _execute(self) -> None:
        cfg = self.config
        try:
            scan = run_scan(
                self.root,
                self.words,
                self.signal,
                cfg.loader,
                cfg.mask,
                cfg.output,
                on_progress=self._emit_progress,
                on_file=self._on_file,
                store=self._store,
            )
        except WordScanError as exc:
            logger.error("Scan of %s failed: %s", self.root, exc)
            self._finish(SessionResult(status=SessionStatus.FAILED, stats=self._store.stats(), error=exc))
            return
        except Exception as exc:
            logger.exception("Scan of %s aborted", self.root)
            self._finish(SessionResult(status=SessionStatus.FAILED, stats=self._store.stats(), error=exc))
            return

        result = SessionResult(
            status=SessionStatus.CANCELLED if scan.cancelled else SessionStatus.COMPLETED,
            outcomes=scan.results,
            stats=scan.stats,
            records=scan.records,
        )

        if scan.cancelled:
            logger.info("Scan cancelled after %d of %d file(s)", scan.stats.processed, scan.stats.total)
        else:
            try:
                result.report_path = write_text_report(scan.results, cfg.output.report)
            except ReportWriteError as exc:
                logger.error("%s", exc)
                result.report_error = exc
            logger.info(
                "Scan complete: %d file(s) masked, %d replacement(s)",
                scan.stats.matched,
                scan.stats.replacements,
            )

        self._finish(result)

    def _finish(self, result: SessionResult) -> None:
        self._result = result
        if self._on_finished is not None:
            try:
                self._on_finished(result)
            except Exception:
                logger.exception("on_finished callback failed")
