"""
Scan loop for WordScan.

Enumerates eligible files, masks forbidden words in each, writes masked
copies, and reports per-file records and progress. Honours a ControlSignal
between files; a file in flight always finishes before a pause or cancel
takes effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Literal

from wordscan.control import ControlSignal
from wordscan.errors import ConfigurationError
from wordscan.file_loader import LoaderConfig, SkipFile, iter_eligible_files, load_file
from wordscan.matcher import MaskConfig, apply_mask
from wordscan.results import FileOutcome, FileRecord, FileStatus, ResultStore, ScanStats
from wordscan.word_set import WordSet

logger = logging.getLogger(__name__)

OutputLayout = Literal["flat", "mirror"]
_LAYOUTS = ("flat", "mirror")

ProgressCallback = Callable[[float], None]
FileCallback = Callable[[FileRecord], None]


@dataclass(frozen=True)
class OutputConfig:
    """Where masked copies and the report are written."""

    directory: Path = Path("FilteredFiles")
    layout: OutputLayout = "flat"
    report: Path = Path("Report.txt")


@dataclass
class ScanOutcome:
    """Everything a finished (or cancelled) scan loop produced."""

    results: list[FileOutcome]
    cancelled: bool
    stats: ScanStats
    records: list[FileRecord] = field(default_factory=list)


class MaskedCopyWriter:
    """Writes masked content under the output directory."""

    def __init__(self, root: Path, config: OutputConfig) -> None:
        self._root = root
        self._config = config
        self._written: dict[Path, Path] = {}

    def destination(self, source: Path) -> Path:
        if self._config.layout == "mirror":
            return self._config.directory / source.relative_to(self._root)
        return self._config.directory / source.name

    def write(self, source: Path, text: str, encoding: str) -> Path:
        """Write text in the source encoding. Raises UnicodeEncodeError before touching dest."""
        data = text.encode(encoding)
        dest = self.destination(source)
        previous = self._written.get(dest)
        if previous is not None and previous != source:
            logger.warning("Masked copy of %s overwrites copy of %s at %s", source, previous, dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with open(dest, "wb") as f:
            f.write(data)
        self._written[dest] = source
        return dest


def scan_file(
    path: Path,
    words: WordSet,
    loader: LoaderConfig,
    mask: MaskConfig,
    writer: MaskedCopyWriter,
) -> FileRecord:
    """Mask a single file and describe the result. Never raises for I/O errors."""
    try:
        content = load_file(path, loader)
    except SkipFile as exc:
        logger.debug("Skipped %s: %s", path, exc)
        return FileRecord(path=str(path), status=FileStatus.SKIPPED, reason=str(exc))
    except OSError as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return FileRecord(path=str(path), status=FileStatus.ERRORED, reason=f"read failed: {exc}")

    masked = apply_mask(content.text, words, mask.char)
    if not masked.has_matches:
        return FileRecord(path=str(path), status=FileStatus.PROCESSED)

    try:
        dest = writer.write(path, masked.content, content.encoding)
    except (OSError, UnicodeError) as exc:
        logger.warning("Cannot write masked copy of %s: %s", path, exc)
        return FileRecord(path=str(path), status=FileStatus.ERRORED, reason=f"write failed: {exc}")

    outcome = FileOutcome(
        path=str(path),
        size=content.size,
        replacements=masked.replacements,
        masked_path=str(dest),
    )
    return FileRecord(path=str(path), status=FileStatus.PROCESSED, outcome=outcome)


def run_scan(
    root: Path,
    words: WordSet,
    signal: ControlSignal,
    loader: LoaderConfig,
    mask: MaskConfig,
    output: OutputConfig,
    on_progress: ProgressCallback | None = None,
    on_file: FileCallback | None = None,
    store: ResultStore | None = None,
) -> ScanOutcome:
    """
    Scan every eligible file under root.

    Stops early, with cancelled=True, as soon as the signal is observed
    cancelled at a checkpoint. Outcomes gathered before cancellation are
    returned as-is. Raises EnumerationError if root cannot be walked.
    """
    store = store if store is not None else ResultStore()
    files = iter_eligible_files(root, loader, exclude=output.directory)
    total = len(files)
    store.set_total(total)
    logger.info("Found %d eligible file(s) under %s", total, root)

    writer = MaskedCopyWriter(root, output)
    cancelled = False

    for path in files:
        if not signal.checkpoint():
            cancelled = True
            break

        record = scan_file(path, words, loader, mask, writer)
        if on_file is not None:
            on_file(record)

        stats = store.add(record)
        if on_progress is not None:
            on_progress(stats.processed / total * 100)

        signal.sleep(loader.throttle_seconds)

    # A cancel that lands after the last file does not undo a complete run
    return ScanOutcome(
        results=store.snapshot(),
        cancelled=cancelled,
        stats=store.stats(),
        records=store.records(),
    )


def build_output_config(output_cfg: dict) -> OutputConfig:
    """Construct OutputConfig from the parsed config output block."""
    layout = output_cfg.get("layout", "flat")
    if layout not in _LAYOUTS:
        raise ConfigurationError(f"output.layout must be one of {_LAYOUTS}, got {layout!r}")
    return OutputConfig(
        directory=Path(output_cfg.get("directory", "FilteredFiles")),
        layout=layout,
        report=Path(output_cfg.get("report", "Report.txt")),
    )
