"""
File discovery and loading for WordScan.

Handles recursive enumeration against an extension allow-list, binary
detection, size limits, and encoding fallback.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from wordscan.errors import ConfigurationError, EnumerationError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = frozenset({".txt", ".log", ".cs"})


@dataclass
class FileContent:
    """Holds the text of a loaded file and how it was decoded."""

    path: Path
    text: str
    size: int
    encoding: str = "utf-8"


@dataclass
class LoaderConfig:
    """Configuration for file discovery and loading."""

    extensions: frozenset[str] = field(default_factory=lambda: DEFAULT_EXTENSIONS)
    max_file_size: int | None = None
    binary_detection: bool = True
    throttle_seconds: float = 0.05

    def is_eligible(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions


class SkipFile(Exception):
    """Raised by load_file when a file is deliberately not scanned."""


def _is_binary(path: Path, sample_size: int = 8192) -> bool:
    """Heuristic binary detection via null-byte sampling."""
    with open(path, "rb") as f:
        chunk = f.read(sample_size)
    return b"\x00" in chunk


def load_file(path: Path, config: LoaderConfig) -> FileContent:
    """
    Load a single file as text.

    Raises SkipFile if the file is too large or looks binary, and OSError
    if it cannot be read. Line endings are preserved verbatim.
    """
    size = path.stat().st_size

    if config.max_file_size is not None and size > config.max_file_size:
        raise SkipFile(f"exceeds {config.max_file_size} bytes")

    if config.binary_detection and _is_binary(path):
        raise SkipFile("binary content")

    for encoding in ("utf-8", "latin-1"):
        try:
            with open(path, encoding=encoding, newline="") as f:
                text = f.read()
            return FileContent(path=path, text=text, size=size, encoding=encoding)
        except UnicodeDecodeError:
            continue

    # latin-1 accepts every byte sequence
    raise SkipFile("undecodable content")


def iter_eligible_files(
    root: Path,
    config: LoaderConfig,
    exclude: Path | None = None,
) -> list[Path]:
    """
    Return every eligible file under root, in a stable sorted order.

    Unreadable subdirectories are logged and skipped. A failure to read
    root itself raises EnumerationError.
    """
    root_resolved = root.resolve()
    exclude_resolved = exclude.resolve() if exclude is not None else None

    def _on_error(exc: OSError) -> None:
        failed = Path(exc.filename).resolve() if exc.filename else None
        if failed is None or failed == root_resolved:
            raise EnumerationError(f"Cannot read scan root {root}: {exc}") from exc
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc.strerror)

    if not root.is_dir():
        raise EnumerationError(f"Scan root is not a directory: {root}")

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        current_dir = Path(dirpath)

        # Prune the output directory so masked copies are never rescanned
        dirnames[:] = sorted(
            d for d in dirnames
            if exclude_resolved is None or (current_dir / d).resolve() != exclude_resolved
        )

        for filename in sorted(filenames):
            file_path = current_dir / filename
            if config.is_eligible(file_path):
                files.append(file_path)
    return files


def build_loader_config(raw: dict) -> LoaderConfig:
    """Construct a LoaderConfig from the parsed config scan block."""
    scan_cfg = raw.get("scan", {})

    extensions = scan_cfg.get("extensions")
    if extensions is None:
        ext_set = DEFAULT_EXTENSIONS
    else:
        ext_set = frozenset(
            (e if e.startswith(".") else f".{e}").lower() for e in extensions if e
        )
        if not ext_set:
            raise ConfigurationError("scan.extensions must list at least one extension")

    throttle = float(scan_cfg.get("throttle_seconds", 0.05))
    if throttle < 0:
        raise ConfigurationError(f"scan.throttle_seconds must be >= 0, got {throttle}")

    max_size = scan_cfg.get("max_file_size_bytes")
    return LoaderConfig(
        extensions=ext_set,
        max_file_size=int(max_size) if max_size is not None else None,
        binary_detection=scan_cfg.get("binary_detection", True),
        throttle_seconds=throttle,
    )
