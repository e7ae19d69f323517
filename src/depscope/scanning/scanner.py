"""Line-based include scanner for C and C++ trees."""

import os
import re
from pathlib import Path
from typing import Iterator, List, Optional

from ..config import AnalysisConfig
from ..exceptions import FileAccessError, InvalidPathError
from ..logging_config import get_logger
from .models import FileRecord

logger = get_logger(__name__)

INCLUDE_RE = re.compile(r'^\s*#\s*include\s*[<"]([^<>"]+)[>"]')
TYPE_RE = re.compile(r"\b(?:class|struct)\s+([A-Za-z_]\w*)")


class IncludeScanner:
    """Walks a directory and extracts include directives from every source file.

    Extraction is purely textual: one regex pass per line, no preprocessing,
    so includes inside ``#if 0`` blocks are still reported.
    """

    def __init__(self, root_dir: str, config: Optional[AnalysisConfig] = None):
        self.root_dir = Path(root_dir)
        self.config = config or AnalysisConfig()
        self._extensions = self.config.normalized_extensions
        self._exclude_re = (
            re.compile(self.config.exclude_name_pattern, re.IGNORECASE)
            if self.config.exclude_name_pattern
            else None
        )

    def scan(self) -> List[FileRecord]:
        """Scan all in-scope files under the root, sorted by record name."""
        if not self.root_dir.is_dir():
            raise InvalidPathError(self.root_dir, "not a directory")

        records: List[FileRecord] = []
        for filepath in self._iter_candidates():
            if len(records) >= self.config.max_files:
                logger.warning(
                    "Reached max_files=%d, remaining files under %s are ignored",
                    self.config.max_files,
                    self.root_dir,
                )
                break
            try:
                records.append(self.scan_file(filepath))
            except FileAccessError as e:
                logger.warning("Skipping %s: %s", filepath, e.reason)

        records.sort(key=lambda r: r.name)
        logger.debug("Scanned %d files under %s", len(records), self.root_dir)
        return records

    def scan_file(self, filepath: Path) -> FileRecord:
        """Extract a FileRecord from a single file."""
        try:
            with open(filepath, "r", encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot read file: {e}")

        headers: List[str] = []
        types: List[str] = []
        for line in lines:
            header = self._extract_include(line)
            if header is not None:
                headers.append(header)
            types.extend(TYPE_RE.findall(line))

        return FileRecord(
            name=self._record_name(filepath),
            included_headers=headers,
            defined_types=types,
        )

    def _iter_candidates(self) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(
            self.root_dir, followlinks=self.config.follow_symlinks
        ):
            if not self.config.allow_hidden_files:
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            dirnames.sort()
            for filename in sorted(filenames):
                filepath = Path(dirpath) / filename
                if not self._should_skip(filepath):
                    yield filepath

    def _should_skip(self, filepath: Path) -> bool:
        name = filepath.name
        if not self.config.allow_hidden_files and name.startswith("."):
            return True
        if filepath.suffix.lower() not in self._extensions:
            return True
        if self._exclude_re is not None and self._exclude_re.search(name):
            return True
        return not filepath.is_file()

    def _extract_include(self, line: str) -> Optional[str]:
        match = INCLUDE_RE.match(line)
        if not match:
            return None
        header = match.group(1).strip()
        # Extension-less includes (<vector>, <QtCore>) are never project headers
        if not any(marker in header for marker in self.config.header_markers):
            return None
        return header

    def _record_name(self, filepath: Path) -> str:
        try:
            return filepath.relative_to(self.root_dir).as_posix()
        except ValueError:
            return filepath.as_posix()
