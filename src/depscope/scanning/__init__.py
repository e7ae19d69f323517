"""Source scanning: turn a directory of C/C++ files into FileRecords."""

from .models import FileRecord
from .scanner import IncludeScanner

__all__ = ["FileRecord", "IncludeScanner"]
