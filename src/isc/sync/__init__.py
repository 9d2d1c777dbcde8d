from .fingerprint import DirectoryFingerprint, DirectoryFingerprinter
from .diff import CopyTask, diff
from .copy_executor import CopyExecutor, CopyOutcome
from .report import Report, render
from .sync_service import SyncService

__all__ = [
    "CopyExecutor",
    "CopyOutcome",
    "CopyTask",
    "DirectoryFingerprint",
    "DirectoryFingerprinter",
    "Report",
    "SyncService",
    "diff",
    "render",
]
