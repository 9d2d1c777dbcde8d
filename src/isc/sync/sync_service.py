"""Service that copies files missing from a destination directory."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Tuple

from loguru import logger

from isc.checksum import Algorithm
from isc.config import SyncConfig
from isc.exceptions import WorkerPoolError
from isc.sync.copy_executor import CopyExecutor, OutcomeCallback
from isc.sync.diff import diff
from isc.sync.fingerprint import DirectoryFingerprint, DirectoryFingerprinter
from isc.sync.report import Report


class SyncService:
    """Fingerprints both directories, copies what is missing and reports on it."""

    def __init__(self, thread_count: int, algorithm: Algorithm = Algorithm.SHA2_256):
        self.thread_count = thread_count
        self.algorithm = algorithm

    @classmethod
    def from_config(cls, config: SyncConfig) -> "SyncService":
        return cls(thread_count=config.thread_count, algorithm=config.algorithm)

    def create_worker_pool(self) -> ThreadPoolExecutor:
        """
        Create the pool that digests files.

        Raises:
            WorkerPoolError: If the pool cannot be created
        """
        try:
            return ThreadPoolExecutor(max_workers=self.thread_count, thread_name_prefix="isc-worker")
        except (ValueError, RuntimeError) as e:
            raise WorkerPoolError(f"Failed to create worker pool: {e}") from e

    async def fingerprint_pair(
        self, source: Path, destination: Path, executor: ThreadPoolExecutor
    ) -> Tuple[DirectoryFingerprint, DirectoryFingerprint]:
        """
        Fingerprint source and destination concurrently.

        Both directories are listed before any file is digested, so a
        subdirectory in either one fails the run before hashing starts.
        """
        fingerprinter = DirectoryFingerprinter(self.algorithm, executor)
        source_files = fingerprinter.list_files(source)
        destination_files = fingerprinter.list_files(destination)

        source_fingerprint, destination_fingerprint = await asyncio.gather(
            fingerprinter.fingerprint(source, source_files),
            fingerprinter.fingerprint(destination, destination_files),
        )
        return source_fingerprint, destination_fingerprint

    async def sync(
        self, source: Path, destination: Path, on_complete: Optional[OutcomeCallback] = None
    ) -> Report:
        """
        Copy every file of `source` whose content is not in `destination`.

        Args:
            source: Directory to copy from
            destination: Directory to copy to
            on_complete: Called with each copy outcome as it finishes

        Returns:
            Report with one outcome per copied file, in submission order

        Raises:
            SyncError: On any fatal error; nothing is copied in that case
        """
        logger.info(f"Syncing {source} -> {destination} with {self.thread_count} workers")

        executor = self.create_worker_pool()
        try:
            source_fingerprint, destination_fingerprint = await self.fingerprint_pair(
                source, destination, executor
            )
        finally:
            executor.shutdown(wait=True)

        tasks = diff(source_fingerprint, destination_fingerprint)
        outcomes = await CopyExecutor(self.thread_count).execute_all(tasks, on_complete)

        report = Report.from_outcomes(outcomes)
        logger.info(report.summary)
        return report
