"""Parallel content fingerprinting of a single directory."""

import asyncio
import threading
from concurrent.futures import Executor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Mapping, Optional, Set

from loguru import logger

from isc.checksum import Algorithm, checksum_impl, file_checksum
from isc.exceptions import DirectoryReadError, NotRegularFileError, SubdirectoryError


@dataclass(frozen=True)
class DirectoryFingerprint:
    """Digests of every top-level file in one directory.

    Attributes:
        directory: Resolved path of the scanned directory
        digest_set: Every digest found, for membership tests
        path_to_digest: Resolved file path -> digest
    """

    directory: Path
    digest_set: FrozenSet[bytes] = field(default_factory=frozenset)
    path_to_digest: Mapping[Path, bytes] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.path_to_digest)

    def __contains__(self, digest: bytes) -> bool:
        return digest in self.digest_set


class DirectoryFingerprinter:
    """
    Computes a DirectoryFingerprint by digesting files on a shared worker pool.
    Subdirectories are not supported; finding one fails the whole scan.
    """

    def __init__(self, algorithm: Algorithm, executor: Executor):
        self.algorithm = algorithm
        self.executor = executor
        self.compute = checksum_impl(algorithm)

    def list_files(self, directory: Path) -> List[Path]:
        """
        List the top-level files of a directory.

        Symbolic links are followed, so a link to a directory counts as a
        subdirectory.

        Args:
            directory: Directory to list

        Returns:
            Resolved paths of all entries

        Raises:
            DirectoryReadError: If the directory cannot be listed
            SubdirectoryError: If any entry is a directory
            NotRegularFileError: If any entry is neither a directory nor a regular file
        """
        directory = directory.resolve()
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.error(f"Failed to list directory {directory}: {e}")
            raise DirectoryReadError(f"Failed to list directory {directory}: {e}") from e

        for entry in entries:
            if entry.is_dir():
                raise SubdirectoryError(
                    f"{directory} contains subdirectory {entry.name}; only files are supported"
                )
            # FIFOs, sockets, devices and dangling links would block or fail on open
            if not entry.is_file():
                raise NotRegularFileError(
                    f"{directory} contains {entry.name}, which is not a regular file"
                )

        logger.debug(f"Found {len(entries)} files in {directory}")
        return entries

    async def fingerprint(
        self, directory: Path, files: Optional[List[Path]] = None
    ) -> DirectoryFingerprint:
        """
        Digest every file of `directory` in parallel.

        Args:
            directory: Directory to fingerprint
            files: Result of an earlier list_files call, listed here if omitted

        Returns:
            DirectoryFingerprint for the directory

        Raises:
            ChecksumError: If any file cannot be opened or read. There is no
                partial fingerprint.
        """
        directory = directory.resolve()
        if files is None:
            files = self.list_files(directory)

        digests: Set[bytes] = set()
        path_to_digest: Dict[Path, bytes] = {}
        lock = threading.Lock()

        def digest_file(path: Path) -> None:
            digest = file_checksum(path, self.compute)
            with lock:
                digests.add(digest)
                path_to_digest[path] = digest

        loop = asyncio.get_running_loop()
        await asyncio.gather(
            *(loop.run_in_executor(self.executor, digest_file, path) for path in files)
        )

        logger.info(
            f"Fingerprinted {len(path_to_digest)} files in {directory} "
            f"({len(digests)} distinct, {self.algorithm.value})"
        )
        return DirectoryFingerprint(
            directory=directory,
            digest_set=frozenset(digests),
            path_to_digest=dict(path_to_digest),
        )
