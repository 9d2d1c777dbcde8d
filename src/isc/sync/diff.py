"""Decide which source files must be copied."""

from dataclasses import dataclass
from pathlib import Path
from typing import List

from loguru import logger

from isc.sync.fingerprint import DirectoryFingerprint


@dataclass(frozen=True)
class CopyTask:
    """A planned copy of one file."""

    source: Path
    destination: Path


def diff(source: DirectoryFingerprint, destination: DirectoryFingerprint) -> List[CopyTask]:
    """
    Plan a copy for every source file whose content is missing from `destination`.

    Content is compared by digest only, so a file already present under another
    name is not copied. An unrelated destination file that has the same name
    as a planned copy is overwritten.

    Args:
        source: Fingerprint of the source directory
        destination: Fingerprint of the destination directory

    Returns:
        Copy tasks ordered by source path
    """
    tasks = [
        CopyTask(source=path, destination=destination.directory / path.name)
        for path, digest in source.path_to_digest.items()
        if digest not in destination.digest_set
    ]
    tasks.sort(key=lambda task: task.source)

    logger.debug(
        f"{len(tasks)} of {len(source)} files in {source.directory} "
        f"are missing from {destination.directory}"
    )
    return tasks
