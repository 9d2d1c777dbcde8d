"""Concurrent execution of planned copies."""

import asyncio
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import aiofiles
import aiofiles.os
from loguru import logger

from isc.checksum import CHUNK_SIZE
from isc.sync.diff import CopyTask


@dataclass(frozen=True)
class CopyOutcome:
    """Result of executing one CopyTask: bytes copied on success, the error otherwise."""

    task: CopyTask
    bytes_copied: Optional[int] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, task: CopyTask, bytes_copied: int) -> "CopyOutcome":
        return cls(task=task, bytes_copied=bytes_copied)

    @classmethod
    def failure(cls, task: CopyTask, error: BaseException) -> "CopyOutcome":
        return cls(task=task, error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    @property
    def source(self) -> Path:
        return self.task.source

    @property
    def destination(self) -> Path:
        return self.task.destination

    def __str__(self) -> str:
        if self.is_ok:
            return f"Copied {self.bytes_copied} bytes from {self.source} to {self.destination}"
        return f"Failed to copy from {self.source} to {self.destination}: {self.error}"


OutcomeCallback = Callable[[CopyOutcome], None]


async def copy_file(source: Path, destination: Path) -> int:
    """
    Copy file contents and permission bits from `source` to `destination`.

    If the copy fails once `destination` has been opened for writing, the
    incomplete destination file is removed before the error is re-raised.

    Returns:
        Number of bytes written
    """
    copied = 0
    destination_opened = False
    try:
        async with aiofiles.open(source, "rb") as src, aiofiles.open(destination, "wb") as dst:
            destination_opened = True
            while chunk := await src.read(CHUNK_SIZE):
                await dst.write(chunk)
                copied += len(chunk)

        await asyncio.to_thread(shutil.copymode, source, destination)
    except Exception:
        if destination_opened:
            await remove_partial(destination)
        raise
    return copied


async def remove_partial(destination: Path) -> None:
    """Delete an incomplete copy, logging instead of masking the original error."""
    try:
        await aiofiles.os.remove(destination)
        logger.debug(f"Removed incomplete copy {destination}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove incomplete copy {destination}: {e}")


class CopyExecutor:
    """
    Runs copy tasks concurrently, at most `concurrency` at a time.
    A failing copy is reported in its outcome and never affects other tasks.
    """

    def __init__(self, concurrency: int):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.concurrency = concurrency

    async def execute(
        self,
        task: CopyTask,
        semaphore: asyncio.Semaphore,
        on_complete: Optional[OutcomeCallback] = None,
    ) -> CopyOutcome:
        """Copy a single file, turning any failure into a failed outcome."""
        async with semaphore:
            try:
                copied = await copy_file(task.source, task.destination)
            except Exception as e:
                logger.warning(f"Failed to copy {task.source} to {task.destination}: {e}")
                outcome = CopyOutcome.failure(task, e)
            else:
                logger.debug(f"Copied {copied} bytes from {task.source} to {task.destination}")
                outcome = CopyOutcome.success(task, copied)

        if on_complete is not None:
            on_complete(outcome)
        return outcome

    async def execute_all(
        self, tasks: Iterable[CopyTask], on_complete: Optional[OutcomeCallback] = None
    ) -> List[CopyOutcome]:
        """
        Copy every task concurrently.

        Args:
            tasks: Tasks in submission order
            on_complete: Called with each outcome as soon as its copy finishes

        Returns:
            Outcomes in submission order, outcome i belonging to task i
        """
        tasks = list(tasks)
        if not tasks:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)
        # gather keeps one slot per awaitable, so completion order does not matter
        outcomes = await asyncio.gather(
            *(self.execute(task, semaphore, on_complete) for task in tasks)
        )

        failed = sum(1 for outcome in outcomes if outcome.is_err)
        logger.info(f"Executed {len(outcomes)} copies, {failed} failed")
        return list(outcomes)
