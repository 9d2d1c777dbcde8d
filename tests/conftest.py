"""Common test fixtures."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator

import pytest
from loguru import logger

from isc.checksum import Algorithm
from isc.sync import DirectoryFingerprinter, SyncService


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop loguru sinks added during a test so they don't outlive captured streams."""
    yield
    logger.remove()


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def destination_dir(tmp_path: Path) -> Path:
    path = tmp_path / "destination"
    path.mkdir()
    return path


@pytest.fixture
def executor() -> Iterator[ThreadPoolExecutor]:
    pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="isc-test")
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def fingerprinter(executor: ThreadPoolExecutor) -> DirectoryFingerprinter:
    return DirectoryFingerprinter(Algorithm.SHA2_256, executor)


@pytest.fixture
def sync_service() -> SyncService:
    return SyncService(thread_count=4, algorithm=Algorithm.SHA2_256)


@pytest.fixture
def config_env(monkeypatch, tmp_path: Path) -> None:
    """Isolate settings from the developer's environment and any .env file."""
    for name in ("ISC_THREAD_COUNT", "ISC_ALGORITHM", "ISC_LOG_LEVEL", "ISC_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
