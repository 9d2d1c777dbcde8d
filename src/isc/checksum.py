"""Content digests for files, computed by streaming fixed-size chunks."""

import hashlib
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable

from loguru import logger

from isc.exceptions import ChecksumError

CHUNK_SIZE = 65536  # 2^16

ChecksumFn = Callable[[BinaryIO], bytes]


class Algorithm(str, Enum):
    """Digest algorithms selectable from the command line."""

    SHA2_256 = "sha2-256"
    SHA2_512 = "sha2-512"
    SHA3_256 = "sha3-256"
    SHA3_512 = "sha3-512"

    @property
    def digest_size(self) -> int:
        """Native output size of the algorithm in bytes."""
        return _DIGEST_SIZES[self]

    def new(self):
        return _CONSTRUCTORS[self]()


_CONSTRUCTORS = {
    Algorithm.SHA2_256: hashlib.sha256,
    Algorithm.SHA2_512: hashlib.sha512,
    Algorithm.SHA3_256: hashlib.sha3_256,
    Algorithm.SHA3_512: hashlib.sha3_512,
}

_DIGEST_SIZES = {
    Algorithm.SHA2_256: 32,
    Algorithm.SHA2_512: 64,
    Algorithm.SHA3_256: 32,
    Algorithm.SHA3_512: 64,
}


def checksum_impl(algorithm: Algorithm) -> ChecksumFn:
    """
    Return the function that digests an open binary file with `algorithm`.

    The choice is made once here so per-file work never branches on the
    algorithm.

    Args:
        algorithm: Digest algorithm to use

    Returns:
        Function taking an open binary file and returning its raw digest
    """
    expected_size = algorithm.digest_size

    def compute(file: BinaryIO) -> bytes:
        hasher = algorithm.new()
        try:
            while chunk := file.read(CHUNK_SIZE):
                hasher.update(chunk)
        except OSError as e:
            name = getattr(file, "name", "<stream>")
            logger.error(f"Failed to read {name}: {e}")
            raise ChecksumError(f"Failed to read {name}: {e}") from e

        digest = hasher.digest()
        assert len(digest) == expected_size, f"{algorithm.value} digest has wrong width"
        return digest

    return compute


def file_checksum(path: Path, compute: ChecksumFn) -> bytes:
    """
    Open `path`, digest it with `compute` and close it again.

    Raises:
        ChecksumError: If the file cannot be opened or read
    """
    try:
        with open(path, "rb") as f:
            return compute(f)
    except ChecksumError:
        raise
    except OSError as e:
        logger.error(f"Failed to open {path}: {e}")
        raise ChecksumError(f"Failed to open {path}: {e}") from e
