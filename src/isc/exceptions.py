class SyncError(Exception):
    """Base class for errors that abort the whole run"""

    pass


class DirectoryReadError(SyncError):
    """Raised when a directory cannot be listed"""

    pass


class SubdirectoryError(SyncError):
    """Raised when a scanned directory contains a subdirectory"""

    pass


class ChecksumError(SyncError):
    """Raised when a file cannot be opened or read while computing its digest"""

    pass


class WorkerPoolError(SyncError):
    """Raised when the digest worker pool cannot be created"""

    pass


class NotRegularFileError(SyncError):
    """Raised when a scanned directory holds an entry that is not a regular file"""

    pass
