"""Main CLI entry point for isc."""  # pragma: no cover

from isc.cli.app import app  # pragma: no cover
from isc.utils import setup_logging  # pragma: no cover

# Register commands
from isc.cli.commands import sync  # pragma: no cover

__all__ = ["app", "sync"]  # pragma: no cover


# Set up logging when module is imported
setup_logging()  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
