"""isc - copy files whose content is not already present in the destination."""

__version__ = "0.1.0"
