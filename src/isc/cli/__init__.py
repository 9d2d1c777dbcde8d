"""Command line interface for isc."""
