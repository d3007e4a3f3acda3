"""Generate clang compilation databases from ninja build logs."""

__version__ = "0.1.0"
