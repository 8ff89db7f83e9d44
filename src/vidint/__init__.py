"""vidint - video intelligence annotation samples."""

__version__ = "0.1.0"
