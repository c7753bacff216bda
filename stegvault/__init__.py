"""Content-addressed image store with embedded text annotations."""

__version__ = "0.1.0"
