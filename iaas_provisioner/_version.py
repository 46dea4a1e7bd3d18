"""Package version."""

__version__ = "0.4.0"
VERSION = __version__
