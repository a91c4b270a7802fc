"""filepanel: read-through report cache for a small file hosting backend."""

from filepanel.version import __version__

__all__ = ["__version__"]
