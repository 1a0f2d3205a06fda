"""docrepo - document repositories with atomic update and bulk delete procedures."""

__version__ = "0.1.0"
