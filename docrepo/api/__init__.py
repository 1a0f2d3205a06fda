"""API module for docrepo.

Functions defined here serve as the single source of truth for both the
Python API and the CLI commands.
"""

__all__ = []
