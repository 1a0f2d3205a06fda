"""Configuration models."""

from .LogConfig import LogConfig
from .RepositoryConfig import RepositoryConfig
from .RetryConfig import RetryConfig

__all__ = [
    "LogConfig",
    "RepositoryConfig",
    "RetryConfig",
]
