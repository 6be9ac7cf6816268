"""Configuration re-export for the async API."""

from .._common.config import (
    IterationMode,
    WalkConfig,
    ConfigurationError,
)

__all__ = [
    'IterationMode',
    'WalkConfig',
    'ConfigurationError',
]
