"""Configuration re-export for the synchronous API.

This module re-exports configuration components from the _common
package so users never import _common directly.
"""

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
