"""
Custom exception classes for astroliquid.

Exception Hierarchy:
====================
AstroLiquidError (base) - Base exception for all astroliquid errors
├── ConfigurationError - Invalid configuration parameters
└── DimensionMismatchError - Drive vector does not fit the population

Configuration errors are fatal at construction time: a reservoir is never
partially built. Dimension errors are raised in the hot path, which aborts
the current run rather than skipping a tick.
"""

from __future__ import annotations

# =============================================================================
# Exception Hierarchy
# =============================================================================


class AstroLiquidError(Exception):
    """Base exception for all astroliquid-specific errors.

    All custom exceptions in astroliquid inherit from this class, enabling
    code to catch simulation errors specifically.
    """


class ConfigurationError(AstroLiquidError):
    """Invalid configuration parameters.

    Raised when configuration values are out of valid range, when the grid
    type is not recognised, or when the geometry cannot host the requested
    number of neurons.
    """


class DimensionMismatchError(AstroLiquidError, ValueError):
    """Input tensor does not match the population it is applied to.

    Drive vectors shorter than the population are zero-padded; longer ones
    raise this error.
    """
