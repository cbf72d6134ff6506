"""
Configuration objects for function construction and operator defaults.

This module replaces a process-wide preference object: every constructor that
needs a default domain or a construction tolerance accepts an explicit
``config`` argument, and falls back to a fresh ``FunctionConfig()`` otherwise.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class FunctionConfig:
    """
    Configuration for building piecewise Chebyshev functions.

    Attributes:
        domain: Default breakpoints used when no domain is supplied
        tol: Relative size below which trailing Chebyshev coefficients are
            considered negligible
        min_points: Number of sample points tried first on every piece
        max_points: Largest number of sample points tried before giving up

    Example:
        >>> # Use defaults
        >>> config = FunctionConfig()
        >>>
        >>> # Work on [0, 1] by default
        >>> config = FunctionConfig(domain=(0.0, 1.0))
        >>>
        >>> # Modify after creation
        >>> config.max_points = 1025
    """

    domain: Tuple[float, ...] = (-1.0, 1.0)
    tol: float = 1e-14
    min_points: int = 17
    max_points: int = 4097

    def __post_init__(self):
        if self.min_points < 1:
            raise ValueError("min_points must be positive")
        if self.max_points < self.min_points:
            raise ValueError("max_points must be >= min_points")
        if self.tol <= 0:
            raise ValueError("tol must be positive")

    def copy(self, **overrides) -> 'FunctionConfig':
        """
        Create a copy with optional parameter overrides.

        Example:
            >>> base = FunctionConfig()
            >>> unit = base.copy(domain=(0.0, 1.0))
        """
        import copy
        new_config = copy.copy(self)
        for key, value in overrides.items():
            if hasattr(new_config, key):
                setattr(new_config, key, value)
            else:
                raise ValueError(f"Unknown parameter: {key}")
        return new_config

    @classmethod
    def high_accuracy(cls) -> 'FunctionConfig':
        """Preset resolving functions down to machine precision."""
        return cls(tol=2e-16, max_points=16385)

    @classmethod
    def fast(cls) -> 'FunctionConfig':
        """Preset for quick, lower-accuracy construction."""
        return cls(tol=1e-10, min_points=9, max_points=513)
