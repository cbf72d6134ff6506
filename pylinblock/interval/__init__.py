"""
Functions on interval domains.

Modules:
    interval_domain: Intervals split by ordered breakpoints
    functions: Piecewise Chebyshev function objects

Classes:
    IntervalDomain: Interval [a, b] with interior breakpoints
    Function: Piecewise smooth function living on an IntervalDomain
"""

from .interval_domain import IntervalDomain
from .functions import Function

__all__ = [
    'IntervalDomain',
    'Function',
]
