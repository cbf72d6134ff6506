"""IntervalDomain: an interval [a, b] split by ordered breakpoints.

Functions and operators in pylinblock live on an IntervalDomain. Interior
breakpoints mark the places where a piecewise function may jump or lose
smoothness.
"""

from typing import List, Sequence, Tuple, Union

import numpy as np

from ..errors import DomainMismatchError


class IntervalDomain:
    def __init__(self, a: float, b: float, *breakpoints: float):
        self._breakpoints = self._check_breakpoints(
            (a,) + tuple(breakpoints) + (b,)
        )

    @classmethod
    def from_breakpoints(cls, breakpoints: Sequence[float]) -> "IntervalDomain":
        """Build a domain from the full ordered list of breakpoints."""
        points = [float(x) for x in breakpoints]
        if len(points) < 2:
            raise ValueError("a domain needs at least two breakpoints")
        return cls(points[0], points[-1], *points[1:-1])

    @classmethod
    def coerce(
        cls, value: Union["IntervalDomain", Sequence[float]]
    ) -> "IntervalDomain":
        """Return ``value`` as an IntervalDomain, converting sequences."""
        if isinstance(value, IntervalDomain):
            return value
        return cls.from_breakpoints(value)

    @staticmethod
    def _check_breakpoints(points) -> Tuple[float, ...]:
        pts = np.asarray(points, dtype=float)
        if not np.all(np.isfinite(pts)):
            raise ValueError("breakpoints must be finite")
        if np.any(np.diff(pts) < 0):
            raise ValueError("breakpoints must be non-decreasing")
        if pts[0] >= pts[-1]:
            raise ValueError("a must be < b")
        # repeated breakpoints carry no information
        return tuple(float(x) for x in np.unique(pts))

    @property
    def breakpoints(self) -> Tuple[float, ...]:
        return self._breakpoints

    @property
    def a(self) -> float:
        return self._breakpoints[0]

    @property
    def b(self) -> float:
        return self._breakpoints[-1]

    @property
    def length(self) -> float:
        return self.b - self.a

    @property
    def interior_breakpoints(self) -> Tuple[float, ...]:
        return self._breakpoints[1:-1]

    @property
    def pieces(self) -> List[Tuple[float, float]]:
        """The subintervals between consecutive breakpoints."""
        bp = self._breakpoints
        return [(bp[i], bp[i + 1]) for i in range(len(bp) - 1)]

    @property
    def n_pieces(self) -> int:
        return len(self._breakpoints) - 1

    def contains(self, x: Union[float, np.ndarray]) -> Union[bool, np.ndarray]:
        return (x >= self.a) & (x <= self.b)

    def uniform_mesh(self, n: int) -> np.ndarray:
        return np.linspace(self.a, self.b, n, endpoint=True)

    def locate(self, x: Union[float, np.ndarray]) -> np.ndarray:
        """Index of the piece containing each point (right-continuous)."""
        idx = np.searchsorted(self._breakpoints, x, side="right") - 1
        return np.clip(idx, 0, self.n_pieces - 1)

    def same_interval(self, other: "IntervalDomain") -> bool:
        """True if both domains cover the same [a, b]."""
        return self.a == other.a and self.b == other.b

    def merge(self, other: "IntervalDomain") -> "IntervalDomain":
        """
        Union of the breakpoints of two domains over the same interval.

        Raises:
            DomainMismatchError: If the end points differ.
        """
        if not self.same_interval(other):
            raise DomainMismatchError(self, other, "merge")
        if self == other:
            return self
        return IntervalDomain.from_breakpoints(
            sorted(set(self._breakpoints) | set(other._breakpoints))
        )

    def with_breakpoints(self, points: Sequence[float]) -> "IntervalDomain":
        """Return a copy with extra interior breakpoints inserted."""
        for p in points:
            if not (self.a < p < self.b):
                raise ValueError(
                    f"Breakpoint {p} must be in interior of {self}"
                )
        return IntervalDomain.from_breakpoints(
            sorted(set(self._breakpoints) | set(float(p) for p in points))
        )

    def _format_name(self) -> str:
        return "[" + ", ".join(f"{x:g}" for x in self._breakpoints) + "]"

    def __repr__(self) -> str:
        return self._format_name()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalDomain):
            return False
        return self._breakpoints == other._breakpoints

    def __hash__(self) -> int:
        return hash(self._breakpoints)
