"""
Piecewise Chebyshev functions on interval domains.

This module provides the continuous function objects that operators act on.
A Function stores, for every piece of its IntervalDomain, the coefficients of
a Chebyshev series on that piece. Functions can be built from a vectorized
callable (resolved adaptively to a relative tolerance) or directly from
coefficients, and support the calculus needed by the operator algebra:
differentiation, indefinite and definite integration, inner products,
pointwise arithmetic and one-sided evaluation at breakpoints.
"""

import logging
import numbers
import warnings
from typing import Callable, List, Optional, Sequence, Union

import numpy as np
from numpy.polynomial import chebyshev as cheb
from scipy.fft import dct

from ..configs import FunctionConfig
from ..errors import DomainMismatchError
from ..utils import check_order
from .interval_domain import IntervalDomain

logger = logging.getLogger(__name__)


def chebpts(n: int) -> np.ndarray:
    """Chebyshev points of the first kind on [-1, 1], in descending order."""
    k = np.arange(n)
    return np.cos(np.pi * (2 * k + 1) / (2 * n))


def vals2coeffs(values: np.ndarray) -> np.ndarray:
    """
    Chebyshev coefficients of the interpolant through values at chebpts(n).

    Uses the DCT-II: with unnormalized transform y, c_k = y_k / n for k > 0
    and c_0 = y_0 / (2 n).
    """
    values = np.asarray(values)
    if np.iscomplexobj(values):
        return vals2coeffs(values.real) + 1j * vals2coeffs(values.imag)
    n = values.shape[0]
    coeffs = dct(values.astype(float), type=2) / n
    coeffs[0] /= 2
    return coeffs


def _chop(coeffs: np.ndarray, cutoff: float) -> np.ndarray:
    """Drop trailing coefficients no larger than cutoff, keeping at least one."""
    big = np.flatnonzero(np.abs(coeffs) > cutoff)
    if big.size == 0:
        return coeffs[:1] * 0
    return coeffs[: big[-1] + 1].copy()


def _to_unit(x, a: float, b: float):
    return (2.0 * x - a - b) / (b - a)


def _from_unit(t, a: float, b: float):
    return 0.5 * (b - a) * t + 0.5 * (a + b)


class Function:
    """
    A piecewise smooth function on an IntervalDomain.

    On each piece [x_i, x_{i+1}] of the domain the function is a Chebyshev
    series. Jumps are allowed at interior breakpoints; evaluation there can
    ask for the left limit, the right limit, or the two-sided value (the
    average of both limits).
    """

    def __init__(self,
                 domain: Union[IntervalDomain, Sequence[float], None] = None,
                 *,
                 evaluate_callable: Optional[Callable] = None,
                 coefficients: Optional[Sequence[np.ndarray]] = None,
                 name: Optional[str] = None,
                 config: Optional[FunctionConfig] = None):
        """
        Initialize a piecewise Chebyshev function.

        Args:
            domain: IntervalDomain or breakpoint sequence. Defaults to
                ``config.domain``.
            evaluate_callable: Vectorized callable sampled on every piece
            coefficients: One array of Chebyshev coefficients per piece
            name: Optional function name
            config: Construction settings (tolerance, point limits)

        Note:
            Exactly one of coefficients or evaluate_callable must be provided.
        """
        if (coefficients is None and evaluate_callable is None) or \
           (coefficients is not None and evaluate_callable is not None):
            raise ValueError(
                "Exactly one of 'coefficients' or 'evaluate_callable' "
                "must be provided."
            )

        self.config = config if config is not None else FunctionConfig()
        if domain is None:
            domain = self.config.domain
        self.domain = IntervalDomain.coerce(domain)
        self.name = name

        if coefficients is not None:
            if len(coefficients) != self.domain.n_pieces:
                raise ValueError(
                    f"Got {len(coefficients)} coefficient arrays for "
                    f"{self.domain.n_pieces} pieces."
                )
            self.coefficients = [
                np.atleast_1d(np.array(c)) for c in coefficients
            ]
        else:
            self.coefficients = [
                self._resolve(evaluate_callable, a, b)
                for a, b in self.domain.pieces
            ]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _resolve(self, func: Callable, a: float, b: float) -> np.ndarray:
        """Sample func on [a, b] on growing grids until it is resolved."""
        cfg = self.config
        n = cfg.min_points
        while True:
            x = _from_unit(chebpts(n), a, b)
            values = np.broadcast_to(np.asarray(func(x)), x.shape)
            coeffs = vals2coeffs(values)
            scale = max(np.max(np.abs(values)), np.max(np.abs(coeffs)))
            if scale == 0:
                return np.zeros(1, dtype=coeffs.dtype)
            tail = np.max(np.abs(coeffs[-max(2, n // 8):]))
            if tail <= cfg.tol * scale:
                coeffs = _chop(coeffs, cfg.tol * scale)
                logger.debug(
                    "Resolved piece [%g, %g] with %d of %d coefficients",
                    a, b, coeffs.size, n,
                )
                return coeffs
            if n >= cfg.max_points:
                warnings.warn(
                    f"Function not resolved on [{a}, {b}] with "
                    f"{cfg.max_points} points; result may be inaccurate.",
                    UserWarning
                )
                return coeffs
            n = min(max(2 * n - 1, n + 1), cfg.max_points)

    @classmethod
    def constant(cls, value,
                 domain: Union[IntervalDomain, Sequence[float], None] = None,
                 *, config: Optional[FunctionConfig] = None) -> "Function":
        """The constant function ``value`` on domain."""
        cfg = config if config is not None else FunctionConfig()
        dom = IntervalDomain.coerce(domain if domain is not None
                                    else cfg.domain)
        return cls(dom, coefficients=[np.array([value])] * dom.n_pieces,
                   config=cfg)

    @classmethod
    def zeros(cls,
              domain: Union[IntervalDomain, Sequence[float], None] = None,
              *, config: Optional[FunctionConfig] = None) -> "Function":
        """The identically zero function on domain."""
        return cls.constant(0.0, domain, config=config)

    def _new(self, coefficients, domain=None, name=None) -> "Function":
        return self.__class__(
            domain if domain is not None else self.domain,
            coefficients=coefficients,
            name=name,
            config=self.config,
        )

    def copy(self) -> "Function":
        return self._new([c.copy() for c in self.coefficients],
                         name=self.name)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    @property
    def is_complex(self) -> bool:
        return any(np.iscomplexobj(c) for c in self.coefficients)

    def _eval_pieces(self, x: np.ndarray, idx: np.ndarray) -> np.ndarray:
        dtype = complex if self.is_complex else float
        out = np.zeros(x.shape, dtype=dtype)
        for i, (a, b) in enumerate(self.domain.pieces):
            mask = idx == i
            if np.any(mask):
                out[mask] = cheb.chebval(_to_unit(x[mask], a, b),
                                         self.coefficients[i])
        return out

    def evaluate(self, x: Union[float, np.ndarray], side: int = 0,
                 check_domain: bool = True) -> Union[float, np.ndarray]:
        """
        Point evaluation f(x).

        Args:
            x: Point(s) at which to evaluate
            side: Negative for the left limit, positive for the right limit,
                zero for the two-sided value. Only matters at interior
                breakpoints.
            check_domain: Whether to check domain membership

        Returns:
            Function value(s)
        """
        x_array = np.asarray(x, dtype=float)
        is_scalar = x_array.ndim == 0
        x_array = np.atleast_1d(x_array)

        if check_domain and not np.all(self.domain.contains(x_array)):
            raise ValueError(f"Some points not in domain {self.domain}")

        bp = np.asarray(self.domain.breakpoints)
        last = self.domain.n_pieces - 1
        right_idx = self.domain.locate(x_array)
        left_idx = np.clip(np.searchsorted(bp, x_array, side="left") - 1,
                           0, last)

        if side < 0:
            result = self._eval_pieces(x_array, left_idx)
        elif side > 0:
            result = self._eval_pieces(x_array, right_idx)
        else:
            result = self._eval_pieces(x_array, right_idx)
            at_break = np.isin(x_array, bp[1:-1])
            if np.any(at_break):
                left = self._eval_pieces(x_array[at_break],
                                         left_idx[at_break])
                result[at_break] = 0.5 * (result[at_break] + left)

        return result[0] if is_scalar else result

    def __call__(self, x: Union[float, np.ndarray],
                 side: int = 0) -> Union[float, np.ndarray]:
        """Allow f(x) and f(x, side) syntax."""
        return self.evaluate(x, side=side)

    # ------------------------------------------------------------------
    # Calculus
    # ------------------------------------------------------------------
    def diff(self, order: int = 1) -> "Function":
        """The order-th derivative, computed piece by piece."""
        order = check_order(order)
        if order == 0:
            return self
        coeffs = [
            cheb.chebder(c, m=order, scl=2.0 / (b - a))
            for c, (a, b) in zip(self.coefficients, self.domain.pieces)
        ]
        return self._new(coeffs)

    def cumsum(self, order: int = 1) -> "Function":
        """
        The order-th indefinite integral.

        Each antiderivative vanishes at the left end point of the domain and
        is continuous across interior breakpoints.
        """
        order = check_order(order)
        if order == 0:
            return self
        coeffs = self.coefficients
        for _ in range(order):
            integrated = []
            offset = 0.0
            for c, (a, b) in zip(coeffs, self.domain.pieces):
                ci = cheb.chebint(c, m=1, lbnd=-1, scl=0.5 * (b - a))
                ci[0] += offset
                offset = cheb.chebval(1.0, ci)
                integrated.append(ci)
            coeffs = integrated
        return self._new(coeffs)

    def sum(self) -> Union[float, complex]:
        """Definite integral over the whole domain."""
        total = 0.0
        for c, (a, b) in zip(self.coefficients, self.domain.pieces):
            k = np.arange(c.size)
            weights = np.zeros(c.size)
            even = k % 2 == 0
            weights[even] = 2.0 / (1.0 - k[even] ** 2)
            total = total + 0.5 * (b - a) * np.dot(weights, c)
        return complex(total) if self.is_complex else float(np.real(total))

    def inner(self, other: "Function",
              conjugate: bool = True) -> Union[float, complex]:
        """
        Inner product with other: the integral of conj(self) * other.

        Args:
            other: Function on the same interval
            conjugate: Whether to conjugate self first. Irrelevant for
                real-valued functions.
        """
        left = self.conj() if conjugate else self
        return (left * other).sum()

    def norm(self) -> float:
        """The L2 norm."""
        return float(np.sqrt(max(np.real(self.inner(self)), 0.0)))

    def conj(self) -> "Function":
        if not self.is_complex:
            return self
        return self._new([np.conj(c) for c in self.coefficients],
                         name=self.name)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _coefficients_on(self, domain: IntervalDomain) -> List[np.ndarray]:
        """Coefficients of self on each piece of a refinement of its domain."""
        if domain == self.domain:
            return self.coefficients
        out = []
        pieces = self.domain.pieces
        for a, b in domain.pieces:
            i = int(self.domain.locate(0.5 * (a + b)))
            c = self.coefficients[i]
            pa, pb = pieces[i]
            x = _from_unit(chebpts(c.size), a, b)
            out.append(vals2coeffs(cheb.chebval(_to_unit(x, pa, pb), c)))
        return out

    def _binary_op(self, other, piece_op, scalar_op, op_name):
        """
        General helper for binary operations (add, mul).

        Args:
            other: Function or scalar
            piece_op: Combines two coefficient arrays on a common piece
            scalar_op: Combines a coefficient array with a scalar
            op_name: String for error messages
        """
        if isinstance(other, Function):
            if not self.domain.same_interval(other.domain):
                raise DomainMismatchError(self.domain, other.domain, op_name)
            domain = self.domain.merge(other.domain)
            coeffs = [
                piece_op(c1, c2) for c1, c2 in zip(
                    self._coefficients_on(domain),
                    other._coefficients_on(domain),
                )
            ]
            return self._new(coeffs, domain=domain)
        elif isinstance(other, numbers.Number):
            return self._new([scalar_op(c, other) for c in self.coefficients])
        else:
            return NotImplemented

    def __add__(self, other):
        return self._binary_op(other, _add_coeffs, _add_scalar, 'add')

    def __radd__(self, other):
        """Right addition to support scalar + Function."""
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, (Function, numbers.Number)):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        return (-self) + other

    def __neg__(self):
        return self._new([-c for c in self.coefficients], name=self.name)

    def __mul__(self, other):
        return self._binary_op(
            other, _multiply_coeffs, lambda c, s: c * s, 'multiply'
        )

    def __rmul__(self, other):
        """Right multiplication (for scalar * function)."""
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, numbers.Number):
            return self * (1.0 / other)
        return NotImplemented

    def plot(self, n_points: int = 1000, figsize=(10, 6), **kwargs):
        """
        Plot the function, drawing each piece separately so jumps show.

        Args:
            n_points: Number of plot points
            figsize: Figure size as (width, height)
            **kwargs: Additional plotting arguments
        """
        import matplotlib.pyplot as plt

        plt.figure(figsize=figsize)
        kwargs.setdefault('color', 'C0')
        for i, (a, b) in enumerate(self.domain.pieces):
            share = max(2, int(n_points * (b - a) / self.domain.length))
            x = np.linspace(a, b, share)
            y = self._eval_pieces(x, np.full(x.shape, i))
            label = (self.name or "function") if i == 0 else None
            plt.plot(x, np.real(y), label=label, **kwargs)
        plt.xlabel('x')
        plt.ylabel('f(x)')
        plt.title(f'Function on {self.domain}')
        if self.name:
            plt.legend()
        plt.grid(True, alpha=0.3)
        plt.tight_layout()
        return plt.gca()

    def __repr__(self) -> str:
        return f"Function(domain={self.domain}, name={self.name})"


def _add_coeffs(c1: np.ndarray, c2: np.ndarray) -> np.ndarray:
    out = np.zeros(max(c1.size, c2.size), dtype=np.result_type(c1, c2))
    out[:c1.size] += c1
    out[:c2.size] += c2
    return out


def _add_scalar(c: np.ndarray, value) -> np.ndarray:
    out = c.astype(np.result_type(c, value), copy=True)
    out[0] += value
    return out


def _multiply_coeffs(c1: np.ndarray, c2: np.ndarray) -> np.ndarray:
    # the product of degrees n1-1 and n2-1 is interpolated exactly
    t = chebpts(c1.size + c2.size - 1)
    return vals2coeffs(cheb.chebval(t, c1) * cheb.chebval(t, c2))
