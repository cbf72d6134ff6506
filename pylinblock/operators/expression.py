"""
Deferred, realization-agnostic linear operator expressions.

An OperatorExpression records how an operator is assembled from primitives
without committing to what those primitives mean. It holds a domain and a
*stack*: a function that takes a seed realization and returns a realized
object by calling the seed's primitive methods in the same pattern in which
the operator was assembled. The same expression can therefore be replayed
against any Realization subclass.

Linear operators form an algebra in the usual way and overloads for the
relevant operators are provided. In all cases these operations are lazy: they
only compose stacks.

    A + B, A - B, -A, +A     sums and signs
    A @ B, A * B             composition, B applied first
    c * A, A * c, A / c      scalar multiples
    A ** n                   repeated composition
"""

from __future__ import annotations

import numbers
from typing import Callable, Optional, Sequence, Type, Union, TYPE_CHECKING

from ..configs import FunctionConfig
from ..errors import DomainMismatchError, UnrealizedAccessError
from ..interval.interval_domain import IntervalDomain
from ..utils import check_order, direction_to_side

if TYPE_CHECKING:
    from ..interval.functions import Function
    from .realization import Realization

Stack = Callable[["Realization"], "Realization"]
DomainLike = Union[IntervalDomain, Sequence[float], None]


def _resolve_domain(domain: DomainLike,
                    config: Optional[FunctionConfig]) -> IntervalDomain:
    if domain is None:
        domain = (config if config is not None else FunctionConfig()).domain
    return IntervalDomain.coerce(domain)


class OperatorExpression:
    """
    A linear operator or functional on functions over an interval, stored as
    a replayable build procedure.
    """

    def __init__(
        self,
        domain: DomainLike = None,
        stack: Optional[Stack] = None,
        /,
        *,
        config: Optional[FunctionConfig] = None,
    ) -> None:
        """
        Args:
            domain: Domain of the functions operated upon. Defaults to
                ``config.domain``.
            stack: Build procedure taking a seed realization. Omit it to
                create a domain-only placeholder.
            config: Supplies the default domain.
        """
        self._domain: IntervalDomain = _resolve_domain(domain, config)
        self._stack: Optional[Stack] = stack

    @property
    def domain(self) -> IntervalDomain:
        return self._domain

    @property
    def stack(self) -> Optional[Stack]:
        """The build procedure, or None for a placeholder."""
        return self._stack

    @property
    def is_placeholder(self) -> bool:
        return self._stack is None

    def _require_stack(self) -> Stack:
        if self._stack is None:
            raise UnrealizedAccessError(
                f"Operator placeholder on {self._domain} has no stack"
            )
        return self._stack

    # ------------------------------------------------------------------
    # Primitive factories
    # ------------------------------------------------------------------
    @classmethod
    def eye(cls, domain: DomainLike = None, *,
            config: Optional[FunctionConfig] = None) -> "OperatorExpression":
        """Identity operator."""
        return cls(domain, lambda z: z.eye(), config=config)

    @classmethod
    def zeros(cls, domain: DomainLike = None, *,
              config: Optional[FunctionConfig] = None) -> "OperatorExpression":
        """Zero operator, mapping every function to the zero function."""
        return cls(domain, lambda z: z.zeros(), config=config)

    @classmethod
    def diff(cls, order: int = 1, domain: DomainLike = None, *,
             config: Optional[FunctionConfig] = None) -> "OperatorExpression":
        """Differentiation operator of the given order."""
        order = check_order(order)
        return cls(domain, lambda z: z.diff(order), config=config)

    @classmethod
    def cumsum(cls, order: int = 1, domain: DomainLike = None, *,
               config: Optional[FunctionConfig] = None
               ) -> "OperatorExpression":
        """Indefinite integration operator of the given order."""
        order = check_order(order)
        return cls(domain, lambda z: z.cumsum(order), config=config)

    @classmethod
    def mult(cls, f: "Function") -> "OperatorExpression":
        """Multiplication by f, on the domain of f."""
        return cls(f.domain, lambda z: z.mult(f))

    @classmethod
    def feval(cls, location: float, direction: float = 0,
              domain: DomainLike = None, *,
              config: Optional[FunctionConfig] = None
              ) -> "OperatorExpression":
        """
        Evaluation functional at location.

        Args:
            location: Point in the domain.
            direction: Negative selects the left limit, positive the right
                limit, zero the two-sided value.
        """
        domain = _resolve_domain(domain, config)
        location = float(location)
        if not domain.contains(location):
            raise ValueError(
                f"Evaluation point {location} not in domain {domain}"
            )
        side = direction_to_side(direction)
        return cls(domain, lambda z: z.feval(location, side))

    @classmethod
    def inner(cls, f: "Function",
              conjugate: bool = True) -> "OperatorExpression":
        """Inner product functional z -> integral of conj(f) * z."""
        return cls(f.domain, lambda z: z.inner(f, conjugate))

    @classmethod
    def sum(cls, domain: DomainLike = None, *,
            config: Optional[FunctionConfig] = None) -> "OperatorExpression":
        """Definite integral functional."""
        return cls(domain, lambda z: z.sum(), config=config)

    @classmethod
    def zero(cls, domain: DomainLike = None, *,
             config: Optional[FunctionConfig] = None) -> "OperatorExpression":
        """Zero functional, mapping every function to 0."""
        return cls(domain, lambda z: z.zero(), config=config)

    # ------------------------------------------------------------------
    # Realization
    # ------------------------------------------------------------------
    def realize(
        self, realization: Optional[Type["Realization"]] = None
    ) -> "Realization":
        """
        Replay this expression against a realization class.

        Args:
            realization: Realization subclass, FunctionRealization by default.
        """
        if realization is None:
            from .function_realization import FunctionRealization
            realization = FunctionRealization
        return realization.from_expression(self)

    def __call__(self, u: "Function"):
        """Apply the operator to a Function."""
        return self.realize()(u)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------
    def _common_domain(self, other: "OperatorExpression",
                       operation: str) -> IntervalDomain:
        if not self.domain.same_interval(other.domain):
            raise DomainMismatchError(self.domain, other.domain, operation)
        return self.domain.merge(other.domain)

    def _scaled(self, c: numbers.Number) -> "OperatorExpression":
        a = self._require_stack()
        return OperatorExpression(self.domain, lambda z: z.mtimes(c, a(z)))

    def __add__(self, other):
        """Sum of two operators, or of an operator and c * identity."""
        if isinstance(other, numbers.Number):
            other = OperatorExpression.eye(self.domain)._scaled(other)
        if not isinstance(other, OperatorExpression):
            return NotImplemented
        domain = self._common_domain(other, "add")
        a, b = self._require_stack(), other._require_stack()
        return OperatorExpression(domain, lambda z: z.plus(a(z), b(z)))

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        a = self._require_stack()
        return OperatorExpression(self.domain, lambda z: z.uminus(a(z)))

    def __pos__(self):
        a = self._require_stack()
        return OperatorExpression(self.domain, lambda z: z.uplus(a(z)))

    def __sub__(self, other):
        """Difference of two operators."""
        if isinstance(other, (OperatorExpression, numbers.Number)):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        return (-self) + other

    def __matmul__(self, other):
        """Composition of two operators, other applied first."""
        if not isinstance(other, OperatorExpression):
            return NotImplemented
        domain = self._common_domain(other, "compose")
        a, b = self._require_stack(), other._require_stack()
        return OperatorExpression(domain, lambda z: z.mtimes(a(z), b(z)))

    def __mul__(self, other):
        """Multiply operator by a scalar, or compose with an operator."""
        if isinstance(other, numbers.Number):
            return self._scaled(other)
        return self.__matmul__(other)

    def __rmul__(self, other):
        """Multiply operator by a scalar."""
        if isinstance(other, numbers.Number):
            return self._scaled(other)
        return NotImplemented

    def __truediv__(self, other):
        """Divide operator by a scalar."""
        if isinstance(other, numbers.Number):
            return self._scaled(1.0 / other)
        return NotImplemented

    def __pow__(self, n):
        """Repeated composition; A ** 0 is the identity."""
        n = check_order(n)
        if n == 0:
            return OperatorExpression.eye(self.domain)
        result = self
        for _ in range(n - 1):
            result = result @ self
        return result

    def __str__(self) -> str:
        if self._stack is None:
            return "<placeholder>"
        from .description import DescriptionRealization
        return DescriptionRealization.from_expression(self).payload

    def __repr__(self) -> str:
        return f"OperatorExpression({self}, domain={self.domain})"
