"""
Base class for realizations of operator expressions.

A realization gives concrete meaning to the primitive operations an operator
expression is built from. Replaying an expression means calling its build
procedure (its "stack") with a freshly seeded realization; the stack calls
back into the primitives below and returns a realized object of the same
class, whose payload is the usable artifact.

Every primitive returns a new realization and never modifies ``self`` or its
operands. The public methods validate their arguments and delegate to the
abstract ``_``-prefixed hooks that concrete realizations implement.
"""

from __future__ import annotations

import logging
import numbers
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Union, TYPE_CHECKING

from ..errors import DomainMismatchError, UnrealizedAccessError
from ..interval.interval_domain import IntervalDomain
from ..utils import check_order, direction_to_side

if TYPE_CHECKING:
    from ..interval.functions import Function
    from .expression import OperatorExpression

logger = logging.getLogger(__name__)


class Realization(ABC):
    """
    A concrete interpretation of the primitive operator vocabulary.

    Instances come in two flavours sharing one class: a *seed*, holding only
    a domain, which is handed to an expression's stack; and a *result*,
    holding a payload produced by one of the primitives.
    """

    def __init__(
        self,
        payload: Any = None,
        /,
        *,
        domain: Union[IntervalDomain, Sequence[float], None] = None,
    ) -> None:
        """
        Args:
            payload: The realization specific value, or None for a seed.
            domain: The domain of the functions operated upon.
        """
        self._payload = payload
        self._domain: Optional[IntervalDomain] = (
            IntervalDomain.coerce(domain) if domain is not None else None
        )

    @classmethod
    def seed(
        cls, domain: Union[IntervalDomain, Sequence[float], None]
    ) -> "Realization":
        """A payload-free instance used to start a replay."""
        return cls(domain=domain)

    @classmethod
    def from_expression(cls, expression: "OperatorExpression") -> "Realization":
        """
        Realize an operator expression by replaying its stack.

        Raises:
            UnrealizedAccessError: If the expression is a domain-only
                placeholder.
        """
        if expression.stack is None:
            raise UnrealizedAccessError(
                "Cannot realize an operator placeholder without a stack "
                f"(domain {expression.domain})"
            )
        logger.debug(
            "Replaying operator on %s against %s",
            expression.domain, cls.__name__,
        )
        result = expression.stack(cls.seed(expression.domain))
        if not isinstance(result, cls):
            raise TypeError(
                f"Replay against {cls.__name__} produced "
                f"{type(result).__name__}"
            )
        return result

    @property
    def domain(self) -> Optional[IntervalDomain]:
        """Domain inherited from the seeding context."""
        return self._domain

    @property
    def is_realized(self) -> bool:
        return self._payload is not None

    @property
    def payload(self) -> Any:
        """
        The realized value.

        Raises:
            UnrealizedAccessError: If this is a seed.
        """
        if self._payload is None:
            raise UnrealizedAccessError(
                f"{type(self).__name__} on {self._domain} has no payload; "
                "it is a replay seed"
            )
        return self._payload

    def _result(self, payload: Any) -> "Realization":
        # results inherit the seeding domain
        return self.__class__(payload, domain=self._domain)

    def _check_operand(self, A: Any, operation: str) -> "Realization":
        if not isinstance(A, Realization):
            raise TypeError(
                f"Cannot {operation} {type(A).__name__} with a "
                f"{type(self).__name__}"
            )
        if not isinstance(A, type(self)) and not isinstance(self, type(A)):
            raise TypeError(
                f"Cannot {operation} a {type(A).__name__} with a "
                f"{type(self).__name__}"
            )
        return A

    def _check_domains(self, A: "Realization", B: "Realization",
                       operation: str) -> None:
        if A.domain is None or B.domain is None:
            return
        if not A.domain.same_interval(B.domain):
            raise DomainMismatchError(A.domain, B.domain, operation)

    # ------------------------------------------------------------------
    # Primitives with no operands
    # ------------------------------------------------------------------
    def eye(self) -> "Realization":
        """The identity operator."""
        return self._eye()

    def diff(self, order: int = 1) -> "Realization":
        """The order-th derivative; order 0 is the identity."""
        order = check_order(order)
        if order == 0:
            return self._eye()
        return self._diff(order)

    def cumsum(self, order: int = 1) -> "Realization":
        """The order-th indefinite integral; order 0 is the identity."""
        order = check_order(order)
        if order == 0:
            return self._eye()
        return self._cumsum(order)

    def feval(self, location: float, direction: float = 0) -> "Realization":
        """
        Evaluation at location.

        Args:
            location: Evaluation point.
            direction: Negative for the left limit, positive for the right
                limit, zero for the two-sided value.
        """
        return self._feval(float(location), direction_to_side(direction))

    def inner(self, f: "Function", conjugate: bool = True) -> "Realization":
        """The functional z -> integral of conj(f) * z."""
        return self._inner(f, conjugate)

    def mult(self, f: "Function") -> "Realization":
        """Pointwise multiplication by f."""
        return self._mult(f)

    def sum(self) -> "Realization":
        """The definite integral over the domain."""
        return self._sum()

    def zero(self) -> "Realization":
        """The zero functional, returning the scalar 0."""
        return self._zero()

    def zeros(self) -> "Realization":
        """The zero operator, returning the zero function."""
        return self._zeros()

    # ------------------------------------------------------------------
    # Combining primitives
    # ------------------------------------------------------------------
    def mtimes(self, A, B) -> "Realization":
        """
        Composition A * B, applying the RIGHT operand first: z -> A(B(z)).

        The order is significant and cannot be checked at runtime. Either
        operand may be a scalar, in which case the other one is scaled.

        Raises:
            DomainMismatchError: If both operands carry different domains.
        """
        a_scalar = isinstance(A, numbers.Number)
        b_scalar = isinstance(B, numbers.Number)
        if a_scalar and b_scalar:
            raise TypeError("mtimes needs at least one realization operand")
        if a_scalar:
            return self._scale(A, self._check_operand(B, "scale"))
        if b_scalar:
            return self._scale(B, self._check_operand(A, "scale"))
        self._check_operand(A, "compose")
        self._check_operand(B, "compose")
        self._check_domains(A, B, "compose")
        return self._compose(A, B)

    def plus(self, A: "Realization", B: "Realization") -> "Realization":
        """
        Sum of operator actions: z -> A(z) + B(z).

        Raises:
            DomainMismatchError: If both operands carry different domains.
        """
        self._check_operand(A, "add")
        self._check_operand(B, "add")
        self._check_domains(A, B, "add")
        return self._add(A, B)

    def uminus(self, A: "Realization") -> "Realization":
        """Negated operator: z -> -A(z)."""
        return self._negate(self._check_operand(A, "negate"))

    def uplus(self, A: "Realization") -> "Realization":
        """Unary plus. Returns A unchanged."""
        return A

    # ------------------------------------------------------------------
    # Hooks for concrete realizations
    # ------------------------------------------------------------------
    @abstractmethod
    def _eye(self) -> "Realization":
        pass

    @abstractmethod
    def _diff(self, order: int) -> "Realization":
        pass

    @abstractmethod
    def _cumsum(self, order: int) -> "Realization":
        pass

    @abstractmethod
    def _feval(self, location: float, side: int) -> "Realization":
        pass

    @abstractmethod
    def _inner(self, f: "Function", conjugate: bool) -> "Realization":
        pass

    @abstractmethod
    def _mult(self, f: "Function") -> "Realization":
        pass

    @abstractmethod
    def _sum(self) -> "Realization":
        pass

    @abstractmethod
    def _zero(self) -> "Realization":
        pass

    @abstractmethod
    def _zeros(self) -> "Realization":
        pass

    @abstractmethod
    def _compose(self, A: "Realization", B: "Realization") -> "Realization":
        pass

    @abstractmethod
    def _scale(self, c: numbers.Number, A: "Realization") -> "Realization":
        pass

    @abstractmethod
    def _add(self, A: "Realization", B: "Realization") -> "Realization":
        pass

    @abstractmethod
    def _negate(self, A: "Realization") -> "Realization":
        pass

    def __repr__(self) -> str:
        state = "realized" if self.is_realized else "seed"
        return f"{type(self).__name__}({state}, domain={self._domain})"
