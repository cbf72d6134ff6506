"""Realization of operator expressions as callables acting on Functions."""

from __future__ import annotations

import numbers
from typing import Callable

from ..interval.functions import Function
from .realization import Realization


class FunctionRealization(Realization):
    """
    Converts an operator expression into a callable suitable for application
    to a Function.

    The payload is a unary callable. For operators it maps a Function to a
    Function; for functionals (feval, inner, sum, zero) it maps a Function to
    a scalar. Each primitive closes over the payloads of its operands, so an
    expression becomes a chain of nested closures that is cheap to build and
    evaluated only when applied.

    Example:
        >>> L = OperatorExpression.diff(2) + OperatorExpression.eye()
        >>> A = FunctionRealization.from_expression(L)
        >>> A(Function(evaluate_callable=np.sin))  # ~ zero function
    """

    @property
    def func(self) -> Callable:
        """The callable that applies the operator."""
        return self.payload

    def __call__(self, u: Function):
        """Apply the realized operator to a Function."""
        return self.payload(u)

    def _eye(self):
        return self._result(lambda z: z)

    def _diff(self, order):
        return self._result(lambda z: z.diff(order))

    def _cumsum(self, order):
        return self._result(lambda u: u.cumsum(order))

    def _feval(self, location, side):
        return self._result(lambda u: u(location, side))

    def _inner(self, f, conjugate):
        return self._result(lambda z: f.inner(z, conjugate=conjugate))

    def _mult(self, f):
        return self._result(lambda z: f * z)

    def _sum(self):
        return self._result(lambda z: z.sum())

    def _zero(self):
        return self._result(lambda u: 0)

    def _zeros(self):
        domain = self.domain
        if domain is None:
            return self._result(lambda z: Function.zeros(z.domain))
        return self._result(lambda z: Function.zeros(domain))

    def _compose(self, A, B):
        fa, fb = A.payload, B.payload
        return self._result(lambda z: fa(fb(z)))

    def _scale(self, c: numbers.Number, A):
        fa = A.payload
        return self._result(lambda z: c * fa(z))

    def _add(self, A, B):
        fa, fb = A.payload, B.payload
        return self._result(lambda z: fa(z) + fb(z))

    def _negate(self, A):
        fa = A.payload
        return self._result(lambda z: -fa(z))
