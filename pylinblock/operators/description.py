"""Realization of operator expressions as readable formulas."""

from .realization import Realization
from ..utils import format_scalar


def _power(symbol: str, order: int) -> str:
    return symbol if order == 1 else f"{symbol}^{order}"


def _label(f) -> str:
    return f.name if getattr(f, "name", None) else "f"


class DescriptionRealization(Realization):
    """
    Renders an operator expression as text.

    The payload is a string built from these symbols:

        I        identity
        D^k      k-th derivative
        J^k      k-th indefinite integral
        E(x)     evaluation at x; E(x-) and E(x+) for one-sided limits
        <f, .>   inner product against f
        M[f]     multiplication by f
        S        definite integral over the domain
        0        zero functional or zero operator

    Compositions are written left to right in application-reversed order,
    A*B meaning B is applied first, as in the operator algebra.
    """

    @property
    def text(self) -> str:
        return self.payload

    def _eye(self):
        return self._result("I")

    def _diff(self, order):
        return self._result(_power("D", order))

    def _cumsum(self, order):
        return self._result(_power("J", order))

    def _feval(self, location, side):
        suffix = {-1: "-", 0: "", 1: "+"}[side]
        return self._result(f"E({location:g}{suffix})")

    def _inner(self, f, conjugate):
        return self._result(f"<{_label(f)}, .>")

    def _mult(self, f):
        return self._result(f"M[{_label(f)}]")

    def _sum(self):
        return self._result("S")

    def _zero(self):
        return self._result("0")

    def _zeros(self):
        return self._result("0")

    def _compose(self, A, B):
        return self._result(f"{A.payload}*{B.payload}")

    def _scale(self, c, A):
        return self._result(f"{format_scalar(c)}*{A.payload}")

    def _add(self, A, B):
        right = B.payload
        if right.startswith("-"):
            return self._result(f"({A.payload} - {right[1:]})")
        return self._result(f"({A.payload} + {right})")

    def _negate(self, A):
        text = A.payload
        if text.startswith("-"):
            return self._result(text[1:])
        return self._result(f"-{text}")
