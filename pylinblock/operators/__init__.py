"""Linear operator expressions and their realizations.

This package separates *what* an operator is from *how* it is evaluated:

- OperatorExpression: realization-agnostic build procedure plus domain
- Realization: abstract base fixing the primitive vocabulary and replay
- FunctionRealization: operators as callables acting on Function objects
- DescriptionRealization: operators rendered as readable formulas
"""

from .expression import OperatorExpression
from .realization import Realization
from .function_realization import FunctionRealization
from .description import DescriptionRealization

__all__ = [
    'OperatorExpression',
    'Realization',
    'FunctionRealization',
    'DescriptionRealization',
]
