from pylinblock.configs import FunctionConfig

from pylinblock.errors import (
    PylinblockError,
    DomainMismatchError,
    UnrealizedAccessError,
)

from pylinblock.interval import IntervalDomain, Function

from pylinblock.operators import (
    OperatorExpression,
    Realization,
    FunctionRealization,
    DescriptionRealization,
)
