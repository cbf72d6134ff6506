"""
Exception types raised by pylinblock.

Both concrete errors also derive from the built-in exception a caller would
naturally catch (ValueError for mismatched domains, RuntimeError for reading
an unrealized payload), so existing ``except ValueError`` handlers keep
working.
"""


class PylinblockError(Exception):
    """Base class for all pylinblock specific errors."""


class DomainMismatchError(PylinblockError, ValueError):
    """
    Raised when two objects defined on different domains are combined.

    This covers operator sums and compositions as well as pointwise
    operations on functions whose end points differ.
    """

    def __init__(self, left, right, operation: str = "combine") -> None:
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(
            f"Cannot {operation} objects on different domains: "
            f"{left} and {right}"
        )


class UnrealizedAccessError(PylinblockError, RuntimeError):
    """
    Raised when a payload is requested from an object that was never given
    one, e.g. a replay seed or a domain-only operator placeholder.
    """
