import numbers

import numpy as np


def check_order(order) -> int:
    """
    Validate a derivative or integral order.

    Args:
        order (int): Number of times to apply the operation.

    Returns:
        int: The order as a plain int.
    """
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise ValueError(f"order must be a non-negative integer, got {order}")
    if order < 0:
        raise ValueError(f"order must be a non-negative integer, got {order}")
    return int(order)


def direction_to_side(direction) -> int:
    """Map a one-sided evaluation direction to -1, 0 or +1 by its sign."""
    if not isinstance(direction, numbers.Real):
        raise ValueError(f"direction must be a real number, got {direction}")
    return int(np.sign(direction))


def format_scalar(value) -> str:
    """Compact text for a scalar coefficient."""
    if isinstance(value, numbers.Complex) and not isinstance(
        value, numbers.Real
    ):
        return f"({value:g})"
    return f"{value:g}"
