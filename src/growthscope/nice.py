"""
Nice numbers for readable axis bounds.

Axis bounds are restricted to the 1-2-5 sequence, values of the form
:math:`\\{1,2,5\\}\\times10^e`, which is the usual convention for readable chart
gridlines. The functions here round values onto the sequence and step along it, they
hold no state and are shared by the stateless bounds and the axis stabilizer.
"""

__all__ = (
    "lower_bound",
    "nice_bounds",
    "nice_ceil",
    "nice_floor",
    "step_down",
    "step_up",
    "upper_bound",
)


import math
import sys

from growthscope._util import _almost_equal, _mantissa_decade


def _is_nice_mantissa(m: float) -> bool:
    return _almost_equal(m, 1.0) or _almost_equal(m, 2.0) or _almost_equal(m, 5.0)


def nice_ceil(x: float) -> float:
    """
    Find the smallest value of the 1-2-5 sequence greater than or equal to `x`.

    Args:
        x: The value to round up.

    Returns:
        The rounded value, or zero if `x` is not positive.

    Examples:
        >>> from growthscope.nice import nice_ceil
        >>> nice_ceil(3.0)
        5.0
        >>> nice_ceil(0.15)
        0.2
        >>> nice_ceil(7.0)
        10.0
        >>> nice_ceil(-1.0)
        0.0
    """
    if x <= 0.0:
        return 0.0
    m, e, k = _mantissa_decade(x)
    if m <= 1.0 or _almost_equal(m, 1.0):
        return 1.0 * k
    if m <= 2.0 or _almost_equal(m, 2.0):
        return 2.0 * k
    if m <= 5.0 or _almost_equal(m, 5.0):
        return 5.0 * k
    return 10.0 ** (e + 1)


def nice_floor(x: float) -> float:
    """
    Find the largest value of the 1-2-5 sequence less than or equal to `x`.

    Args:
        x: The value to round down.

    Returns:
        The rounded value, or zero if `x` is smaller than the smallest normal float.

    Examples:
        >>> from growthscope.nice import nice_floor
        >>> nice_floor(3.0)
        2.0
        >>> nice_floor(70.0)
        50.0
        >>> nice_floor(1.5)
        1.0
    """
    if x < sys.float_info.min:
        return 0.0
    m, _, k = _mantissa_decade(x)
    if m >= 5.0 or _almost_equal(m, 5.0):
        return 5.0 * k
    if m >= 2.0 or _almost_equal(m, 2.0):
        return 2.0 * k
    return 1.0 * k


def upper_bound(value: float) -> float:
    """
    Round a value outward to a nice upper bound.

    Examples:
        >>> from growthscope.nice import upper_bound
        >>> upper_bound(3.0), upper_bound(-3.0), upper_bound(0.0)
        (5.0, -2.0, 0.0)
    """
    if value > 0.0:
        return nice_ceil(value)
    if value < 0.0:
        return -nice_floor(-value)
    return 0.0


def lower_bound(value: float) -> float:
    """
    Round a value outward to a nice lower bound.

    Examples:
        >>> from growthscope.nice import lower_bound
        >>> lower_bound(3.0), lower_bound(-3.0), lower_bound(0.0)
        (2.0, -5.0, 0.0)
    """
    if value < 0.0:
        return -nice_ceil(-value)
    if value > 0.0:
        return nice_floor(value)
    return 0.0


def step_up(value: float) -> float:
    """
    Move a value one notch away from zero along the 1-2-5 sequence.

    Values not on the sequence are first rounded away from zero onto it.

    Args:
        value: The value to step, the sign is preserved.

    Returns:
        The next value of the sequence, one when given zero.

    Examples:
        >>> from growthscope.nice import step_up
        >>> step_up(1.0), step_up(2.0), step_up(5.0), step_up(-0.2)
        (2.0, 5.0, 10.0, -0.5)
        >>> step_up(3.0)
        5.0
        >>> step_up(0.0)
        1.0
    """
    if value == 0.0:
        return 1.0
    s = math.copysign(1.0, value)
    a = abs(value)
    m, e, k = _mantissa_decade(a)
    if not _is_nice_mantissa(m):
        return s * nice_ceil(a)
    if _almost_equal(m, 1.0):
        return s * (2.0 * k)
    if _almost_equal(m, 2.0):
        return s * (5.0 * k)
    return s * 10.0 ** (e + 1)


def step_down(value: float) -> float:
    """
    Move a value one notch toward zero along the 1-2-5 sequence.

    Values not on the sequence are first rounded toward zero onto it.

    Args:
        value: The value to step, the sign is preserved.

    Returns:
        The previous value of the sequence, zero when given zero.

    Examples:
        >>> from growthscope.nice import step_down
        >>> step_down(10.0), step_down(5.0), step_down(2.0), step_down(-5.0)
        (5.0, 2.0, 1.0, -2.0)
        >>> step_down(1.0)
        0.5
        >>> step_down(3.0)
        2.0
    """
    if value == 0.0:
        return 0.0
    s = math.copysign(1.0, value)
    a = abs(value)
    m, e, k = _mantissa_decade(a)
    if not _is_nice_mantissa(m):
        return s * nice_floor(a)
    if _almost_equal(m, 5.0):
        return s * (2.0 * k)
    if _almost_equal(m, 2.0):
        return s * (1.0 * k)
    return s * 5.0 * 10.0 ** (e - 1)


def nice_bounds(data_min: float, data_max: float) -> tuple[float, float]:
    """
    Round data extrema outward to nice bounds without any buffer.

    When both extrema round to the same value the bounds are widened, to
    :math:`[-1,1]` around zero or by moving the upper bound one notch toward larger
    values.

    Args:
        data_min: The smallest data value.
        data_max: The largest data value.

    Returns:
        A tuple of the nice lower and upper bounds.

    Examples:
        >>> from growthscope.nice import nice_bounds
        >>> nice_bounds(0.3, 7.0)
        (0.2, 10.0)
        >>> nice_bounds(0.0, 0.0)
        (-1.0, 1.0)
        >>> nice_bounds(1.0, 1.0)
        (1.0, 2.0)
        >>> nice_bounds(-2.0, -2.0)
        (-2.0, -1.0)
    """
    desired_max = upper_bound(data_max)
    desired_min = lower_bound(data_min)
    if desired_max == desired_min:
        if desired_max == 0.0:
            return -1.0, 1.0
        desired_max = (
            step_up(desired_max) if desired_max > 0.0 else step_down(desired_max)
        )
    return desired_min, desired_max
