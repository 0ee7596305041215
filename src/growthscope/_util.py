__all__: tuple[str, ...] = ()


import math
import sys
from typing import Annotated, Any, Final

from pydantic import BeforeValidator, Field

_ALMOST_EQUAL_EPSILON: Final = 1e-12


def _almost_equal(a: float, b: float, eps: float = _ALMOST_EQUAL_EPSILON) -> bool:
    """
    Compare two floats with a tolerance relative to their magnitude.

    Args:
        a: The first value to compare.
        b: The second value to compare.
        eps: The relative tolerance, also used as an absolute tolerance for values
            smaller than one in magnitude.

    Returns:
        `True` if the two values are equal within tolerance, `False` otherwise.

    Examples:
        >>> from growthscope._util import _almost_equal
        >>> _almost_equal(0.1 + 0.2, 0.3)
        True
        >>> _almost_equal(1.0, 1.001)
        False
        >>> _almost_equal(1e20, 1e20 + 1e4)
        True
    """
    return abs(a - b) <= eps * max(1.0, abs(a), abs(b))


def _mantissa_decade(a: float) -> tuple[float, int, float]:
    """
    Split a positive number into its mantissa and decade.

    Args:
        a: A strictly positive number, subnormal values are split as the smallest
            normal float.

    Returns:
        A tuple of the mantissa `m`, the exponent `e`, and the decade `k = 10**e`
        such that `a == m * k` and `1 <= m < 10` (up to rounding).

    Examples:
        >>> from growthscope._util import _mantissa_decade
        >>> _mantissa_decade(250.0)
        (2.5, 2, 100.0)
        >>> _mantissa_decade(1.0)
        (1.0, 0, 1.0)
        >>> _mantissa_decade(5e-324)[1]
        -308
    """
    a = max(a, sys.float_info.min)
    e = math.floor(math.log10(a))
    k = 10.0**e
    return a / k, e, k


def _make_float(x: Any) -> Any:  # noqa: ANN401
    """
    Utility function to coerce numeric strings to floats.

    Args:
        x: The value to convert, strings are stripped and parsed as floats.

    Returns:
        The parsed float or the original value for pydantic to validate.

    Examples:
        >>> from growthscope._util import _make_float
        >>> _make_float(" 1.5 ")
        1.5
        >>> _make_float("1e-3")
        0.001
        >>> _make_float(3)
        3
        >>> _make_float("abc")
        'abc'
    """
    if isinstance(x, str):
        try:
            return float(x.strip())
        except ValueError:
            return x
    return x


FiniteFloat = Annotated[float, BeforeValidator(_make_float), Field(allow_inf_nan=False)]
