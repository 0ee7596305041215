"""Tools for computing axis ranges for growth curve charts."""

__all__ = (
    "AxisRange",
    "compute_scenario_x_bounds",
    "compute_x_bounds",
    "compute_y_bounds",
    "data_buffer",
)


import math
from typing import Final, NamedTuple

from growthscope.curves import CurveParameters, ScenarioParameters
from growthscope.nice import nice_bounds


class AxisRange(NamedTuple):
    """
    A closed interval of an axis.

    Examples:
        >>> from growthscope.axes import AxisRange
        >>> AxisRange(-1.0, 2.0).span
        3.0
        >>> AxisRange(-1.0, 2.0).union(AxisRange(0.0, 5.0))
        AxisRange(min=-1.0, max=5.0)
    """

    min: float
    max: float

    @property
    def span(self) -> float:
        """The length of the interval."""
        return self.max - self.min

    def union(self, other: "AxisRange") -> "AxisRange":
        """The smallest range covering both this range and `other`."""
        return AxisRange(min(self.min, other.min), max(self.max, other.max))


#: The fraction of the curve's span bounding the x-axis on either side.
X_PERCENTILES: Final = (0.01, 0.99)

#: The padding added to either side of the x-axis, as a fraction of its range.
X_PADDING_FRACTION: Final = 0.1

#: The minimum padding added to either side of the x-axis.
X_MIN_PADDING: Final = 1.0

#: The x-axis range used when the curve can not be inverted.
X_FALLBACK_RANGE: Final = AxisRange(-10.0, 10.0)

#: The buffer added around the y-axis, as a fraction of the data range.
BUFFER_FRACTION: Final = 0.1


def _percentile_time(p: float, params: CurveParameters) -> float:
    """
    Find the time at which the curve reaches the fraction `p` of its span.

    Raises:
        ValueError: If the curve does not reach `p` or has a zero growth rate.
        ArithmeticError: If the inversion overflows or divides by zero.
    """
    term = ((1.0 / p) ** params.nu - 1.0) / params.nu
    if term <= 0.0 or params.B == 0.0:
        msg = f"The curve can not be inverted at {p}."
        raise ValueError(msg)
    return params.T - math.log(term) / params.B


def compute_x_bounds(params: CurveParameters) -> AxisRange:
    """
    Compute the x-axis range covering the transition of a growth curve.

    The range spans the times at which the curve moves from 1% to 99% of the way from
    its lower to upper asymptote, padded on either side by 10% of that range or one
    time unit, whichever is larger.

    Args:
        params: The curve parameters.

    Returns:
        The x-axis range, or the fixed range :math:`[-10,10]` for degenerate curves
        such as those with zero growth rate.

    Examples:
        >>> from growthscope.axes import compute_x_bounds
        >>> from growthscope.curves import CurveParameters
        >>> compute_x_bounds(CurveParameters(A=0.0, K=1.0, B=0.0, T=0.0, nu=1.0))
        AxisRange(min=-10.0, max=10.0)
        >>> x_range = compute_x_bounds(CurveParameters(A=0.0, K=1.0, B=1.0, T=3.0))
        >>> round(x_range.min, 6), round(x_range.max, 6)
        (-2.514144, 8.514144)

    """
    try:
        t_low, t_high = (_percentile_time(p, params) for p in X_PERCENTILES)
    except (ArithmeticError, ValueError):
        return X_FALLBACK_RANGE
    t_min, t_max = min(t_low, t_high), max(t_low, t_high)
    padding = max((t_max - t_min) * X_PADDING_FRACTION, X_MIN_PADDING)
    return AxisRange(t_min - padding, t_max + padding)


def compute_scenario_x_bounds(
    params: CurveParameters, scenario: ScenarioParameters | None
) -> AxisRange:
    """
    Compute an x-axis range covering both the high and low scenario curves.

    Args:
        params: The high scenario curve parameters.
        scenario: The low scenario or `None` to only cover the high scenario.

    Returns:
        The union of the x-axis ranges of both curves.
    """
    x_range = compute_x_bounds(params)
    if scenario is None:
        return x_range
    return x_range.union(compute_x_bounds(scenario.low_parameters(params)))


def data_buffer(data_min: float, data_max: float) -> float:
    """
    The breathing room added to either side of the y-axis.

    Examples:
        >>> from growthscope.axes import data_buffer
        >>> data_buffer(-5.0, 15.0)
        2.0
    """
    return abs(data_max - data_min) * BUFFER_FRACTION


def compute_y_bounds(data_min: float, data_max: float) -> AxisRange:
    """
    Compute a readable y-axis range from data extrema.

    The extrema are rounded outward onto the 1-2-5 sequence and a buffer of 10% of the
    raw data range is then added to either side.

    Args:
        data_min: The smallest data value.
        data_max: The largest data value.

    Returns:
        The y-axis range.

    Examples:
        >>> from growthscope.axes import compute_y_bounds
        >>> compute_y_bounds(0.0, 0.0)
        AxisRange(min=-1.0, max=1.0)
        >>> compute_y_bounds(-0.5, 0.5)
        AxisRange(min=-0.6, max=0.6)

    """
    desired_min, desired_max = nice_bounds(data_min, data_max)
    buffer = data_buffer(data_min, data_max)
    return AxisRange(desired_min - buffer, desired_max + buffer)
