"""Unit tests for the `growthscope.axes.compute_x_bounds` function."""

import math

import pytest

from growthscope.axes import AxisRange, compute_x_bounds
from growthscope.curves import CurveParameters, evaluate


@pytest.mark.parametrize("B", [0.05, 0.2, 0.5])
@pytest.mark.parametrize("T", [-20.0, 0.0, 7.5])
@pytest.mark.parametrize("nu", [0.5, 1.0, 2.0])
def test_bounds_span_one_to_ninety_nine_percent(
    B: float,  # noqa: N803
    T: float,  # noqa: N803
    nu: float,
) -> None:
    """Without the padding the range runs from 1% to 99% of the curve's span."""
    params = CurveParameters(A=2.0, K=6.0, B=B, T=T, nu=nu)
    x_range = compute_x_bounds(params)
    assert isinstance(x_range, AxisRange)
    # These growth rates are slow enough for the 10% padding to dominate
    inner = x_range.span / 1.2
    padding = 0.1 * inner
    assert padding > 1.0
    y_low = float(evaluate(x_range.min + padding, params))
    y_high = float(evaluate(x_range.max - padding, params))
    assert y_low == pytest.approx(2.0 + 0.01 * 4.0, rel=1e-9)
    assert y_high == pytest.approx(2.0 + 0.99 * 4.0, rel=1e-9)


def test_fast_growth_uses_minimum_padding() -> None:
    """Narrow transitions are padded by one time unit on either side."""
    params = CurveParameters(A=0.0, K=1.0, B=10.0, T=0.0)
    x_range = compute_x_bounds(params)
    half_width = math.log(99.0) / 10.0
    assert x_range.min == pytest.approx(-half_width - 1.0)
    assert x_range.max == pytest.approx(half_width + 1.0)


def test_negative_growth_rate_is_ordered() -> None:
    """A decreasing curve still gives a range with the minimum first."""
    increasing = compute_x_bounds(CurveParameters(A=0.0, K=1.0, B=0.5, T=4.0))
    decreasing = compute_x_bounds(CurveParameters(A=0.0, K=1.0, B=-0.5, T=4.0))
    assert decreasing.min < decreasing.max
    assert decreasing.min == pytest.approx(increasing.min)
    assert decreasing.max == pytest.approx(increasing.max)


@pytest.mark.parametrize(
    "params",
    (
        CurveParameters(A=0.0, K=1.0, B=0.0, T=0.0),
        CurveParameters(A=0.0, K=1.0, B=0.0, T=50.0, nu=2.0),
        CurveParameters(A=0.0, K=1.0, B=1.0, T=0.0, nu=0.0),
    ),
)
def test_degenerate_curves_fall_back(params: CurveParameters) -> None:
    """Curves that can not be inverted get the fixed fallback range."""
    assert compute_x_bounds(params) == AxisRange(-10.0, 10.0)


def test_centered_on_inflection_for_symmetric_curve() -> None:
    """The logistic curve's range is symmetric about `T`."""
    x_range = compute_x_bounds(CurveParameters(A=0.0, K=1.0, B=0.25, T=12.0))
    assert (x_range.min + x_range.max) / 2.0 == pytest.approx(12.0)
