"""
Sampled growth curve series.

This module contains functions for sampling growth curves into pandas DataFrames that
can be handed to a charting library as is.
"""

__all__ = (
    "DEFAULT_SAMPLE_POINTS",
    "sample_curve",
    "sample_scenarios",
)


from typing import Final

import numpy as np
import pandas as pd

from growthscope.axes import AxisRange, compute_scenario_x_bounds, compute_x_bounds
from growthscope.curves import (
    CurveParameters,
    ScenarioParameters,
    early_phase_asymptote,
    evaluate,
)

#: The default number of intervals to sample a curve over.
DEFAULT_SAMPLE_POINTS: Final = 200


def sample_curve(
    params: CurveParameters,
    n_points: int = DEFAULT_SAMPLE_POINTS,
    x_range: AxisRange | None = None,
) -> pd.DataFrame:
    """
    Sample a growth curve and its early-phase exponential over a time range.

    Args:
        params: The curve parameters.
        n_points: The number of intervals to split the time range into, the curve is
            sampled at `n_points + 1` evenly spaced times including both ends.
        x_range: The time range to sample over or `None` to use the range returned by
            `compute_x_bounds`.

    Returns:
        A pandas DataFrame with the columns 'time', 'sigmoid', 'exponential', 'lower',
        and 'upper' where the last two are the curve's asymptotes.

    Raises:
        ValueError: If `n_points` is less than 1.

    Examples:
        >>> from growthscope.axes import AxisRange
        >>> from growthscope.curves import CurveParameters
        >>> from growthscope.data import sample_curve
        >>> params = CurveParameters(A=0.0, K=2.0, B=1.0, T=0.0)
        >>> sample_curve(params, n_points=2, x_range=AxisRange(-1.0, 1.0))
           time   sigmoid  exponential  lower  upper
        0  -1.0  0.537883     0.735759    0.0    2.0
        1   0.0  1.000000     2.000000    0.0    2.0
        2   1.0  1.462117     5.436564    0.0    2.0

    """
    if n_points < 1:
        msg = f"The number of sample points must be at least 1, got {n_points}."
        raise ValueError(msg)
    x_range = compute_x_bounds(params) if x_range is None else x_range
    time = np.linspace(x_range.min, x_range.max, n_points + 1)
    return pd.DataFrame(
        data={
            "time": time,
            "sigmoid": evaluate(time, params),
            "exponential": early_phase_asymptote(time, params),
            "lower": np.full_like(time, params.A),
            "upper": np.full_like(time, params.K),
        }
    )


def sample_scenarios(
    params: CurveParameters,
    scenario: ScenarioParameters | None,
    n_points: int = DEFAULT_SAMPLE_POINTS,
) -> pd.DataFrame:
    """
    Sample the high and low scenario curves over a shared time range.

    Args:
        params: The high scenario curve parameters.
        scenario: The low scenario or `None` to only sample the high scenario.
        n_points: The number of intervals to split the time range into.

    Returns:
        A pandas DataFrame in long format with the columns 'scenario', 'time',
        'sigmoid', 'exponential', 'lower', and 'upper'. The 'scenario' column is
        either 'high' or 'low', the 'exponential' column is only given for the high
        scenario and is missing for the low scenario.

    Raises:
        ValueError: If `n_points` is less than 1.
    """
    x_range = compute_scenario_x_bounds(params, scenario)
    samples = [
        sample_curve(params, n_points=n_points, x_range=x_range).assign(
            scenario="high"
        )
    ]
    if scenario is not None:
        low = sample_curve(
            scenario.low_parameters(params), n_points=n_points, x_range=x_range
        )
        low["exponential"] = np.nan
        samples.append(low.assign(scenario="low"))
    df = pd.concat(samples, ignore_index=True)
    return df[["scenario", "time", "sigmoid", "exponential", "lower", "upper"]]
