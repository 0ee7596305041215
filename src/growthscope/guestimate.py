"""Tools for guessing a growth curve from two observed points."""

__all__ = ("GuestimateResult", "guestimate_growth")


import logging

import pandas as pd
from pydantic import BaseModel, ConfigDict

from growthscope.axes import AxisRange, compute_scenario_x_bounds, compute_y_bounds
from growthscope.curves import CurveParameters, ScenarioParameters
from growthscope.data import DEFAULT_SAMPLE_POINTS, sample_scenarios
from growthscope.fitting import FitResult, TwoPointFitInput
from growthscope.stabilizer import AxisStabilizer

logger = logging.getLogger(__name__)


class GuestimateResult(BaseModel):
    """
    A fitted growth curve ready to be charted.

    When the fit is invalid only `fit` is given, the remaining attributes are `None`.

    Attributes:
        fit: The two point fit result.
        parameters: The fitted curve parameters.
        x_range: The x-axis range covering every scenario.
        y_range: The y-axis range covering every scenario's asymptotes.
        samples: The sampled scenarios as returned by `sample_scenarios`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fit: FitResult
    parameters: CurveParameters | None = None
    x_range: AxisRange | None = None
    y_range: AxisRange | None = None
    samples: pd.DataFrame | None = None

    @property
    def is_valid(self) -> bool:
        """Whether the fit succeeded and the curve can be charted."""
        return self.fit.is_valid


def guestimate_growth(
    fit_input: TwoPointFitInput,
    scenario: ScenarioParameters | None = None,
    n_points: int = DEFAULT_SAMPLE_POINTS,
    stabilizer: AxisStabilizer | None = None,
    now: float | None = None,
) -> GuestimateResult:
    """
    Fit a growth curve through two points and prepare it for charting.

    Args:
        fit_input: The asymptotes, asymmetry and two observed points.
        scenario: An optional low scenario to chart alongside the fitted curve.
        n_points: The number of intervals to sample the curves over.
        stabilizer: The chart's axis stabilizer or `None` to use stateless y-axis
            bounds.
        now: A monotonic timestamp in seconds, required with `stabilizer`.

    Returns:
        The fit along with the curve parameters, axis ranges and samples when the fit
        is valid.

    Raises:
        ValueError: If a `stabilizer` is given without `now`.
        pydantic.ValidationError: If the scenario's upper asymptote is not greater
            than the lower asymptote.

    Examples:
        >>> from growthscope.fitting import TwoPointFitInput
        >>> from growthscope.guestimate import guestimate_growth
        >>> result = guestimate_growth(
        ...     TwoPointFitInput(A=0.0, K=1.0, t0=-1.0, Y0=0.25, t1=1.0, Y1=0.75)
        ... )
        >>> result.is_valid
        True
        >>> result.y_range
        AxisRange(min=-0.1, max=1.1)
        >>> sorted(result.samples["scenario"].unique())
        ['high']

    """
    if stabilizer is not None and now is None:
        msg = "A timestamp must be given to update the axis stabilizer."
        raise ValueError(msg)

    fit = fit_input.fit()
    if not fit.is_valid:
        logger.debug("No curve to chart, the fit is invalid: %s", fit.error)
        return GuestimateResult(fit=fit)

    params = CurveParameters(A=fit_input.A, K=fit_input.K, nu=fit_input.nu).with_fit(
        fit
    )
    x_range = compute_scenario_x_bounds(params, scenario)
    y_min = params.A
    y_max = params.K if scenario is None else max(params.K, scenario.K2)
    if stabilizer is not None and now is not None:
        y_range = stabilizer.update(y_min, y_max, now)
    else:
        y_range = compute_y_bounds(y_min, y_max)
    return GuestimateResult(
        fit=fit,
        parameters=params,
        x_range=x_range,
        y_range=y_range,
        samples=sample_scenarios(params, scenario, n_points=n_points),
    )
