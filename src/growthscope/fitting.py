"""
Functionality for fitting a growth curve to two observations.

This module recovers the growth rate and inflection time of a generalized logistic
curve from two observed points, given the asymptotes and asymmetry. The fit is exact
rather than iterative: the generalized logit transform makes the normalized curve
linear in time so two points determine it. Currently exported functionality includes:
- `fit_two_points`
- `generalized_logit`
"""

__all__ = (
    "FitResult",
    "Observation",
    "TwoPointFitInput",
    "fit_two_points",
    "generalized_logit",
)


import logging
import math
from typing import Final

from pydantic import BaseModel, ConfigDict

from growthscope._util import FiniteFloat

#: The smallest allowed separation between the two observation times.
MIN_TIME_SEPARATION: Final = 0.001

logger = logging.getLogger(__name__)


class Observation(BaseModel):
    """A single observed point on a growth curve."""

    model_config = ConfigDict(frozen=True)

    #: The time of the observation.
    t: FiniteFloat

    #: The observed value.
    Y: FiniteFloat


class FitResult(BaseModel):
    """
    The result of a two point fit.

    Attributes:
        B: The fitted growth rate, zero if the fit is invalid.
        T: The fitted inflection time, zero if the fit is invalid.
        is_valid: Whether the fit succeeded.
        error: A human readable reason when the fit is invalid.
    """

    model_config = ConfigDict(frozen=True)

    B: float
    T: float
    is_valid: bool
    error: str | None = None

    @classmethod
    def invalid(cls, error: str) -> "FitResult":
        """
        Create an invalid fit result.

        Args:
            error: The reason the fit failed.

        Returns:
            An invalid fit result with zeroed parameters.
        """
        return cls(B=0.0, T=0.0, is_valid=False, error=error)


class TwoPointFitInput(BaseModel):
    """
    The inputs to a two point fit.

    No semantic validation is done on construction, invalid combinations are
    reported by the fit itself.

    Examples:
        >>> from growthscope.fitting import TwoPointFitInput
        >>> fit_input = TwoPointFitInput(
        ...     A=0.0, K=1.0, t0=0.0, Y0="0.1", t1=12.0, Y1=0.2
        ... )
        >>> fit_input.Y0
        0.1
        >>> fit_input.fit().is_valid
        True
        >>> TwoPointFitInput(A=1.0, K=0.0, t0=0.0, Y0=0.1, t1=1.0, Y1=0.2).fit().error
        'A must be less than K'

    """

    model_config = ConfigDict(frozen=True)

    A: FiniteFloat
    K: FiniteFloat
    t0: FiniteFloat
    Y0: FiniteFloat
    t1: FiniteFloat
    Y1: FiniteFloat
    nu: FiniteFloat = 1.0

    @property
    def points(self) -> tuple[Observation, Observation]:
        """The two observations used by the fit."""
        return Observation(t=self.t0, Y=self.Y0), Observation(t=self.t1, Y=self.Y1)

    def fit(self) -> FitResult:
        """
        Fit the growth rate and inflection time to these inputs.

        Returns:
            The result of `fit_two_points` for these inputs.
        """
        return fit_two_points(
            self.A, self.K, self.t0, self.Y0, self.t1, self.Y1, nu=self.nu
        )


def generalized_logit(z: float, nu: float) -> float:
    r"""
    Evaluate the generalized logit transform.

    The transform is given by:

    .. math::

        L_\nu(z)=\ln\left(\frac{\nu z^\nu}{1-z^\nu}\right)

    and is the inverse of the normalized generalized logistic curve, so that
    :math:`L_\nu(z(t))=B(t-T)`.

    Args:
        z: The normalized value, must be strictly between zero and one.
        nu: The asymmetry of the curve.

    Returns:
        The transformed value.

    Raises:
        ValueError: If `z` is not strictly between zero and one.
        ValueError: If :math:`1-z^\nu` is not positive.

    Examples:
        >>> from growthscope.fitting import generalized_logit
        >>> generalized_logit(0.5, 1.0)
        0.0
        >>> generalized_logit(1.5, 1.0)
        Traceback (most recent call last):
            ...
        ValueError: z must be strictly between 0 and 1.

    """
    if z <= 0.0 or z >= 1.0:
        msg = "z must be strictly between 0 and 1."
        raise ValueError(msg)
    z_pow_nu = z**nu
    denominator = 1.0 - z_pow_nu
    if denominator <= 0.0:
        msg = "Invalid denominator in logit calculation."
        raise ValueError(msg)
    return math.log(nu * z_pow_nu / denominator)


def _validate_fit_inputs(  # noqa: PLR0913, PLR0911
    A: float,  # noqa: N803
    K: float,  # noqa: N803
    t0: float,
    Y0: float,  # noqa: N803
    t1: float,
    Y1: float,  # noqa: N803
    nu: float,
) -> str | None:
    """Check the fit inputs in order, returning the first problem found."""
    if not A < K:
        return "A must be less than K"
    if not A < Y0 < K:
        return "Y(t₀) must be strictly between A and K"
    if not A < Y1 < K:
        return "Y(t₁) must be strictly between A and K"
    if t0 == t1:
        return "t₀ and t₁ must be different"
    if not nu > 0:
        return "ν must be positive"
    if abs(t1 - t0) < MIN_TIME_SEPARATION:
        return "Time points are too close together"
    return None


def fit_two_points(  # noqa: PLR0913
    A: float,  # noqa: N803
    K: float,  # noqa: N803
    t0: float,
    Y0: float,  # noqa: N803
    t1: float,
    Y1: float,  # noqa: N803
    nu: float = 1.0,
) -> FitResult:
    """
    Fit the growth rate and inflection time of a curve through two points.

    Args:
        A: The lower asymptote.
        K: The upper asymptote.
        t0: The time of the first observation.
        Y0: The value of the first observation.
        t1: The time of the second observation.
        Y1: The value of the second observation.
        nu: The asymmetry of the curve.

    Returns:
        A fit result, either valid with the recovered `B` and `T` or invalid with
        a human readable error. This function does not raise for bad inputs.

    Examples:
        >>> from growthscope.fitting import fit_two_points
        >>> fit = fit_two_points(0.0, 1.0, -1.0, 0.25, 1.0, 0.75)
        >>> fit.is_valid
        True
        >>> round(fit.B, 12)
        1.098612288668
        >>> abs(fit.T) < 1e-12
        True
        >>> fit_two_points(0.0, 1.0, 0.0, 0.0, 1.0, 0.5).error
        'Y(t₀) must be strictly between A and K'

    """
    if error := _validate_fit_inputs(A, K, t0, Y0, t1, Y1, nu):
        logger.debug("Rejected two point fit inputs: %s.", error)
        return FitResult.invalid(error)

    try:
        # Normalize to the unit interval then linearize in time
        z0 = (Y0 - A) / (K - A)
        z1 = (Y1 - A) / (K - A)
        l0 = generalized_logit(z0, nu)
        l1 = generalized_logit(z1, nu)
        B = (l1 - l0) / (t1 - t0)  # noqa: N806
        if B == 0.0:
            msg = "the observations give a zero growth rate."
            raise ValueError(msg)
        T = t0 - l0 / B  # noqa: N806
    except (ArithmeticError, ValueError) as e:
        logger.debug("Two point fit failed: %s", e)
        return FitResult.invalid(f"Calculation error: {e}")

    if not (math.isfinite(B) and math.isfinite(T)):
        return FitResult.invalid("Calculation error: the fit is not finite.")
    return FitResult(B=B, T=T, is_valid=True)
