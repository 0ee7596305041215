"""
Generalized logistic growth curves.

This module provides the curve model used throughout the package: the Richards (or
generalized logistic) curve, its early-phase exponential approximation, and the
parameter records describing a curve. The curve is parameterized with the convention
:math:`C=1` and :math:`Q=\\nu` so that :math:`T` is exactly the inflection point for
any asymmetry :math:`\\nu`.
"""

__all__ = (
    "CurveParameters",
    "ScenarioParameters",
    "early_phase_asymptote",
    "evaluate",
    "validate_parameters",
)


from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, TypeAdapter, model_validator

from growthscope._util import FiniteFloat

if TYPE_CHECKING:
    from growthscope.fitting import FitResult

_FINITE_FLOAT: Final = TypeAdapter(FiniteFloat)


class CurveParameters(BaseModel):
    """
    The parameters of a generalized logistic curve.

    Examples:
        >>> from growthscope.curves import CurveParameters
        >>> params = CurveParameters(A=0.0, K="100", B=0.5, T=10.0)
        >>> params.K
        100.0
        >>> params.nu
        1.0
        >>> CurveParameters(A=1.0, K=0.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
            ...
        pydantic_core._pydantic_core.ValidationError: 1 validation error for CurveParameters

    """

    model_config = ConfigDict(frozen=True)

    #: The lower asymptote.
    A: FiniteFloat

    #: The upper asymptote, must be greater than `A`.
    K: FiniteFloat

    #: The growth rate.
    B: FiniteFloat = 1.0

    #: The inflection time.
    T: FiniteFloat = 0.0

    #: The asymmetry, a value of one gives the symmetric logistic curve.
    nu: FiniteFloat = 1.0

    @model_validator(mode="after")
    def _validate_asymptote_order(self) -> "CurveParameters":
        """
        Validate the order of the asymptotes.

        Returns:
            The validated CurveParameters instance.

        Raises:
            ValueError: If the lower asymptote is not less than the upper asymptote.
        """
        if self.A >= self.K:
            msg = (
                f"The lower asymptote, {self.A}, must be "
                f"less than the upper asymptote {self.K}."
            )
            raise ValueError(msg)
        return self

    def with_fit(self, fit: "FitResult") -> "CurveParameters":
        """
        Create new parameters with the growth rate and inflection time of a fit.

        Args:
            fit: A two point fit result, must be valid.

        Returns:
            A new CurveParameters instance with `B` and `T` taken from the fit.

        Raises:
            ValueError: If the fit result is not valid.
        """
        if not fit.is_valid:
            msg = f"Cannot use an invalid fit result: {fit.error}"
            raise ValueError(msg)
        return self.model_copy(update={"B": fit.B, "T": fit.T})


class ScenarioParameters(BaseModel):
    """
    A low growth scenario sharing the lower asymptote and asymmetry of a curve.

    Examples:
        >>> from growthscope.curves import CurveParameters, ScenarioParameters
        >>> high = CurveParameters(A=0.0, K=1.0, B=0.4, T=12.0, nu=2.0)
        >>> low = ScenarioParameters(K2=0.6, B2=0.3, T2=15.0).low_parameters(high)
        >>> (low.A, low.K, low.B, low.T, low.nu)
        (0.0, 0.6, 0.3, 15.0, 2.0)

    """

    model_config = ConfigDict(frozen=True)

    #: The upper asymptote of the low scenario.
    K2: FiniteFloat

    #: The growth rate of the low scenario.
    B2: FiniteFloat

    #: The inflection time of the low scenario.
    T2: FiniteFloat

    def low_parameters(self, params: CurveParameters) -> CurveParameters:
        """
        Build the curve parameters for the low scenario.

        Args:
            params: The parameters of the high scenario curve.

        Returns:
            The low scenario curve parameters.

        Raises:
            pydantic.ValidationError: If `K2` is not greater than the shared `A`.
        """
        return CurveParameters(
            A=params.A, K=self.K2, B=self.B2, T=self.T2, nu=params.nu
        )


def evaluate(
    t: float | np.float64 | npt.NDArray[np.float64],
    params: CurveParameters,
) -> np.float64 | npt.NDArray[np.float64]:
    r"""
    Evaluate a generalized logistic curve.

    The curve is given by:

    .. math::

        Y(t)=A+\frac{K-A}{\left(1+\nu e^{-B\left(t-T\right)}\right)^{1/\nu}}

    Args:
        t: The time to evaluate the curve at.
        params: The curve parameters, `nu` must not be zero.

    Returns:
        Either a single numpy float or an array of numpy floats depending on the type
        of `t`.

    Examples:
        >>> import numpy as np
        >>> from growthscope.curves import CurveParameters, evaluate
        >>> params = CurveParameters(A=1.0, K=3.0, B=2.0, T=5.0, nu=1.0)
        >>> float(evaluate(5.0, params))
        2.0
        >>> evaluate(np.array([-1e4, 5.0, 1e4]), params).tolist()
        [1.0, 2.0, 3.0]

    """
    # Overflow of the exponential saturates the curve at its lower asymptote.
    with np.errstate(over="ignore"):
        exponential = np.exp(-params.B * (np.asarray(t, dtype=np.float64) - params.T))
        denominator = np.power(1.0 + params.nu * exponential, 1.0 / params.nu)
    return params.A + (params.K - params.A) / denominator


def early_phase_asymptote(
    t: float | np.float64 | npt.NDArray[np.float64],
    params: CurveParameters,
) -> np.float64 | npt.NDArray[np.float64]:
    r"""
    Evaluate the early-phase exponential approximation of a generalized logistic curve.

    This is the leading order term of the curve as :math:`t\to-\infty`:

    .. math::

        E(t)=A+\left(K-A\right)\nu^{-1/\nu}e^{B\left(t-T\right)/\nu}

    Args:
        t: The time to evaluate the approximation at.
        params: The curve parameters, `nu` must be positive.

    Returns:
        Either a single numpy float or an array of numpy floats depending on the type
        of `t`.

    Examples:
        >>> from growthscope.curves import CurveParameters, early_phase_asymptote
        >>> params = CurveParameters(A=0.0, K=1.0, B=1.0, T=0.0, nu=1.0)
        >>> float(early_phase_asymptote(0.0, params))
        1.0

    """
    amplitude = (params.K - params.A) * np.power(params.nu, -1.0 / params.nu)
    with np.errstate(over="ignore"):
        exponential = np.exp(
            params.B * (np.asarray(t, dtype=np.float64) - params.T) / params.nu
        )
    return params.A + amplitude * exponential


def _parameter_values(
    params: CurveParameters | Mapping[str, Any],
) -> tuple[float, float, float, float]:
    if isinstance(params, CurveParameters):
        return params.A, params.K, params.B, params.nu
    return (
        _FINITE_FLOAT.validate_python(params["A"]),
        _FINITE_FLOAT.validate_python(params["K"]),
        _FINITE_FLOAT.validate_python(params.get("B", 1.0)),
        _FINITE_FLOAT.validate_python(params.get("nu", 1.0)),
    )


def validate_parameters(params: CurveParameters | Mapping[str, Any]) -> str | None:
    """
    Check a complete set of curve parameters before accepting them.

    This is stricter than the validation done when constructing `CurveParameters`,
    requiring a positive growth rate and asymmetry as well as ordered asymptotes.

    Args:
        params: Either a `CurveParameters` instance or a mapping with the keys 'A',
            'K', 'B', and 'nu' as entered by a user.

    Returns:
        A human readable message describing the first problem found or `None` if the
        parameters are acceptable.

    Examples:
        >>> from growthscope.curves import CurveParameters, validate_parameters
        >>> validate_parameters(CurveParameters(A=0.0, K=1.0, B=0.5, nu=2.0)) is None
        True
        >>> validate_parameters({"A": 1.0, "K": 0.0, "B": -1.0, "nu": 0.0})
        'A must be less than K'
        >>> validate_parameters({"A": 0.0, "K": 1.0, "B": 0.0, "nu": 1.0})
        'B must be positive'
        >>> validate_parameters(CurveParameters(A=0.0, K=1.0, nu=-1.0))
        'ν must be positive'

    """
    try:
        a, k, b, nu = _parameter_values(params)
    except (KeyError, TypeError, ValueError) as e:
        return f"Invalid parameters: {e}"
    if not a < k:
        return "A must be less than K"
    if not b > 0:
        return "B must be positive"
    if not nu > 0:
        return "ν must be positive"
    return None
