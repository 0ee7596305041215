"""
Stabilized y-axis ranges for live updating charts.

The `AxisStabilizer` wraps the nice y-axis bounds with a hysteresis debounce: a bound
expands as soon as the data leaves it, but only shrinks one notch of the 1-2-5
sequence after a grace period has passed and the data has fit the tighter bound for
several consecutive updates. This keeps the axis from flickering while the data
oscillates by small amounts, e.g. while a point is being dragged.
"""

__all__ = ("AxisStabilizer", "StabilizerState")


import logging
from typing import Final

from pydantic import BaseModel

from growthscope.axes import AxisRange, data_buffer
from growthscope.nice import nice_bounds, step_down, step_up

#: The time, in seconds, after a bound change before shrinking is considered.
SHRINK_GRACE_PERIOD: Final = 0.2

#: The number of consecutive qualifying updates required to shrink a bound.
SHRINK_STABLE_THRESHOLD: Final = 3

logger = logging.getLogger(__name__)


class StabilizerState(BaseModel):
    """
    The mutable state of an axis stabilizer.

    Attributes:
        current_min: The nice lower bound currently shown, without buffer.
        current_max: The nice upper bound currently shown, without buffer.
        last_change: The timestamp, in seconds, of the last bound change.
        stable_count_min: Consecutive updates the data fit a tighter lower bound.
        stable_count_max: Consecutive updates the data fit a tighter upper bound.
    """

    current_min: float
    current_max: float
    last_change: float = 0.0
    stable_count_min: int = 0
    stable_count_max: int = 0


def _tighter_max(value: float) -> float | None:
    """The next nice value below an upper bound or `None` at zero."""
    if value > 0.0:
        return step_down(value)
    if value < 0.0:
        return step_up(value)
    return None


def _tighter_min(value: float) -> float | None:
    """The next nice value above a lower bound or `None` at zero."""
    if value < 0.0:
        return step_down(value)
    if value > 0.0:
        return step_up(value)
    return None


class AxisStabilizer:
    """
    A y-axis range with debounced shrinking.

    Each chart owns one stabilizer and calls `update` on every redraw with the current
    data extrema and a monotonic timestamp.

    Attributes:
        grace_period: Seconds after a bound change before shrinking is considered.
        stable_threshold: Consecutive qualifying updates required to shrink a bound.

    Examples:
        >>> from growthscope.stabilizer import AxisStabilizer
        >>> stabilizer = AxisStabilizer()
        >>> stabilizer.update(0.0, 4.0, now=0.0)
        AxisRange(min=-0.4, max=5.4)
        >>> stabilizer.update(0.0, 2.0, now=0.5)
        AxisRange(min=-0.2, max=5.2)
        >>> stabilizer.update(0.0, 2.0, now=0.6)
        AxisRange(min=-0.2, max=5.2)
        >>> stabilizer.update(0.0, 2.0, now=0.7)
        AxisRange(min=-0.2, max=2.2)

    """

    def __init__(
        self,
        grace_period: float = SHRINK_GRACE_PERIOD,
        stable_threshold: int = SHRINK_STABLE_THRESHOLD,
        state: StabilizerState | None = None,
        debug: bool = False,
    ) -> None:
        """
        Initialize an axis stabilizer.

        Args:
            grace_period: Seconds after a bound change before shrinking is considered,
                must be non-negative.
            stable_threshold: Consecutive qualifying updates required to shrink a
                bound, must be at least one.
            state: An existing state to continue from or `None` to adopt the bounds
                of the first update.
            debug: Whether to output debugging information as bounds change.

        Raises:
            ValueError: If `grace_period` is negative.
            ValueError: If `stable_threshold` is less than one.
        """
        if grace_period < 0.0:
            msg = f"The grace period must be non-negative, got {grace_period}."
            raise ValueError(msg)
        if stable_threshold < 1:
            msg = f"The stable threshold must be at least 1, got {stable_threshold}."
            raise ValueError(msg)
        self.grace_period = grace_period
        self.stable_threshold = stable_threshold
        self._state = state.model_copy() if state is not None else None
        if debug:
            logger.setLevel(logging.DEBUG)
            if not logger.handlers:
                stream_handler = logging.StreamHandler()
                stream_handler.setFormatter(
                    logging.Formatter("%(levelname)s: %(message)s")
                )
                logger.addHandler(stream_handler)

    @property
    def state(self) -> StabilizerState | None:
        """A copy of the current state or `None` before the first update."""
        return self._state.model_copy() if self._state is not None else None

    def update(self, data_min: float, data_max: float, now: float) -> AxisRange:
        """
        Update the stabilized range with new data extrema.

        Args:
            data_min: The smallest data value.
            data_max: The largest data value.
            now: A monotonic timestamp in seconds, e.g. from `time.monotonic`.

        Returns:
            The y-axis range to show, the current nice bounds with a buffer of 10% of
            the data range on either side.
        """
        desired_min, desired_max = nice_bounds(data_min, data_max)
        state = self._state
        if state is None:
            state = self._state = StabilizerState(
                current_min=desired_min, current_max=desired_max, last_change=now
            )
            logger.debug("Adopted initial range [%g, %g].", desired_min, desired_max)

        # Expansion is immediate
        expanded = False
        if data_max > state.current_max:
            logger.debug("Expanded max from %g to %g.", state.current_max, desired_max)
            state.current_max = desired_max
            expanded = True
        if data_min < state.current_min:
            logger.debug("Expanded min from %g to %g.", state.current_min, desired_min)
            state.current_min = desired_min
            expanded = True

        if expanded:
            state.last_change = now
            state.stable_count_min = 0
            state.stable_count_max = 0
        elif now - state.last_change >= self.grace_period:
            self._shrink(state, data_min, data_max, desired_min, desired_max, now)
        else:
            state.stable_count_min = 0
            state.stable_count_max = 0

        buffer = data_buffer(data_min, data_max)
        return AxisRange(state.current_min - buffer, state.current_max + buffer)

    def _shrink(  # noqa: PLR0913
        self,
        state: StabilizerState,
        data_min: float,
        data_max: float,
        desired_min: float,
        desired_max: float,
        now: float,
    ) -> None:
        """
        Advance the shrink counters for each end and commit stable shrinks.

        A bound only tightens while the tighter notch still contains the freshly
        computed nice bound, so flat data keeps the widened range of `nice_bounds`.
        """
        shrunk = False

        candidate_max = _tighter_max(state.current_max)
        if (
            candidate_max is not None
            and data_max <= candidate_max
            and desired_max <= candidate_max
        ):
            state.stable_count_max += 1
            if state.stable_count_max >= self.stable_threshold:
                logger.debug(
                    "Shrunk max from %g to %g.", state.current_max, candidate_max
                )
                state.current_max = candidate_max
                state.stable_count_max = 0
                shrunk = True
        else:
            state.stable_count_max = 0

        candidate_min = _tighter_min(state.current_min)
        if (
            candidate_min is not None
            and data_min >= candidate_min
            and desired_min >= candidate_min
        ):
            state.stable_count_min += 1
            if state.stable_count_min >= self.stable_threshold:
                logger.debug(
                    "Shrunk min from %g to %g.", state.current_min, candidate_min
                )
                state.current_min = candidate_min
                state.stable_count_min = 0
                shrunk = True
        else:
            state.stable_count_min = 0

        if shrunk:
            state.last_change = now
