"""Unit tests for the `growthscope.stabilizer.AxisStabilizer` class."""

import logging

import pytest

from growthscope.axes import AxisRange
from growthscope.stabilizer import AxisStabilizer, StabilizerState


def _stabilizer(**kwargs: float) -> AxisStabilizer:
    return AxisStabilizer(state=StabilizerState(**kwargs))


def test_first_update_adopts_nice_bounds() -> None:
    stabilizer = AxisStabilizer()
    assert stabilizer.state is None
    y_range = stabilizer.update(0.3, 7.0, now=3.0)
    assert y_range.min == pytest.approx(0.2 - 0.67)
    assert y_range.max == pytest.approx(10.0 + 0.67)
    state = stabilizer.state
    assert state is not None
    assert (state.current_min, state.current_max) == (0.2, 10.0)
    assert state.last_change == 3.0
    assert (state.stable_count_min, state.stable_count_max) == (0, 0)


def test_expansion_is_immediate() -> None:
    """Data beyond a bound expands it on the same update, even within the grace."""
    stabilizer = _stabilizer(current_min=0.0, current_max=1.0, last_change=0.0)
    y_range = stabilizer.update(0.0, 5.0, now=0.05)
    assert isinstance(y_range, AxisRange)
    assert tuple(y_range) == pytest.approx((-0.5, 5.5))
    state = stabilizer.state
    assert state is not None
    assert state.current_max == 5.0
    assert state.last_change == 0.05


def test_expansion_resets_both_counters() -> None:
    stabilizer = _stabilizer(
        current_min=0.0, current_max=5.0, last_change=0.0, stable_count_max=2
    )
    stabilizer.update(-1.0, 2.0, now=1.0)
    state = stabilizer.state
    assert state is not None
    assert (state.current_min, state.current_max) == (-1.0, 5.0)
    assert (state.stable_count_min, state.stable_count_max) == (0, 0)
    assert state.last_change == 1.0


def test_shrink_after_grace_period_and_stable_checks() -> None:
    """A bound shrinks one notch on the third qualifying update after the grace."""
    stabilizer = _stabilizer(current_min=0.0, current_max=5.0, last_change=0.0)
    expected_counts = ((0.1, 0), (0.2, 1), (0.3, 2))
    for now, count in expected_counts:
        y_range = stabilizer.update(0.0, 2.0, now=now)
        assert tuple(y_range) == pytest.approx((-0.2, 5.2))
        state = stabilizer.state
        assert state is not None
        assert state.stable_count_max == count
    y_range = stabilizer.update(0.0, 2.0, now=0.4)
    assert tuple(y_range) == pytest.approx((-0.2, 2.2))
    state = stabilizer.state
    assert state is not None
    assert state.current_max == 2.0
    assert state.stable_count_max == 0
    assert state.last_change == 0.4


def test_non_qualifying_update_resets_counter() -> None:
    stabilizer = _stabilizer(current_min=0.0, current_max=5.0, last_change=0.0)
    stabilizer.update(0.0, 2.0, now=0.3)
    stabilizer.update(0.0, 3.0, now=0.4)
    state = stabilizer.state
    assert state is not None
    assert state.stable_count_max == 0
    stabilizer.update(0.0, 2.0, now=0.5)
    stabilizer.update(0.0, 2.0, now=0.6)
    state = stabilizer.state
    assert state is not None
    assert state.current_max == 5.0
    stabilizer.update(0.0, 2.0, now=0.7)
    state = stabilizer.state
    assert state is not None
    assert state.current_max == 2.0


def test_counters_held_within_grace_period() -> None:
    stabilizer = _stabilizer(
        current_min=0.0,
        current_max=5.0,
        last_change=1.0,
        stable_count_min=1,
        stable_count_max=2,
    )
    stabilizer.update(0.0, 2.0, now=1.1)
    state = stabilizer.state
    assert state is not None
    assert (state.stable_count_min, state.stable_count_max) == (0, 0)
    assert state.current_max == 5.0


def test_min_and_max_shrink_independently() -> None:
    """Only the end whose data fits the tighter bound shrinks."""
    stabilizer = _stabilizer(current_min=-5.0, current_max=5.0, last_change=0.0)
    for now in (0.3, 0.4):
        stabilizer.update(-1.5, 4.5, now=now)
    y_range = stabilizer.update(-1.5, 4.5, now=0.5)
    assert tuple(y_range) == pytest.approx((-2.6, 5.6))
    state = stabilizer.state
    assert state is not None
    assert (state.current_min, state.current_max) == (-2.0, 5.0)
    assert state.stable_count_max == 0


def test_zero_bound_never_shrinks() -> None:
    stabilizer = _stabilizer(current_min=0.0, current_max=5.0, last_change=0.0)
    for i in range(10):
        stabilizer.update(0.5, 4.0, now=1.0 + 0.1 * i)
    state = stabilizer.state
    assert state is not None
    assert (state.current_min, state.current_max) == (0.0, 5.0)
    assert state.stable_count_min == 0
    assert state.last_change == 0.0


def test_positive_min_tightens_upward() -> None:
    stabilizer = _stabilizer(current_min=2.0, current_max=10.0, last_change=0.0)
    for i in range(6):
        stabilizer.update(6.0, 8.0, now=1.0 + 0.5 * i)
    state = stabilizer.state
    assert state is not None
    assert (state.current_min, state.current_max) == (5.0, 10.0)


def test_negative_max_tightens_downward() -> None:
    stabilizer = _stabilizer(current_min=-10.0, current_max=-1.0, last_change=0.0)
    for i in range(3):
        stabilizer.update(-8.0, -4.0, now=1.0 + 0.5 * i)
    state = stabilizer.state
    assert state is not None
    assert (state.current_min, state.current_max) == (-10.0, -2.0)


def test_buffer_always_applied() -> None:
    stabilizer = _stabilizer(current_min=-10.0, current_max=10.0, last_change=0.0)
    y_range = stabilizer.update(-1.0, 3.0, now=0.01)
    assert tuple(y_range) == pytest.approx((-10.4, 10.4))


def test_custom_threshold_and_grace() -> None:
    stabilizer = AxisStabilizer(
        grace_period=0.0,
        stable_threshold=1,
        state=StabilizerState(current_min=0.0, current_max=5.0),
    )
    stabilizer.update(0.0, 2.0, now=0.0)
    state = stabilizer.state
    assert state is not None
    assert state.current_max == 2.0


@pytest.mark.parametrize(
    ("kwargs", "match"),
    (
        ({"grace_period": -0.1}, "^The grace period must be non-negative, got -0.1.$"),
        ({"stable_threshold": 0}, "^The stable threshold must be at least 1, got 0.$"),
    ),
)
def test_invalid_configuration_value_error(
    kwargs: dict[str, float], match: str
) -> None:
    with pytest.raises(ValueError, match=match):
        AxisStabilizer(**kwargs)  # type: ignore[arg-type]


def test_state_is_copied() -> None:
    """Neither the given state nor the returned state alias the internal state."""
    initial = StabilizerState(current_min=0.0, current_max=5.0)
    stabilizer = AxisStabilizer(state=initial)
    initial.current_max = 100.0
    state = stabilizer.state
    assert state is not None
    assert state.current_max == 5.0
    state.current_max = 50.0
    again = stabilizer.state
    assert again is not None
    assert again.current_max == 5.0


def test_bound_changes_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    stabilizer = _stabilizer(current_min=0.0, current_max=1.0, last_change=0.0)
    with caplog.at_level(logging.DEBUG, logger="growthscope.stabilizer"):
        stabilizer.update(0.0, 5.0, now=0.0)
    assert "Expanded max from 1 to 5." in caplog.text


@pytest.mark.parametrize(
    ("value", "expected"),
    ((0.0, (-1.0, 1.0)), (1.0, (1.0, 2.0)), (-2.0, (-2.0, -1.0))),
)
def test_flat_data_keeps_widened_range(
    value: float, expected: tuple[float, float]
) -> None:
    """Flat data never shrinks past the widened range of the nice bounds."""
    stabilizer = AxisStabilizer()
    for i in range(100):
        y_range = stabilizer.update(value, value, now=0.3 * i)
        assert y_range.min < y_range.max
        assert tuple(y_range) == expected


def test_flat_zero_data_shrinks_to_unit_range() -> None:
    stabilizer = _stabilizer(current_min=-5.0, current_max=5.0, last_change=0.0)
    for i in range(60):
        y_range = stabilizer.update(0.0, 0.0, now=0.3 * (i + 1))
    assert tuple(y_range) == (-1.0, 1.0)
    state = stabilizer.state
    assert state is not None
    assert (state.stable_count_min, state.stable_count_max) == (0, 0)
