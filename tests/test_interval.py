from __future__ import annotations

import pytest

from ji_engine.interval import (
    MAJOR_THIRD,
    PERFECT_FIFTH,
    SYNTONIC_COMMA,
    IntervalLookupError,
    TwelveEdoInterval,
    approximate_cents,
    approximate_ratio,
)
from ji_engine.ratio import Ratio

PerfectUnison = TwelveEdoInterval.PerfectUnison
PerfectFifth = TwelveEdoInterval.PerfectFifth


def test_unison():
    assert approximate_ratio(Ratio(1, 1)) == (PerfectUnison, 0.0)


def test_perfect_fifth():
    interval, cents = Ratio(3, 2).to_approximate_equal_tempered_interval()
    assert interval == PerfectFifth
    assert abs(cents - 1.955) < 0.001


def test_just_intervals_land_on_expected_names():
    expected = {
        (9, 8): TwelveEdoInterval.MajorSecond,
        (6, 5): TwelveEdoInterval.MinorThird,
        (5, 4): TwelveEdoInterval.MajorThird,
        (4, 3): TwelveEdoInterval.PerfectFourth,
        (45, 32): TwelveEdoInterval.AugmentedFourth,
        (8, 5): TwelveEdoInterval.MinorSixth,
        (5, 3): TwelveEdoInterval.MajorSixth,
        (7, 4): TwelveEdoInterval.MinorSeventh,
        (15, 8): TwelveEdoInterval.MajorSeventh,
        (16, 15): TwelveEdoInterval.MinorSecond,
    }
    for (n, d), name in expected.items():
        assert approximate_ratio(Ratio(n, d)).interval == name, f"{n}/{d}"


def test_major_third_is_flat_of_et():
    approx = approximate_ratio(MAJOR_THIRD)
    assert approx.interval == TwelveEdoInterval.MajorThird
    assert approx.cents == pytest.approx(-13.686, abs=1e-3)


def test_approximation_uses_normalized_ratio():
    assert approximate_ratio(Ratio(3, 1)) == approximate_ratio(PERFECT_FIFTH)
    assert approximate_ratio(Ratio(2, 3)).interval == TwelveEdoInterval.PerfectFourth


def test_near_octave_rounds_to_unison():
    approx = approximate_cents(1190.0)
    assert approx.interval == PerfectUnison
    assert approx.cents == pytest.approx(-10.0)


def test_half_step_boundary_rounds_away_from_zero():
    assert approximate_cents(50.0) == (TwelveEdoInterval.MinorSecond, -50.0)
    assert approximate_cents(250.0).interval == TwelveEdoInterval.MinorThird


def test_syntonic_comma_is_nearly_unison():
    approx = approximate_ratio(SYNTONIC_COMMA)
    assert approx.interval == PerfectUnison
    assert approx.cents == pytest.approx(21.506, abs=1e-3)


def test_negative_cents_fail_instead_of_guessing():
    with pytest.raises(IntervalLookupError):
        approximate_cents(-701.955)


def test_from_steps_is_total_on_0_to_11_only():
    assert [TwelveEdoInterval.from_steps(i).steps for i in range(12)] == list(range(12))
    for bad in (-1, 12, 99):
        with pytest.raises(IntervalLookupError):
            TwelveEdoInterval.from_steps(bad)


def test_str_rendering():
    text = str(approximate_ratio(Ratio(3, 2)))
    assert text.startswith("(PerfectFifth, 1.95")
    assert text.endswith(")")


def test_et_frequency():
    assert PerfectFifth.frequency(100.0) == pytest.approx(100.0 * 2 ** (7 / 12))
