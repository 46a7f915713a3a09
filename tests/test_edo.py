from __future__ import annotations

import pytest

from ji_engine.edo import Edo, EdoInterval
from ji_engine.interval import TwelveEdoInterval


def test_interval():
    twelve = Edo(12)

    fifth = twelve.interval(7)
    assert fifth.steps == 7
    assert fifth.edo == twelve
    assert fifth.cents == 700.0

    sixth = twelve.interval(9)
    assert sixth.steps == 9
    assert sixth.edo == twelve
    assert sixth.cents == 900.0


def test_non_12_edo():
    fifty_three = Edo(53)
    fifth = fifty_three.interval(31)
    assert fifth.steps == 31
    assert fifth.divisions == 53
    assert fifth.cents == pytest.approx(701.887, abs=1e-3)


def test_closest_12_edo():
    fifth = Edo(12).interval(7).to_approximate_12_edo_interval()
    assert fifth == (TwelveEdoInterval.PerfectFifth, 0.0)

    fifth53 = Edo(53).interval(31).to_approximate_12_edo_interval()
    assert fifth53.interval == TwelveEdoInterval.PerfectFifth
    assert abs(fifth53.cents - 1.8868) < 0.0001


def test_intervals_cover_unison_through_octave():
    steps = list(Edo(5).intervals())
    assert [i.steps for i in steps] == [0, 1, 2, 3, 4, 5]
    assert steps[0].cents == 0.0
    assert steps[-1].cents == 1200.0
    # The octave rounds back onto the unison name
    assert steps[-1].to_approximate_12_edo_interval() == (TwelveEdoInterval.PerfectUnison, 0.0)


def test_nineteen_edo_third():
    approx = Edo(19).interval(6).to_approximate_12_edo_interval()
    assert approx.interval == TwelveEdoInterval.MajorThird
    assert approx.cents == pytest.approx(1200 * 6 / 19 - 400)


def test_invalid_divisions():
    with pytest.raises(ValueError):
        Edo(0)
    with pytest.raises(ValueError):
        EdoInterval(0, 1)


def test_frequency_and_str():
    octave = Edo(31).interval(31)
    assert octave.frequency(220.0) == pytest.approx(440.0)
    assert str(Edo(53).interval(31)) == "31/53"
