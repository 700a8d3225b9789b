'''
Σ statistics tests
'''

import math

from pytest import approx

from fincalc.state import Statistics


def test_mean_and_standard_deviation(machine, press):
    s = press(machine, '1 f - 2 f - 3 f -')
    assert s.stats == Statistics(3, 6, 14)
    assert press(machine, 'f +').x == approx(2)
    assert press(machine, 'g +').x == approx(1)


def test_sigma_plus_commits_entry(machine, press):
    s = press(machine, '4 f -')
    assert not s.entering
    assert s.x == 4
    assert s.stats.n == 1


def test_sigma_minus_only_counts(machine, press):
    s = press(machine, '3 f - g -')
    assert s.stats.n == 0
    assert s.stats.sum_x == 3
    assert s.stats.sum_x2 == 9
    s = press(machine, 'g -')
    assert s.stats.n == 0


def test_mean_without_samples_leaves_x(machine, press):
    s = press(machine, '8 f +')
    assert s.x == 8


def test_standard_deviation_needs_two_samples(machine, press):
    s = press(machine, '5 f - g +')
    assert math.isnan(s.x)


def test_identical_samples():
    stats = Statistics()
    for _ in range(3):
        stats.add(0.1)
    assert stats.variance() >= 0


def test_clear_statistics(machine, press):
    s = press(machine, '5 f - 6 f - f sum')
    assert s.stats == Statistics()
    assert s.x == 6


def test_sum_key_shows_panel(machine, press):
    s = press(machine, '5 f -')
    before = s.todict()
    press(machine, 'sum')
    assert machine.notice.startswith('n=1')
    assert not machine.placeholder
    assert machine.state.todict() == before
