'''
Persisted state record tests
'''

import math

from pytest import raises

from fincalc.keys import Shift
from fincalc.state import CalculatorState


def test_defaults():
    record = CalculatorState().todict()
    assert record['x'] == record['lastX'] == 0
    assert record['entry'] == ''
    assert record['entering'] is False
    assert record['shift'] is None
    assert record['begin'] is False
    assert record['is12x'] is True
    assert record['dayCount'] == '30/360'
    assert record['regs'] == [0] * 10
    assert record['tvm'] == dict.fromkeys(('n', 'i', 'pv', 'pmt', 'fv'))
    assert record['cf'] == {'c0': None, 'cfs': [], 'njs': []}
    assert record['stats'] == {'n': 0, 'sumX': 0, 'sumX2': 0}


def test_fromdict_backfills_missing_fields():
    state = CalculatorState.fromdict({'x': 5, 'shift': 'g', 'entry': '12',
                                      'entering': True})
    assert state.x == 5
    assert state.shift is Shift.G
    assert state.entering
    assert state.entry.text == '12'
    assert state.y == 0
    assert state.is12x


def test_fromdict_keeps_nan():
    state = CalculatorState.fromdict({'x': math.nan})
    assert math.isnan(state.x)


def test_fromdict_rejects_malformed():
    for record in ([1, 2],
                   {'x': 'five'},
                   {'regs': [0] * 3},
                   {'dayCount': 'ACT/365'},
                   {'stats': {'n': 2}},
                   {'shift': 'h'},
                   {'tvm': 'nope'},
                   {'begin': 1}):
        with raises((ValueError, TypeError, KeyError, AttributeError)):
            CalculatorState.fromdict(record)
