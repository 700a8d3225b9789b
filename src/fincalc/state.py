'''
Calculator state and its persisted record.

The record layout (field names included) is shared with the state file, so
`CalculatorState.todict` and `CalculatorState.fromdict` are the only places
that know about it.
'''

import math

from .entry import EntryBuffer
from .keys import Shift


DAY_COUNTS = ('30/360', 'ACT/ACT')


class Statistics:
    '''
    Running Σ accumulator: count, sum and sum of squares.
    '''

    def __init__(self, n=0, sum_x=0.0, sum_x2=0.0):
        self.n = n
        self.sum_x = sum_x
        self.sum_x2 = sum_x2

    def add(self, x):
        self.n += 1
        self.sum_x += x
        self.sum_x2 += x * x

    def remove(self):
        # Only the count: without the samples there is nothing to subtract.
        self.n = max(0, self.n - 1)

    def mean(self):
        if self.n > 0:
            return self.sum_x / self.n
        return None

    def variance(self):
        '''
        Sample variance, clamped at zero; None below two samples.
        '''
        if self.n < 2:
            return None
        mean = self.sum_x / self.n
        variance = (self.sum_x2 - self.n * mean * mean) / (self.n - 1)
        if math.isnan(variance):
            return variance
        return max(0.0, variance)

    def __eq__(self, other):
        if not isinstance(other, Statistics):
            return NotImplemented
        return (self.n, self.sum_x, self.sum_x2) == \
               (other.n, other.sum_x, other.sum_x2)

    def __repr__(self):
        return 'Statistics(n={}, sum_x={}, sum_x2={})'.format(
            self.n, self.sum_x, self.sum_x2)


class CalculatorState:
    '''
    Everything the calculator remembers between key presses.
    '''

    REGISTER_COUNT = 10
    TVM_FIELDS = ('n', 'i', 'pv', 'pmt', 'fv')

    def __init__(self):
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0
        self.t = 0.0
        self.last_x = 0.0
        self.entry = EntryBuffer()
        self.shift = None
        self.begin = False
        self.is12x = True
        self.day_count = DAY_COUNTS[0]
        self.registers = [0.0] * type(self).REGISTER_COUNT
        self.tvm = dict.fromkeys(type(self).TVM_FIELDS)
        self.cash_flows = {'c0': None, 'cfs': [], 'njs': []}
        self.stats = Statistics()

    @property
    def stack(self):
        '''
        Stack registers, X first.
        '''
        return self.x, self.y, self.z, self.t

    @property
    def entering(self):
        return self.entry.active

    def todict(self):
        '''
        Return the persisted record for this state.
        '''
        return {
            'x': self.x,
            'y': self.y,
            'z': self.z,
            't': self.t,
            'lastX': self.last_x,
            'entry': self.entry.text,
            'entering': self.entry.active,
            'shift': self.shift.value if self.shift else None,
            'begin': self.begin,
            'is12x': self.is12x,
            'dayCount': self.day_count,
            'regs': list(self.registers),
            'tvm': dict(self.tvm),
            'cf': {
                'c0': self.cash_flows['c0'],
                'cfs': list(self.cash_flows['cfs']),
                'njs': list(self.cash_flows['njs']),
            },
            'stats': {
                'n': self.stats.n,
                'sumX': self.stats.sum_x,
                'sumX2': self.stats.sum_x2,
            },
        }

    @classmethod
    def fromdict(cls, record):
        '''
        Build a state from a persisted record.

        Missing top-level fields take their defaults. Malformed data raises
        (ValueError, TypeError, KeyError or AttributeError); callers fall back
        to defaults.
        '''
        if not isinstance(record, dict):
            raise TypeError('State record must be a mapping, not {}'.format(
                type(record).__name__))
        merged = cls().todict()
        merged.update(record)

        state = cls()
        state.x = _number(merged['x'])
        state.y = _number(merged['y'])
        state.z = _number(merged['z'])
        state.t = _number(merged['t'])
        state.last_x = _number(merged['lastX'])
        state.entry = EntryBuffer(_string(merged['entry']),
                                  _boolean(merged['entering']))
        state.shift = Shift(merged['shift']) if merged['shift'] else None
        state.begin = _boolean(merged['begin'])
        state.is12x = _boolean(merged['is12x'])
        if merged['dayCount'] not in DAY_COUNTS:
            raise ValueError('Unknown day count {!r}'.format(
                merged['dayCount']))
        state.day_count = merged['dayCount']

        regs = [_number(r) for r in merged['regs']]
        if len(regs) != cls.REGISTER_COUNT:
            raise ValueError('Expected {} registers, got {}'.format(
                cls.REGISTER_COUNT, len(regs)))
        state.registers = regs

        tvm = merged['tvm']
        state.tvm = {field: _optional_number(tvm.get(field))
                     for field in cls.TVM_FIELDS}

        cf = merged['cf']
        state.cash_flows = {
            'c0': _optional_number(cf.get('c0')),
            'cfs': [_number(v) for v in cf.get('cfs', [])],
            'njs': [_number(v) for v in cf.get('njs', [])],
        }

        stats = merged['stats']
        n = stats['n']
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError('Bad statistics count {!r}'.format(n))
        state.stats = Statistics(n,
                                 _number(stats['sumX']),
                                 _number(stats['sumX2']))
        return state


def _number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError('Expected a number, got {!r}'.format(value))
    return float(value)


def _optional_number(value):
    return None if value is None else _number(value)


def _boolean(value):
    if not isinstance(value, bool):
        raise TypeError('Expected a boolean, got {!r}'.format(value))
    return value


def _string(value):
    if not isinstance(value, str):
        raise TypeError('Expected a string, got {!r}'.format(value))
    return value
