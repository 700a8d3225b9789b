'''
What the calculator shows.
'''

from decimal import Decimal, ROUND_HALF_UP
import math
import sys


ERROR = 'Error'
CENT = Decimal('0.01')


def round2(n):
    '''
    Round to cents, half away from zero.

    Nudges by machine epsilon first so that 1.005, stored as
    1.00499999..., still rounds up.
    '''
    magnitude = Decimal(abs(n) + sys.float_info.epsilon)
    rounded = float(magnitude.quantize(CENT, rounding=ROUND_HALF_UP))
    return math.copysign(rounded, n) if rounded else 0.0


def format_number(n):
    if math.isnan(n):
        return ERROR
    if not math.isfinite(n):
        n = 0.0
    return '{:,.2f}'.format(round2(n))


def display_value(state):
    '''
    Text of the main display: the raw entry while typing, X otherwise.
    '''
    if state.entering:
        return state.entry.text or '0'
    return format_number(state.x)


def format_stack(state):
    '''
    Lines for T, Z, Y and X, X last like on paper.
    '''
    labels = 'XYZT'
    values = [format_number(n) for n in state.stack]
    values[0] = display_value(state)
    width = max(map(len, values))
    return ['{}: {:>{}}'.format(label, value, width)
            for label, value in reversed(list(zip(labels, values)))]
