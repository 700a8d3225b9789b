'''
Display formatting tests
'''

import math

from fincalc.display import display_value, format_number, format_stack, round2
from fincalc.machine import Machine


def test_round2():
    assert round2(1.005) == 1.01
    assert round2(-1.005) == -1.01
    assert round2(2.344) == 2.34
    assert round2(-0.001) == 0


def test_format_number():
    assert format_number(1234.5) == '1,234.50'
    assert format_number(-0.001) == '0.00'
    assert format_number(math.nan) == 'Error'
    assert format_number(math.inf) == '0.00'


def test_display_while_entering():
    m = Machine()
    m.handle_key('dot')
    assert display_value(m.state) == '0.'
    m.handle_key('clx')
    m.handle_key('g')
    assert display_value(m.state) == '0.00'


def test_display_empty_entry():
    m = Machine()
    m.handle_key('1')
    m.handle_key('g')
    m.handle_key('clx')
    assert m.state.entering
    assert display_value(m.state) == '0'


def test_format_stack():
    m = Machine()
    for key in '1', 'enter', '2', 'enter', '3':
        m.handle_key(key)
    lines = format_stack(m.state)
    assert [line[0] for line in lines] == ['T', 'Z', 'Y', 'X']
    assert lines[-1].endswith(' 3')
    assert lines[-2].endswith('2.00')
