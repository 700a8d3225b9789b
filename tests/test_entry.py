'''
Entry buffer tests
'''

from fincalc.entry import EntryBuffer


def test_digits_append():
    e = EntryBuffer()
    e.input_digit('5')
    e.input_digit('0')
    assert e.active
    assert e.text == '50'
    assert e.commit() == 50


def test_leading_zero_replaced():
    e = EntryBuffer()
    e.input_digit('0')
    e.input_digit('5')
    assert e.text == '5'


def test_length_bounded():
    e = EntryBuffer()
    for _ in range(25):
        e.input_digit('7')
    assert len(e.text) == EntryBuffer.MAX_LENGTH


def test_decimal_point():
    e = EntryBuffer()
    e.input_decimal_point()
    assert e.text == '0.'
    e.input_digit('2')
    e.input_decimal_point()
    assert e.text == '0.2'


def test_decimal_point_after_sign():
    e = EntryBuffer()
    e.start_if_needed()
    e.toggle_sign()
    e.input_decimal_point()
    assert e.text == '-0.'


def test_exponent_once():
    e = EntryBuffer()
    e.input_digit('1')
    e.input_exponent()
    e.input_exponent()
    e.input_digit('3')
    assert e.text == '1e3'
    assert e.commit() == 1000


def test_toggle_sign():
    e = EntryBuffer()
    e.input_digit('4')
    e.toggle_sign()
    assert e.text == '-4'
    e.toggle_sign()
    assert e.text == '4'


def test_backspace_keeps_entry_active():
    e = EntryBuffer()
    e.input_digit('9')
    e.backspace()
    e.backspace()
    assert e.text == ''
    assert e.active


def test_start_if_needed_is_idempotent():
    e = EntryBuffer()
    e.input_digit('3')
    e.start_if_needed()
    assert e.text == '3'


def test_commit_inactive():
    e = EntryBuffer()
    assert e.commit() is None


def test_commit_deactivates():
    e = EntryBuffer()
    e.input_digit('8')
    e.commit()
    assert not e.active
    assert e.text == ''


def test_parse():
    assert EntryBuffer.parse('') == 0
    assert EntryBuffer.parse('-') == 0
    assert EntryBuffer.parse('+') == 0
    assert EntryBuffer.parse('1 2') == 12
    assert EntryBuffer.parse('-0.5') == -0.5
    assert EntryBuffer.parse('7.') == 7
    assert EntryBuffer.parse('1e') == 0
    assert EntryBuffer.parse('garbage') == 0
    assert EntryBuffer.parse('1e999') == 0
    assert EntryBuffer.parse('nan') == 0
    assert EntryBuffer.parse('1_000') == 0
