'''
Key lexer tests
'''

import regex

from fincalc.keys import Key
from fincalc.lexer import Lexer
from fincalc.util import CalculatorError

from pytest import raises


def keys(line):
    l = Lexer()
    return [key
            for match in l.lex(line)
            for key in l.keys(l.matchedgroups(match))]


def test_numbers_become_digits():
    assert keys('12.5') == [Key.D1, Key.D2, Key.DOT, Key.D5]
    assert keys('.5') == [Key.DOT, Key.D5]
    assert keys('3,') == [Key.D3, Key.DOT]


def test_words():
    assert keys('5 ENTER 3 chs') == [Key.D5, Key.ENTER, Key.D3, Key.CHS]


def test_symbols():
    assert keys('+-*/^%=') == [Key.PLUS, Key.MINUS, Key.MUL, Key.DIV,
                               Key.POW, Key.PERCENT, Key.EQUALS]


def test_number_then_word():
    assert keys('2enter') == [Key.D2, Key.ENTER]


def test_unknown_word_passes_through():
    assert keys('amort') == ['amort']


def test_command():
    l = Lexer()
    matches = list(l.lex(':begin 1'))
    assert l.command(l.matchedgroups(matches[0])) == 'begin'
    assert l.command(l.matchedgroups(matches[-1])) is None


def test_unlexable():
    with raises(CalculatorError, match=regex.escape("Couldn't lex #")):
        keys('5 #')
