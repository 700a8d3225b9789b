from functools import reduce
import operator

import regex

from .keys import Key
from .util import CalculatorError


class Lexer:
    '''
    Lexer turning a typed line into logical key presses.

    Numbers become their digit and dot keys, words are key names, and the
    usual arithmetic symbols stand for their keys. Holds no state.
    '''
    # Number as typed on the keypad: 12, 12., 1.5 or .5
    NUMBER = r'''
              (?:
                  [0-9]+
                  (?:
                      [.,]
                      [0-9]*
                  )?
              )|(?:
                  [.,]
                  [0-9]+
              )
              '''
    # Key name, or any other word; unknown words are still keys, just ones
    # the machine only acknowledges.
    WORD = r'[^\W\d]\w*'
    # Mode toggles aren't keys.
    COMMAND = r':(?<__command__>[\w/]+)'

    SYMBOLS = {
        '+': Key.PLUS,
        '-': Key.MINUS,
        '*': Key.MUL,
        '/': Key.DIV,
        '^': Key.POW,
        '%': Key.PERCENT,
        '=': Key.EQUALS,
        '.': Key.DOT,
        ',': Key.DOT,
    }
    SYMBOL = r'(?:' + r'|'.join(map(regex.escape, SYMBOLS)) + r')'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<command>' + COMMAND + r')|' \
             r'(?<word>' + WORD + r')|' \
             r'(?<symbol>' + SYMBOL + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises CalculatorError on the first thing that isn't a lexeme.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalculatorError("Couldn't lex {0}".format(line.strip()))

    def matchedgroups(self, match):
        '''
        Return the lexeme's non-empty named groups.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def keys(self, groups):
        '''
        Yield the key presses for a lexeme's groups.

        Known key names come out as Key, unknown words as plain strings.
        '''
        if 'number' in groups:
            for char in groups['number']:
                if char.isdigit():
                    yield Key(char)
                else:
                    yield Key.DOT
        elif 'word' in groups:
            word = groups['word'].lower()
            key = Key.lookup(word)
            yield key if key is not None else word
        elif 'symbol' in groups:
            yield type(self).SYMBOLS[groups['symbol']]

    def command(self, groups):
        '''
        Return the mode command of a lexeme, or None if it's not one.
        '''
        return groups.get('__command__')
