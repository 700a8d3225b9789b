'''
Logical keys of the calculator keyboard.
'''

from enum import Enum


class Shift(Enum):
    F = 'f'
    G = 'g'


class Key(Enum):
    D0 = '0'
    D1 = '1'
    D2 = '2'
    D3 = '3'
    D4 = '4'
    D5 = '5'
    D6 = '6'
    D7 = '7'
    D8 = '8'
    D9 = '9'
    DOT = 'dot'
    EEX = 'eex'

    ENTER = 'enter'
    CLX = 'clx'
    CLEAR = 'clear'
    CHS = 'chs'
    SWAP = 'swap'

    PLUS = 'plus'
    MINUS = 'minus'
    MUL = 'mul'
    DIV = 'div'
    SQRT = 'sqrt'
    POW = 'pow'
    PERCENT = 'percent'

    EQUALS = 'equals'
    STO = 'sto'
    RCL = 'rcl'
    SUM = 'sum'

    F = 'f'
    G = 'g'

    @property
    def isdigit(self):
        return self.value.isdigit()

    @property
    def shift(self):
        '''
        The shift this key latches, or None for ordinary keys.
        '''
        if self is Key.F:
            return Shift.F
        elif self is Key.G:
            return Shift.G
        return None

    @classmethod
    def lookup(cls, name):
        '''
        Return the key for a logical key symbol, or None if unrecognized.
        '''
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            return None

