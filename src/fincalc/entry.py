import math

import regex


class EntryBuffer:
    '''
    Number being typed, kept as text until it is committed to the stack.
    '''

    MAX_LENGTH = 18
    WHITESPACE = regex.compile(r'\s+')

    def __init__(self, text='', active=False):
        self.text = text
        self.active = active

    def start_if_needed(self):
        '''
        Begin a new entry unless one is already in progress.
        '''
        if not self.active:
            self.text = ''
            self.active = True

    def input_digit(self, digit):
        self.start_if_needed()
        if len(self.text) >= type(self).MAX_LENGTH:
            return
        # No leading zeroes.
        if self.text == '0':
            self.text = ''
        self.text += str(digit)

    def input_decimal_point(self):
        self.start_if_needed()
        if '.' in self.text:
            return
        if self.text in ('', '-'):
            self.text += '0'
        self.text += '.'

    def input_exponent(self):
        '''
        Append the exponent marker (EEX); at most one per entry.
        '''
        self.start_if_needed()
        if 'e' not in self.text.lower():
            self.text += 'e'

    def toggle_sign(self):
        if self.text.startswith('-'):
            self.text = self.text[1:]
        else:
            self.text = '-' + self.text

    def backspace(self):
        if self.active and self.text:
            self.text = self.text[:-1]

    def clear(self):
        self.text = ''
        self.active = False

    def commit(self):
        '''
        End the entry and return its value, or None if nothing was entered.
        '''
        if not self.active:
            return None
        value = type(self).parse(self.text)
        self.clear()
        return value

    @classmethod
    def parse(cls, text):
        '''
        Convert entry text to a float. Never raises; bad text is 0.
        '''
        if not text or text in ('-', '+'):
            return 0.0
        normalized = cls.WHITESPACE.sub('', text)
        # float() would read 1_000 as a thousand.
        if '_' in normalized:
            return 0.0
        try:
            value = float(normalized)
        except ValueError:
            return 0.0
        return value if math.isfinite(value) else 0.0
