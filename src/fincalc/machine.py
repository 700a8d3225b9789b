import logging
import math
import operator

from .keys import Key, Shift
from .state import CalculatorState, DAY_COUNTS


_logger = logging.getLogger(__name__)


def _divide(y, x):
    if x == 0:
        return math.nan
    return y / x


def _power(y, x):
    '''
    Real y**x: NaN outside the real domain, infinity on overflow.
    '''
    if y == 0 and x < 0:
        return math.inf
    try:
        return math.pow(y, x)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


class Machine:
    '''
    Four-register RPN stack machine (X, Y, Z, T) with F/G shifted keys.

    All changes to the calculator state go through `handle_key` (and the mode
    toggles). Bad arithmetic never raises: it leaves NaN in X.
    '''

    def __init__(self, state=None, saver=None):
        '''
        :param state: CalculatorState to drive; a fresh one if None.
        :param saver: object with `schedule(record)` and `save_now(record)`,
                      told about every change. Optional.
        '''
        self.state = state if state is not None else CalculatorState()
        self.saver = saver
        # What the last dispatch did, for the front end to show.
        self.notice = None
        # True if the last key is acknowledged but not implemented.
        self.placeholder = False

    def handle_key(self, key):
        '''
        Dispatch one logical key press (a Key or its symbol string).
        '''
        self.notice = None
        self.placeholder = False
        parsed = Key.lookup(key)
        if parsed is not None and parsed.shift is not None:
            self._latch(parsed.shift)
        else:
            shift = self._consume_shift()
            if parsed is None:
                _logger.debug('Unrecognized key %r', key)
                self._acknowledge('Function coming soon')
            elif parsed.isdigit:
                # Digits type even when shifted; the shift is just consumed.
                self._digit(parsed)
            else:
                operation = type(self).OPERATIONS.get((parsed, shift))
                if operation is None:
                    operation = type(self).OPERATIONS[parsed, None]
                operation(self)
        # CLEAR saves synchronously itself.
        if parsed is not Key.CLEAR:
            self._schedule_save()

    def _latch(self, shift):
        '''
        Pressing the latched shift again releases it.
        '''
        self.state.shift = None if self.state.shift is shift else shift

    def _consume_shift(self):
        shift, self.state.shift = self.state.shift, None
        return shift

    def _acknowledge(self, message):
        self.notice = message
        self.placeholder = True

    def _schedule_save(self):
        if self.saver is not None:
            self.saver.schedule(self.state.todict())

    # Stack primitives.

    def lift_stack(self):
        state = self.state
        state.t = state.z
        state.z = state.y
        state.y = state.x

    def drop_stack(self):
        state = self.state
        state.x = state.y
        state.y = state.z
        state.z = state.t

    def set_x(self, value, keep_nan=False):
        '''
        Remember X as LAST X, then store value in X.

        Infinities become 0, and so does NaN unless keep_nan is set by a
        computation that yields NaN for an invalid result.
        '''
        self.state.last_x = self.state.x
        if math.isfinite(value) or (keep_nan and math.isnan(value)):
            self.state.x = float(value)
        else:
            self.state.x = 0.0

    def commit_entry(self):
        '''
        Move the number being typed, if any, into X.
        '''
        value = self.state.entry.commit()
        if value is not None:
            self.set_x(value)

    # Data entry.

    def _digit(self, key):
        self.state.entry.input_digit(key.value)

    def dot(self):
        self.state.entry.input_decimal_point()

    def eex(self):
        self.state.entry.input_exponent()

    # Stack operations.

    def enter(self):
        '''
        Duplicate X into Y, finishing any entry.
        '''
        if self.state.entering:
            self.commit_entry()
            self.lift_stack()
            self.state.x = self.state.y
        else:
            self.lift_stack()

    def last_x(self):
        self.commit_entry()
        self.set_x(self.state.last_x)
        self.notice = 'LAST X'

    def recall_last_x(self):
        self.commit_entry()
        self.set_x(self.state.last_x)
        self.notice = 'LSTx'

    def roll_down(self):
        self.commit_entry()
        old_x = self.state.x
        self.drop_stack()
        self.state.t = old_x
        self.notice = 'R\N{DOWNWARDS ARROW}'

    def swap(self):
        self.commit_entry()
        state = self.state
        state.x, state.y = state.y, state.x

    def clx(self):
        self.state.entry.clear()
        self.set_x(0.0)

    def backspace(self):
        '''
        Delete the last typed character, or clear X when not typing.
        '''
        entry = self.state.entry
        if entry.active and entry.text:
            entry.backspace()
        else:
            self.clx()

    def clear(self):
        '''
        Reset everything: stack, registers, statistics, modes.
        '''
        self.state = CalculatorState()
        self.notice = 'Reset'
        if self.saver is not None:
            self.saver.save_now(self.state.todict())

    def chs(self):
        if self.state.entering:
            self.state.entry.toggle_sign()
        else:
            self.set_x(-self.state.x, keep_nan=True)

    def absolute(self):
        self.commit_entry()
        self.set_x(abs(self.state.x), keep_nan=True)
        self.notice = 'ABS'

    # Arithmetic.

    def _binary(f):
        '''
        Build an operation computing f(Y, X) into X, dropping the stack.
        '''
        def operation(self):
            self.commit_entry()
            state = self.state
            self.set_x(f(state.y, state.x), keep_nan=True)
            state.y = state.z
            state.z = state.t
        operation.__name__ = getattr(f, '__name__', 'binary')
        operation.__doc__ = f.__doc__
        return operation

    add = _binary(operator.add)
    subtract = _binary(operator.sub)
    multiply = _binary(operator.mul)
    divide = _binary(_divide)
    power = _binary(_power)

    def sqrt(self):
        self.commit_entry()
        x = self.state.x
        self.set_x(math.nan if x < 0 else math.sqrt(x), keep_nan=True)

    def percent(self):
        '''
        X percent of Y; Y is kept as the base.
        '''
        self.commit_entry()
        self.set_x(self.state.y * (self.state.x / 100), keep_nan=True)
        self.notice = '%'

    def delta_percent(self):
        '''
        Percentage change from Y to X.
        '''
        self.commit_entry()
        x, y = self.state.x, self.state.y
        self.set_x(math.nan if y == 0 else (x - y) / y * 100, keep_nan=True)
        self.notice = '\N{GREEK CAPITAL LETTER DELTA}%'

    # Statistics.

    def sigma_plus(self):
        self.commit_entry()
        self.state.stats.add(self.state.x)
        self.notice = '\N{GREEK CAPITAL LETTER SIGMA}+'

    def sigma_minus(self):
        self.commit_entry()
        self.state.stats.remove()
        self.notice = '\N{GREEK CAPITAL LETTER SIGMA}- (count only)'

    def mean(self):
        self.commit_entry()
        mean = self.state.stats.mean()
        if mean is not None:
            self.set_x(mean, keep_nan=True)
        self.notice = 'x\N{COMBINING MACRON}'

    def standard_deviation(self):
        self.commit_entry()
        variance = self.state.stats.variance()
        self.set_x(math.nan if variance is None else math.sqrt(variance),
                   keep_nan=True)
        self.notice = 's'

    def clear_statistics(self):
        self.commit_entry()
        self.state.stats = type(self.state.stats)()
        self.notice = 'CL\N{GREEK CAPITAL LETTER SIGMA}'

    def show_statistics(self):
        stats = self.state.stats
        self.notice = 'n={} \N{GREEK CAPITAL LETTER SIGMA}x={:.2f} ' \
                      '\N{GREEK CAPITAL LETTER SIGMA}x\N{SUPERSCRIPT TWO}' \
                      '={:.2f}'.format(stats.n, stats.sum_x, stats.sum_x2)

    # Modes. Stored only; nothing computes with them yet.

    def toggle_begin(self):
        self.state.begin = not self.state.begin
        self.notice = 'BEGIN' if self.state.begin else 'END'
        self._schedule_save()

    def toggle_12x(self):
        self.state.is12x = not self.state.is12x
        self.notice = '12\N{MULTIPLICATION SIGN}' if self.state.is12x \
            else '1\N{MULTIPLICATION SIGN}'
        self._schedule_save()

    def toggle_day_count(self):
        current = DAY_COUNTS.index(self.state.day_count)
        self.state.day_count = DAY_COUNTS[(current + 1) % len(DAY_COUNTS)]
        self.notice = self.state.day_count
        self._schedule_save()

    # Acknowledged, not implemented.

    def _placeholder(message):
        def operation(self):
            self._acknowledge(message)
        return operation

    equals = _placeholder('= (program execution coming soon)')
    store = _placeholder('STO: register storage coming soon')
    recall = _placeholder('RCL: register recall coming soon')
    npv = _placeholder('NPV coming soon')
    date = _placeholder('DATE coming soon')

    # (key, shift) to operation. (key, None) is also the fallback for shifts
    # a key doesn't define.
    OPERATIONS = {
        (Key.DOT, None): dot,
        (Key.EEX, None): eex,

        (Key.ENTER, None): enter,
        (Key.ENTER, Shift.F): last_x,
        (Key.ENTER, Shift.G): roll_down,
        (Key.CLX, None): clx,
        (Key.CLX, Shift.G): backspace,
        (Key.CLEAR, None): clear,
        (Key.CHS, None): chs,
        (Key.CHS, Shift.F): absolute,
        (Key.SWAP, None): swap,
        (Key.SWAP, Shift.G): recall_last_x,

        (Key.PLUS, None): add,
        (Key.PLUS, Shift.F): mean,
        (Key.PLUS, Shift.G): standard_deviation,
        (Key.MINUS, None): subtract,
        (Key.MINUS, Shift.F): sigma_plus,
        (Key.MINUS, Shift.G): sigma_minus,
        (Key.MUL, None): multiply,
        (Key.MUL, Shift.G): delta_percent,
        (Key.DIV, None): divide,
        (Key.SQRT, None): sqrt,
        (Key.SQRT, Shift.G): npv,
        (Key.POW, None): power,
        (Key.POW, Shift.G): date,
        (Key.PERCENT, None): percent,

        (Key.EQUALS, None): equals,
        (Key.STO, None): store,
        (Key.RCL, None): recall,
        (Key.SUM, None): show_statistics,
        (Key.SUM, Shift.F): clear_statistics,
    }

    del _binary, _placeholder
