'''
RPN financial calculator.

A four-register stack calculator (X, Y, Z, T) in the style of the classic
financial calculators: numbers are keyed in, ENTER pushes them, and
operators consume Y and X. The F and G shift keys give every key a second
and third function: LAST X, roll down, ABS, the Σ statistics registers,
percentage change.

What's not here yet: time value of money, cash flows, amortization, dates,
STO/RCL and programs. Their keys are accepted and acknowledged, nothing more.

Bad arithmetic (division by zero, square roots of negatives) leaves NaN in X
rather than raising, shown as "Error". The calculator never refuses input.
'''

# TODO: Use the BEGIN/END and 12x modes once TVM lands.

from .cli import CLI
from .keys import Key, Shift
from .machine import Machine
from .state import CalculatorState


__all__ = 'Machine', 'CalculatorState', 'Key', 'Shift', 'CLI'
