from pytest import Item, fixture

from fincalc.lexer import Lexer
from fincalc.machine import Machine


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, e.g. to see which keys a stack check followed.

    Excessive in most cases. Needs enable_assertion_pass_hook = true in the
    ini file; use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


class RecordingSaver:
    '''
    Stands in for DebouncedSaver; remembers what it was asked to save.
    '''

    def __init__(self):
        self.scheduled = []
        self.saved = []

    def schedule(self, record):
        self.scheduled.append(record)

    def save_now(self, record):
        self.saved.append(record)


@fixture
def saver():
    return RecordingSaver()


@fixture
def machine(saver):
    return Machine(saver=saver)


@fixture
def press():
    '''
    Feed a typed line (e.g. '12 enter 3 +') to a machine, key by key.
    '''
    lexer = Lexer()

    def press(machine, line):
        for match in lexer.lex(line):
            for key in lexer.keys(lexer.matchedgroups(match)):
                machine.handle_key(key)
        return machine.state
    return press
