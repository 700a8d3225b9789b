from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .display import display_value, format_stack
from .lexer import Lexer
from .machine import Machine
from .state import CalculatorState
from .storage import DebouncedSaver, StateStore
from .util import CalculatorError


_logger = logging.getLogger(__name__)

_MESSAGE_FORMAT = '%(asctime)s,%(msecs)03d %(levelname)-8s %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class InteractiveInput:
    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def __iter__(self):
        try:
            history = None
            if self.history_file is not None:
                history = FileHistory(path.expanduser(self.history_file))
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.fincalc_history'

    # Mode commands (:begin and friends) to machine toggles.
    COMMANDS = {
        'begin': Machine.toggle_begin,
        'end': Machine.toggle_begin,
        '12x': Machine.toggle_12x,
        '1x': Machine.toggle_12x,
        'daycount': Machine.toggle_day_count,
    }

    def dumper(self):
        '''
        Dump the logical keys each line lexes to, without running them.
        '''
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                keys = []
                for match in lexer.lex(line):
                    groups = lexer.matchedgroups(match)
                    command = lexer.command(groups)
                    if command is not None:
                        keys.append(':' + command)
                    keys.extend(getattr(key, 'value', key)
                                for key in lexer.keys(groups))
                print(*keys)
            except CalculatorError as e:
                print(e.args[0], file=stderr)

    def executor(self):
        '''
        Run the calculator on each line, then show the display.
        '''
        machine = self.machine = self._create_machine()
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    groups = lexer.matchedgroups(match)
                    command = lexer.command(groups)
                    if command is not None:
                        self._run_command(machine, command)
                    for key in lexer.keys(groups):
                        machine.handle_key(key)
            # Abort entire rest of line, makes sense anyway
            except CalculatorError as e:
                print(e.args[0], file=stderr)
            self.show(machine)

    def _run_command(self, machine, command):
        toggle = type(self).COMMANDS.get(command.lower())
        if toggle is None:
            raise CalculatorError('No such command :{}'.format(command))
        toggle(machine)

    def show(self, machine):
        if machine.notice:
            print('[{}]'.format(machine.notice), file=stderr)
        if self.args.stack:
            print(*format_stack(machine.state), sep='\n')
        else:
            print(display_value(machine.state))

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.HISTORY_FILE)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='RPN financial calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-s', '--stack',
                                          action='store_true',
                                          help='show T, Z, Y and X')
        state_group = self.argument_parser.add_mutually_exclusive_group()
        state_group.add_argument('--state', metavar='FILE',
                                 help='state file (default ${} or {})'.format(
                                     StateStore.ENVIRONMENT_VARIABLE,
                                     StateStore.DEFAULT_PATH))
        state_group.add_argument('--no-save', action='store_true',
                                 help="don't read or write the state file")
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)
        self.machine = None
        self.saver = None

    def _configure_logging(self):
        logging.basicConfig(format=_MESSAGE_FORMAT, datefmt=_DATE_FORMAT,
                            level=logging.DEBUG if self.args.verbose
                            else logging.WARNING)

    def _create_machine(self):
        if self.args.no_save:
            return Machine(CalculatorState())
        store = StateStore(self.args.state)
        self.saver = DebouncedSaver(store)
        _logger.debug('Using state file %s', store.path)
        return Machine(store.load(), self.saver)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        self._configure_logging()
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
        finally:
            if self.saver is not None:
                self.saver.flush()


def main():
    CLI().run()
