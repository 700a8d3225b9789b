'''
State file: JSON, written atomically, read back leniently.

Saving is best effort. A calculator that can't write its state file keeps
working from memory; failures only show up in the debug log.
'''

from os import environ, path
import json
import logging
import os

from .state import CalculatorState
from .util import Debouncer, swallow_errors


_logger = logging.getLogger(__name__)


class StateStore:
    '''
    Load and save a CalculatorState record in a JSON file.
    '''

    ENVIRONMENT_VARIABLE = 'FINCALC_STATE'
    DEFAULT_PATH = '~/.fincalc_state.json'

    def __init__(self, file_path=None):
        if file_path is None:
            file_path = environ.get(type(self).ENVIRONMENT_VARIABLE,
                                    type(self).DEFAULT_PATH)
        self.path = path.expanduser(file_path)

    def load(self):
        '''
        Return the stored state, or a default one if there is none or it's
        unreadable.
        '''
        try:
            with open(self.path, encoding='utf-8') as fp:
                record = json.load(fp)
        except FileNotFoundError:
            return CalculatorState()
        except (OSError, ValueError) as e:
            _logger.debug('Cannot read state file %s: %s', self.path, e)
            return CalculatorState()
        try:
            return CalculatorState.fromdict(record)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            _logger.debug('Malformed state file %s: %s', self.path, e)
            return CalculatorState()

    @swallow_errors(_logger, 'Cannot save state to {0.path}')
    def save(self, record):
        '''
        Write record, replacing the file in one step.
        '''
        directory = path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        temporary = path.join(directory, '.tmp-' + path.basename(self.path))
        with open(temporary, 'w', encoding='utf-8') as fp:
            json.dump(record, fp, indent=2, ensure_ascii=False)
        os.replace(temporary, self.path)
        _logger.debug('Saved state to %s', self.path)


class DebouncedSaver:
    '''
    Coalesces saves: only the last record within `wait` seconds is written.
    '''

    DEFAULT_WAIT = 0.25

    def __init__(self, store, wait=None):
        self.store = store
        self._debouncer = Debouncer(store.save,
                                    type(self).DEFAULT_WAIT
                                    if wait is None else wait)

    def schedule(self, record):
        self._debouncer(record)

    def save_now(self, record):
        '''
        Write record immediately, dropping anything pending.
        '''
        self._debouncer.call_now(record)

    def flush(self):
        self._debouncer.flush()
