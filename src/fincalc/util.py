from functools import wraps
import threading


class CalculatorError(Exception):
    pass


def swallow_errors(logger, fmt, default=None):
    '''
    Decorator that logs exceptions instead of raising them.

    For best-effort side work (saving, loading) that must never disturb the
    calculator. The message is formatted with the call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except Exception as e:
                logger.debug(fmt.format(*args, **kwargs) + ': %s', e)
                return default
        return wrapper
    return decorator


class Debouncer:
    '''
    Trailing-edge debounce of a one-argument callable.

    Each call restarts the timer and replaces the pending argument; only the
    last argument within the wait window reaches the callable.
    '''

    def __init__(self, f, wait):
        self.f = f
        self.wait = wait
        self._lock = threading.Lock()
        # Held while f runs, so calls never overlap and flush waits for them.
        self._calling = threading.Lock()
        self._timer = None
        self._pending = None
        self._has_pending = False

    def __call__(self, arg):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = arg
            self._has_pending = True
            self._timer = threading.Timer(self.wait, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self):
        return self._has_pending

    def _take(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            if not self._has_pending:
                return False, None
            arg, self._pending = self._pending, None
            self._has_pending = False
            return True, arg

    def _fire(self):
        with self._calling:
            ready, arg = self._take()
            if ready:
                self.f(arg)

    def flush(self):
        '''
        Run the pending call now, if any, after any call in progress.
        '''
        self._fire()

    def cancel(self):
        '''
        Drop the pending call without running it. Waits for a call in
        progress.
        '''
        with self._calling:
            self._take()

    def call_now(self, arg):
        '''
        Call f with arg immediately, replacing the pending call.
        '''
        with self._calling:
            self._take()
            self.f(arg)
