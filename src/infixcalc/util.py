from functools import wraps


class CalcError(Exception):
    '''
    Any error the user can cause by typing a bad line.
    '''

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason

    def __str__(self):
        return self.reason


class LexError(CalcError):
    '''
    Unknown identifier or invalid character in the input.
    '''

    def __init__(self, reason, text):
        super().__init__(reason)
        self.text = text

    def __str__(self):
        return '{}: {!r}'.format(self.reason, self.text)


class EvalError(CalcError):
    pass


def wrap_user_errors(fmt, cls=CalcError):
    '''
    Decorator that converts stray exceptions into user errors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise cls(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
