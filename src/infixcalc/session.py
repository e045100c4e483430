import logging
import math

from .util import CalcError


logger = logging.getLogger(__name__)

# A line starting with one of these continues from the last result.
CHAIN_OPERATORS = '+-*/^'

# Overflows to inf when read back.
INFINITY = '1e999'


def render(value):
    '''
    Render a result as text the lexer reads back as the same number.

    Negative numbers come out as (0-x), there being no unary minus. Infinity
    is written as an overflowing literal and nan as infinity minus itself.
    '''
    value = float(value)
    if math.isnan(value):
        return '(' + INFINITY + '-' + INFINITY + ')'
    elif math.isinf(value):
        text = INFINITY if value > 0 else '-' + INFINITY
    else:
        text = repr(value)
    if text.startswith('-'):
        return '(0' + text + ')'
    return text


class Session:
    '''
    Last result and history of the lines that produced results.
    '''

    def __init__(self, evaluate):
        '''
        :param evaluate: Callable taking a line and returning a float.
        '''
        self._evaluate = evaluate
        self.last = None
        self.history = []

    def chain(self, line):
        '''
        Prefix line with the last result if it starts with an operator.
        '''
        stripped = line.lstrip()
        if self.last is not None and stripped and \
           stripped[0] in CHAIN_OPERATORS:
            return render(self.last) + ' ' + line
        return line

    def evaluate(self, line):
        '''
        Evaluate line, remembering it and its result only on success.
        '''
        line = self.chain(line)
        try:
            result = self._evaluate(line)
        except CalcError as e:
            logger.debug('rejected %r: %s', line, e)
            raise
        self.history.append(line)
        self.last = result
        logger.debug('accepted %r = %r', line, result)
        return result

    def clear(self):
        '''
        Forget history and last result.
        '''
        self.history.clear()
        self.last = None
