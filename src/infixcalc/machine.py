import logging
import math
from collections import deque
from types import MappingProxyType
from typing import Callable, NamedTuple

import numpy as np

from .tokens import Kind
from .util import EvalError, wrap_user_errors


logger = logging.getLogger(__name__)

LEFT = 'left'
RIGHT = 'right'


class Operator(NamedTuple):
    precedence: int
    associativity: str
    function: Callable

    @property
    def right(self):
        return self.associativity == RIGHT


def _divide(left, right):
    if right == 0:
        raise EvalError('Divide by zero')
    return np.true_divide(left, right)


class Machine:
    '''
    Arithmetic stack machine.

    Takes postfix tokens and reduces them to a single float. Each evaluation
    starts from an empty stack, so one machine may be reused line after line.
    '''

    # Binary operators on the items of a machine.
    OPERATORS = MappingProxyType({
        '^': Operator(4, RIGHT, np.power),
        # Python spelling of ^
        '**': Operator(4, RIGHT, np.power),
        '*': Operator(3, LEFT, np.multiply),
        '/': Operator(3, LEFT, _divide),
        '+': Operator(2, LEFT, np.add),
        '-': Operator(2, LEFT, np.subtract),
    })

    # Unary functions, in radians where it matters.
    FUNCTIONS = MappingProxyType({
        'sin': np.sin,
        'cos': np.cos,
        'tan': np.tan,
        'sqrt': np.sqrt,
        'log': np.log10,
        'ln': np.log,
        'exp': np.exp,
    })

    # Replaced by their value at lex time; never reach the machine by name.
    CONSTANTS = MappingProxyType({
        'pi': math.pi,
        'e': math.e,
    })

    def __init__(self):
        '''
        Create empty stack machine.
        '''
        self.stack = deque()

    def evaluate(self, postfix):
        '''
        Run postfix tokens and return the one value left on the stack.
        '''
        self.stack.clear()
        # sqrt(-1), ln(0), 10^400 and friends give nan/inf, not exceptions.
        with np.errstate(all='ignore'):
            for token in postfix:
                self.feed(token)
        if len(self.stack) != 1:
            raise EvalError('Invalid expression')
        result = float(self.stack.pop())
        logger.debug('%r -> %r', postfix, result)
        return result

    def feed(self, token):
        '''
        Stack or run a single token on the machine.
        '''
        if token.kind is Kind.NUMBER:
            self._pshstack(self._iconvert(token.text))
        elif token.kind is Kind.FUNCTION:
            function = type(self).FUNCTIONS[token.text]
            only, = self._popstack(1, 'Missing operand for function')
            self._pshstack(function(only))
        elif token.kind is Kind.OPERATOR:
            function = type(self).OPERATORS[token.text].function
            # Topmost is the right operand.
            right, left = self._popstack(2, 'Missing operands')
            self._pshstack(function(left, right))
        else:
            # Stray parenthesis the parser let through.
            raise EvalError('Invalid expression')

    @wrap_user_errors('Invalid number {1}', EvalError)
    def _iconvert(self, number):
        '''
        Convert number lexeme to a float.

        The lexer is greedy, so '.', '1e' and '1.2.3' arrive here and fail.
        '''
        return float(number)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1, message='Missing operands'):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise EvalError(message)
        return [self.stack.pop() for _ in range(n)]
