'''
Infix calculator.

Reads arithmetic the way you'd write it on paper: precedence, parentheses,
right-associative powers, scientific notation, pi and e, and a handful of
functions (sin, cos, tan, sqrt, log, ln, exp). Start a line with an operator
to carry on from the previous result.

Every line goes through the same three stages: the lexer turns text into
tokens, the parser reorders them into postfix with the shunting-yard
algorithm, and the machine runs the postfix on a stack.
'''

from .util import CalcError, LexError, EvalError
from .tokens import Token, Kind
from .lexer import Lexer
from .parser import Parser
from .machine import Machine
from .session import Session, render


_lexer = Lexer()
_parser = Parser()


def tokenize(line):
    return _lexer.tokenize(line)


def to_postfix(tokens):
    return _parser.postfix(tokens)


def eval_postfix(postfix):
    return Machine().evaluate(postfix)


def evaluate(line):
    '''
    Run line through the whole pipeline and return its value.
    '''
    return eval_postfix(to_postfix(tokenize(line)))


__all__ = (
    'CalcError', 'LexError', 'EvalError',
    'Token', 'Kind',
    'Lexer', 'Parser', 'Machine', 'Session',
    'tokenize', 'to_postfix', 'eval_postfix', 'evaluate', 'render',
)
