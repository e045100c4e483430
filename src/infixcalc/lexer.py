from functools import reduce
import logging
import operator

import regex

from .util import LexError
from .tokens import Token, Kind
from .machine import Machine


logger = logging.getLogger(__name__)


class Lexer:
    '''
    Lexer for infix arithmetic.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Greedy on purpose: '.', '1.2.3' and '1e' all lex as numbers and are
    # rejected by the machine when converted.
    NUMBER = r'''
              [0-9.]+
              (?:
                  # 1e3, 1E-3, 1e+3
                  [eE]
                  [+-]?
                  [0-9]*
              )?
              '''
    # Longest first, so ** wins over *.
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                       sorted(Machine.OPERATORS,
                                              key=len,
                                              reverse=True))) + r')'
    # Function or constant; letters only.
    NAME = r'[A-Za-z]+'
    SPACE = r'\s+'

    # All possible lexemes. Anything else is a single invalid character.
    LEXEME = r'(?<space>' + SPACE + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<name>' + NAME + r')|' \
             r'(?<invalid>.)'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, FLAGS)

    KINDS = {
        'number': Kind.NUMBER,
        'lparen': Kind.LEFT_PAREN,
        'rparen': Kind.RIGHT_PAREN,
        'operator': Kind.OPERATOR,
    }

    def lex(self, line):
        '''
        Take a line and yield all lexeme matches, whitespace included.
        '''
        pos = 0
        while pos < len(line):
            match = type(self).PATTERN.match(line, pos)
            yield match
            pos = match.end()

    def tokenize(self, line):
        '''
        Take a line and return its tokens.

        Constants are replaced by number tokens. Stops on the first unknown
        identifier or invalid character.
        '''
        tokens = [self.token(match)
                  for match
                  in self.lex(line)
                  if match.lastgroup != 'space']
        logger.debug('tokenized %r: %r', line, tokens)
        return tokens

    def token(self, match):
        '''
        Turn a single non-space lexeme match into a token.
        '''
        group = match.lastgroup
        text = match.group(0)
        if group in type(self).KINDS:
            return Token(text, type(self).KINDS[group])
        elif group == 'name':
            if text in Machine.FUNCTIONS:
                return Token(text, Kind.FUNCTION)
            elif text in Machine.CONSTANTS:
                return Token(repr(Machine.CONSTANTS[text]), Kind.NUMBER)
            raise LexError('Unknown identifier', text)
        raise LexError('Invalid character', text)
