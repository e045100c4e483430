from enum import Enum
from typing import NamedTuple


class Kind(Enum):
    NUMBER = 'number'
    OPERATOR = 'operator'
    FUNCTION = 'function'
    LEFT_PAREN = 'lparen'
    RIGHT_PAREN = 'rparen'


class Token(NamedTuple):
    text: str
    kind: Kind

    def __repr__(self):
        return 'Token({!r}, {})'.format(self.text, self.kind.name)
