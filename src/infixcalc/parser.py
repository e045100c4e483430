import logging

from .tokens import Kind
from .machine import Machine


logger = logging.getLogger(__name__)


class Parser:
    '''
    Shunting-yard conversion of infix tokens to postfix.

    Never fails. Unbalanced parentheses are tolerated here and left for the
    machine to trip over.
    '''

    def postfix(self, tokens):
        '''
        Reorder infix tokens into postfix, by precedence and associativity.
        '''
        output = []
        stack = []
        for token in tokens:
            if token.kind is Kind.NUMBER:
                output.append(token)
            elif token.kind in (Kind.FUNCTION, Kind.LEFT_PAREN):
                stack.append(token)
            elif token.kind is Kind.OPERATOR:
                while stack and self.yields(stack[-1], token):
                    output.append(stack.pop())
                stack.append(token)
            elif token.kind is Kind.RIGHT_PAREN:
                while stack and stack[-1].kind is not Kind.LEFT_PAREN:
                    output.append(stack.pop())
                if stack:
                    stack.pop()
                # Bind function to its just closed argument.
                if stack and stack[-1].kind is Kind.FUNCTION:
                    output.append(stack.pop())
        while stack:
            top = stack.pop()
            # Unmatched (
            if top.kind is not Kind.LEFT_PAREN:
                output.append(top)
        logger.debug('postfix: %r', output)
        return output

    def yields(self, top, incoming):
        '''
        Return True if top of stack must be output before incoming operator.
        '''
        if top.kind is Kind.FUNCTION:
            return True
        elif top.kind is not Kind.OPERATOR:
            return False
        top = Machine.OPERATORS[top.text]
        incoming = Machine.OPERATORS[incoming.text]
        return top.precedence > incoming.precedence or \
            top.precedence == incoming.precedence and not incoming.right
