from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import CalcError
from .lexer import Lexer
from .parser import Parser
from .machine import Machine
from .session import Session
from . import evaluate


logger = logging.getLogger(__name__)

BANNER = '''\
Infix calculator
Type expressions or 'help' for commands.'''

HELP = '''\
help      Show this message
clear     Reset history & last result
history   List past expressions
exit      Quit

Supports + - * / ^ ** (), functions: {functions}
Constants: {constants}
Scientific notation OK (e.g. 1e-3)
Chaining: start with + - * / ^ to use last result'''


def precision(text):
    '''
    Parse a non-negative count of decimals.
    '''
    try:
        digits = int(text)
    except ValueError:
        raise ArgumentTypeError('not an integer: {!r}'.format(text))
    if digits < 0:
        raise ArgumentTypeError('must not be negative: {}'.format(digits))
    return digits


class InteractiveInput:
    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def __iter__(self):
        history = None
        if self.history_file:
            history = FileHistory(path.expanduser(self.history_file))
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=history,
                                    # Certainly not! But be explicit.
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
    DEFAULT_PRECISION = 6
    HISTORY_FILE = '~/.infixcalc_history'

    def dumper(self):
        '''
        Dump tokens and postfix of each line.
        '''
        lexer = Lexer()
        parser = Parser()
        for line in self.lines:
            line = line.strip()
            if not line:
                continue
            try:
                tokens = lexer.tokenize(line)
            except CalcError as e:
                print('Error:', e, file=stderr)
                continue
            print('tokens', *(t.text for t in tokens), sep='\t')
            print('postfix', *(t.text for t in parser.postfix(tokens)),
                  sep='\t')

    def executor(self):
        '''
        Evaluate lines and run commands until exhausted or told to exit.
        '''
        session = Session(evaluate)
        interactive = isinstance(self.lines, InteractiveInput)
        if interactive:
            print(BANNER)
        for line in self.lines:
            line = line.strip()
            if not line:
                continue
            if line in ('exit', 'quit'):
                break
            command = self.COMMANDS.get(line)
            if command is not None:
                command(self, session)
                continue
            try:
                result = session.evaluate(line)
            # Abort entire line, state unchanged
            except CalcError as e:
                logger.debug('%r failed', line, exc_info=True)
                print('Error:', e, file=stderr)
                continue
            print(self.format(result))
        if interactive:
            print('Goodbye!')

    def grammar(self):
        '''
        Print the lexeme pattern the lexer matches with.
        '''
        print(Lexer.LEXEME)

    def format(self, result):
        '''
        Format result with fixed decimals.
        '''
        return '{:.{}f}'.format(result, self.args.precision)

    def printhelp(self, session):
        print(HELP.format(functions=', '.join(Machine.FUNCTIONS),
                          constants=', '.join(Machine.CONSTANTS)))

    def clear(self, session):
        session.clear()
        print('Cleared history & result.')

    def printhistory(self, session):
        print('History:')
        for i, line in enumerate(session.history, 1):
            print('  {}: {}'.format(i, line))

    # Words typed at the prompt that are not expressions.
    COMMANDS = {
        'help': printhelp,
        'clear': clear,
        'history': printhistory,
    }

    def _input(self):
        '''
        Pick where lines come from.

        Expressions given with -e win. Otherwise prompt when asked to, or
        when both stdin and stdout are a terminal; read plain stdin if not.
        '''
        if self.args.expressions is not None:
            return self.args.expressions
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.HISTORY_FILE)
        return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        parser = ArgumentParser(description='Infix calculator')
        parser.add_argument('-v', '--verbose',
                            action='store_true',
                            help='log pipeline stages and failures')
        parser.add_argument('-k', '--precision',
                            type=precision,
                            default=self.DEFAULT_PRECISION,
                            help='decimals shown in results')
        sources = parser.add_mutually_exclusive_group()
        sources.add_argument('-e', '--expression',
                             nargs=REMAINDER,
                             dest='expressions',
                             help='evaluate these lines instead of stdin')
        sources.add_argument('-p', '--prompt',
                             nargs=OPTIONAL,
                             const=self.DEFAULT_PROMPT)
        modes = parser.add_mutually_exclusive_group()
        modes.add_argument('-G', '--grammar',
                           action='store_const',
                           const=self.grammar,
                           dest='action',
                           help='print the lexer pattern and quit')
        modes.add_argument('-D', '--dump',
                           action='store_const',
                           const=self.dumper,
                           dest='action',
                           help='print tokens and postfix per line')
        parser.set_defaults(action=self.executor)
        self.argument_parser = parser

    def run(self, *, args=None):
        '''
        Run CLI on args, or on sys.argv when none given.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.verbose:
            logging.basicConfig(level=logging.DEBUG)
        try:
            if self.args.action == self.grammar:
                self.grammar()
                return
            self.lines = self._input()
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
