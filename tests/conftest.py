from pytest import fixture

from infixcalc import Lexer, Parser, Machine, Session, evaluate


@fixture
def lexer() -> Lexer:
    return Lexer()


@fixture
def parser() -> Parser:
    return Parser()


@fixture
def machine() -> Machine:
    return Machine()


@fixture
def session() -> Session:
    return Session(evaluate)
