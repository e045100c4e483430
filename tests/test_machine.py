'''
Postfix machine and whole pipeline tests
'''

import logging
import math

from infixcalc import evaluate, eval_postfix, tokenize, render
from infixcalc.machine import Machine
from infixcalc.tokens import Token, Kind
from infixcalc.util import EvalError

from pytest import approx, raises, mark


@mark.parametrize('line, expected', [
    ('2+3*4', 14),
    ('(2+3)*4', 20),
    ('2^3^2', 512),
    ('2**3**2', 512),
    ('(2^3)^2', 64),
    ('8/2/2', 2),
    ('10-4-3', 3),
    ('4^0.5', 2),
    ('2^(0-1)', 0.5),
    ('sqrt(16)', 4),
    ('sqrt(16)+1', 5),
    ('2*sqrt(9)^2', 18),
    ('log(1000)', 3),
    ('ln(e)', 1),
    ('exp(0)', 1),
    ('cos(0)', 1),
    ('1e-3*2E2', 0.2),
    ('.5+.5', 1),
])
def test_evaluate(line, expected):
    assert evaluate(line) == approx(expected)


def test_trigonometry_in_radians():
    assert evaluate('sin(0)') == 0
    assert evaluate('sin(pi/2)') == approx(1, abs=1e-9)
    assert evaluate('tan(pi/4)') == approx(1, abs=1e-9)


def test_constant_value():
    value, = (float(t.text) for t in tokenize('pi'))
    assert value == approx(math.pi, abs=1e-15)


def test_no_domain_clamping():
    assert math.isnan(evaluate('sqrt(0-1)'))
    assert evaluate('ln(0)') == -math.inf
    assert math.isnan(evaluate('log(0-10)'))
    assert math.isnan(evaluate('(0-8)^(1/3)'))
    assert evaluate('10^400') == math.inf


def test_divide_by_zero():
    with raises(EvalError, match='Divide by zero'):
        evaluate('5/0')
    with raises(EvalError, match='Divide by zero'):
        evaluate('5/(1-1)')


def test_invalid_number():
    for line in '.', '1e', '1.2.3', '2e+':
        with raises(EvalError, match='Invalid number'):
            evaluate(line)


def test_missing_operands():
    with raises(EvalError, match='Missing operands'):
        eval_postfix([Token('+', Kind.OPERATOR)])
    with raises(EvalError, match='Missing operands'):
        evaluate('2+')
    with raises(EvalError, match='Missing operands'):
        evaluate('-3')


def test_missing_function_operand():
    with raises(EvalError, match='Missing operand for function'):
        eval_postfix([Token('sqrt', Kind.FUNCTION)])
    with raises(EvalError, match='Missing operand for function'):
        evaluate('sqrt()')


def test_invalid_expression():
    for line in '', '2 3', '()', 'sin(1)(2)':
        with raises(EvalError, match='Invalid expression'):
            evaluate(line)


def test_tolerated_parens():
    assert evaluate('(2+3') == 5
    assert evaluate('2+3)') == 5


def test_machine_is_reusable(machine):
    with raises(EvalError):
        machine.evaluate(tokenize('1 2'))
    assert machine.evaluate(tokenize('1')) == 1
    assert not machine.stack


def test_result_is_float(machine, parser):
    result = machine.evaluate(parser.postfix(tokenize('2+2')))
    assert type(result) is float


def test_tables_are_read_only():
    with raises(TypeError):
        Machine.OPERATORS['%'] = Machine.OPERATORS['/']
    with raises(TypeError):
        Machine.CONSTANTS['tau'] = 2 * math.pi
    assert set(Machine.FUNCTIONS) == {'sin', 'cos', 'tan', 'sqrt', 'log',
                                      'ln', 'exp'}


@mark.parametrize('value', [0.1, 1 / 3, 1e-20, 12345.678, 1e300, 2.5e-8,
                            0.0, 42.0, math.pi])
def test_rendered_results_lex_back(value):
    tokens = tokenize(render(value))
    assert [t.kind for t in tokens] == [Kind.NUMBER]
    assert float(tokens[0].text) == value


@mark.parametrize('value', [math.inf, -math.inf, -1e300])
def test_rendered_results_evaluate_back(value):
    assert evaluate(render(value)) == value


def test_rendered_nan_evaluates_back():
    assert math.isnan(evaluate(render(math.nan)))


def test_debug_log_shows_postfix(machine, parser, caplog):
    caplog.set_level(logging.DEBUG, logger='infixcalc.machine')
    machine.evaluate(parser.postfix(tokenize('2+2')))
    assert "Token('+', OPERATOR)" in caplog.text
    assert '-> 4.0' in caplog.text
