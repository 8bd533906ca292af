import io
import dataclasses
import math

import pytest

from yxlang.ast import (
    Constant, VariableRef, BinaryArith, UnaryBuiltin, ExprList,
    Assignment, Condition, Sequence, ParamList,
)
from yxlang.environment import Environment


def test_unset_variable_reads_zero():
    env = Environment()
    assert VariableRef('never_set').evaluate(env) == 0.0
    assert not env.has_variable('never_set')


def test_assignment_is_repeatable():
    env = Environment()
    tree = Sequence(Assignment('x', Constant(5.0)), VariableRef('x'))
    assert tree.evaluate(env) == 5.0
    assert tree.evaluate(env) == 5.0
    assert env.get_variable('x') == 5.0


def test_assignment_returns_value():
    env = Environment()
    assert Assignment('y', BinaryArith('*', Constant(3.0), Constant(4.0))).evaluate(env) == 12.0


def test_sequence_runs_left_to_right():
    env = Environment()
    tree = Sequence(
        Assignment('x', Constant(1.0)),
        Sequence(Assignment('x', Constant(2.0)), VariableRef('x')),
    )
    assert tree.evaluate(env) == 2.0


def test_sequence_left_effects_visible_on_right():
    env = Environment()
    tree = Sequence(
        Assignment('a', Constant(3.0)),
        Assignment('b', BinaryArith('+', VariableRef('a'), Constant(1.0))),
    )
    assert tree.evaluate(env) == 4.0
    assert env.get_variable('a') == 3.0


def test_condition_without_else():
    assert Condition(Constant(0.0), Constant(1.0), None).evaluate(Environment()) == 0.0


def test_condition_with_else():
    env = Environment()
    assert Condition(Constant(2.0), Constant(1.0), Constant(9.0)).evaluate(env) == 1.0
    assert Condition(Constant(0.0), Constant(1.0), Constant(9.0)).evaluate(env) == 9.0


def test_condition_any_nonzero_is_true():
    env = Environment()
    assert Condition(Constant(0.5), Constant(1.0), Constant(9.0)).evaluate(env) == 1.0
    assert Condition(Constant(-3.0), Constant(1.0), Constant(9.0)).evaluate(env) == 1.0
    assert Condition(Constant(math.nan), Constant(1.0), Constant(9.0)).evaluate(env) == 1.0


def test_condition_with_empty_then_branch():
    assert Condition(Constant(1.0), None, Constant(9.0)).evaluate(Environment()) == 0.0


def test_condition_only_runs_taken_branch():
    env = Environment()
    tree = Condition(Constant(1.0), Assignment('t', Constant(1.0)), Assignment('e', Constant(1.0)))
    tree.evaluate(env)
    assert env.has_variable('t')
    assert not env.has_variable('e')


def test_condition_branch_can_be_a_chain():
    env = Environment()
    branch = Sequence(Assignment('x', Constant(4.0)), BinaryArith('*', VariableRef('x'), Constant(2.0)))
    assert Condition(Constant(1.0), branch).evaluate(env) == 8.0
    assert env.get_variable('x') == 4.0


def test_expr_list_evaluates_first_only():
    env = Environment()
    items = ExprList(Constant(7.0), ExprList(Assignment('z', Constant(1.0))))
    assert items.evaluate(env) == 7.0
    assert not env.has_variable('z')


def test_expr_list_items_in_order():
    items = ExprList(Constant(1.0), ExprList(Constant(2.0), ExprList(Constant(3.0))))
    assert [c.value for c in items.items()] == [1.0, 2.0, 3.0]


def test_param_list_names_in_order():
    params = ParamList('a', ParamList('b', ParamList('c')))
    assert list(params.names()) == ['a', 'b', 'c']
    assert params.evaluate(Environment()) == 0.0


def test_display_writes_and_passes_through(capsys):
    env = Environment()
    result = UnaryBuiltin('display', BinaryArith('+', Constant(100.0), Constant(20.0))).evaluate(env)
    out = capsys.readouterr().out
    assert out == '= 120\n'
    assert result == 120.0


def test_display_number_formatting(capsys):
    env = Environment()
    for value in (0.5, 1e6, -2.25, math.inf):
        UnaryBuiltin('display', Constant(value)).evaluate(env)
    out = capsys.readouterr().out.splitlines()
    assert out == ['= 0.5', '= 1e+06', '= -2.25', '= inf']


def test_display_to_custom_stream(capsys):
    buf = io.StringIO()
    env = Environment(out=buf)
    UnaryBuiltin('display', Constant(3.0)).evaluate(env)
    assert buf.getvalue() == '= 3\n'
    assert capsys.readouterr().out == ''


def test_display_inside_expression(capsys):
    env = Environment()
    tree = BinaryArith('*', UnaryBuiltin('display', Constant(2.0)), Constant(5.0))
    assert tree.evaluate(env) == 10.0
    assert capsys.readouterr().out == '= 2\n'


def test_lists_cannot_be_relinked():
    params = ParamList('a', ParamList('b'))
    items = ExprList(Constant(1.0))
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.rest = None
    with pytest.raises(dataclasses.FrozenInstanceError):
        items.tail = ExprList(Constant(2.0))
    assert list(params.names()) == ['a', 'b']
