"""Abstract Syntax Tree (AST) definitions for the yxlang language.

Every node knows how to evaluate itself against an `Environment` and how to
render itself as an indented debug trace. Trees are assembled bottom-up by an
external front end using the dataclass constructors below; each composite
node owns its children, and the tree never contains cycles.

Evaluation always yields a float. Domain problems (division by zero, the
square root of a negative number, overflow) produce IEEE-754 ``inf``/``nan``
instead of raising, undefined variables read as ``0.0`` and calls to
undefined functions return ``0.0``.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, TextIO

from . import numeric
from .environment import Environment


ARITHMETIC_NAMES = {
    '+': 'add',
    '-': 'subtract',
    '*': 'multiply',
    '/': 'divide',
    '%': 'modulo',
    '^': 'power',
}


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""

    def evaluate(self, env: Environment) -> float:
        raise NotImplementedError(f"evaluate: unexpected node type {type(self).__name__}")

    def label(self) -> str:
        return type(self).__name__

    def children(self) -> List['Node']:
        return []

    def trace(self, out: Optional[TextIO] = None, depth: int = 0):
        """Write this subtree, one node per line, indented two spaces per level."""
        if out is None:
            out = sys.stdout
        out.write('  ' * depth + self.label() + '\n')
        for child in self.children():
            child.trace(out, depth + 1)


@dataclass(frozen=True)
class Constant(Node):
    value: float

    def evaluate(self, env: Environment) -> float:
        return float(self.value)

    def label(self) -> str:
        return numeric.format_number(self.value)


@dataclass(frozen=True)
class VariableRef(Node):
    name: str

    def evaluate(self, env: Environment) -> float:
        return env.get_variable(self.name)

    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Negate(Node):
    operand: Node

    def evaluate(self, env: Environment) -> float:
        return numeric.negate(self.operand.evaluate(env))

    def label(self) -> str:
        return '- negate'

    def children(self) -> List[Node]:
        return [self.operand]


@dataclass(frozen=True)
class BinaryArith(Node):
    op: str
    left: Node
    right: Node

    def __post_init__(self):
        if self.op not in numeric.ARITHMETIC_OPS:
            raise ValueError(f"unknown arithmetic operator {self.op!r}")

    def evaluate(self, env: Environment) -> float:
        left = self.left.evaluate(env)
        right = self.right.evaluate(env)
        return numeric.ARITHMETIC_OPS[self.op](left, right)

    def label(self) -> str:
        return f"{self.op} {ARITHMETIC_NAMES[self.op]}"

    def children(self) -> List[Node]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Compare(Node):
    op: str
    left: Node
    right: Node

    def __post_init__(self):
        if self.op not in numeric.COMPARE_OPS:
            raise ValueError(f"unknown comparison operator {self.op!r}")

    def evaluate(self, env: Environment) -> float:
        left = self.left.evaluate(env)
        right = self.right.evaluate(env)
        return 1.0 if numeric.COMPARE_OPS[self.op](left, right) else 0.0

    def label(self) -> str:
        return f"{self.op} compare"

    def children(self) -> List[Node]:
        return [self.left, self.right]


@dataclass(frozen=True)
class UnaryBuiltin(Node):
    """``sqrt``, ``exp``, ``log`` or the pass-through ``display``."""
    fn: str
    operand: Node

    def __post_init__(self):
        if self.fn != 'display' and self.fn not in numeric.UNARY_FUNCTIONS:
            raise ValueError(f"unknown unary builtin {self.fn!r}")

    def evaluate(self, env: Environment) -> float:
        value = self.operand.evaluate(env)
        if self.fn == 'display':
            env.write(f"= {numeric.format_number(value)}\n")
            return value
        return numeric.UNARY_FUNCTIONS[self.fn](value)

    def label(self) -> str:
        return f"{self.fn} unaryfunction"

    def children(self) -> List[Node]:
        return [self.operand]


@dataclass(frozen=True)
class BinaryBuiltin(Node):
    fn: str
    left: Node
    right: Node

    def __post_init__(self):
        if self.fn not in numeric.BINARY_FUNCTIONS:
            raise ValueError(f"unknown binary builtin {self.fn!r}")

    def evaluate(self, env: Environment) -> float:
        left = self.left.evaluate(env)
        right = self.right.evaluate(env)
        return numeric.BINARY_FUNCTIONS[self.fn](left, right)

    def label(self) -> str:
        return f"{self.fn} binaryfunction"

    def children(self) -> List[Node]:
        return [self.left, self.right]


@dataclass(frozen=True)
class ExprList(Node):
    """Actual arguments of a call, linked through `tail`."""
    head: Node
    tail: Optional['ExprList'] = None

    def evaluate(self, env: Environment) -> float:
        # Standalone, only the first expression counts
        return self.head.evaluate(env)

    def items(self) -> Iterator[Node]:
        node: Optional[ExprList] = self
        while node is not None:
            yield node.head
            node = node.tail

    def label(self) -> str:
        return 'exprlist'

    def children(self) -> List[Node]:
        if self.tail is None:
            return [self.head]
        return [self.head, self.tail]


@dataclass(frozen=True)
class Assignment(Node):
    name: str
    value: Node

    def evaluate(self, env: Environment) -> float:
        value = self.value.evaluate(env)
        env.set_variable(self.name, value)
        if env.debug_level >= 2:
            env.debug(f"assign {self.name} = {numeric.format_number(value)}")
        return value

    def label(self) -> str:
        return f"assignment:{self.name}"

    def children(self) -> List[Node]:
        return [self.value]


@dataclass(frozen=True)
class Condition(Node):
    cond: Node
    then_branch: Optional[Node] = None
    else_branch: Optional[Node] = None

    def evaluate(self, env: Environment) -> float:
        test = self.cond.evaluate(env)
        truthy = test != 0.0
        if env.debug_level >= 3:
            env.debug(f"if condition {numeric.format_number(test)} -> {truthy}")
        branch = self.then_branch if truthy else self.else_branch
        if branch is None:
            return 0.0
        return branch.evaluate(env)

    def label(self) -> str:
        return 'condition'

    def children(self) -> List[Node]:
        return [n for n in (self.cond, self.then_branch, self.else_branch) if n is not None]


@dataclass(frozen=True)
class Sequence(Node):
    first: Node
    second: Node

    def evaluate(self, env: Environment) -> float:
        self.first.evaluate(env)
        return self.second.evaluate(env)

    def label(self) -> str:
        return 'statement'

    def children(self) -> List[Node]:
        return [self.first, self.second]


@dataclass(frozen=True)
class ParamList(Node):
    """Formal parameters of a function, linked through `rest`."""
    name: str
    rest: Optional['ParamList'] = None

    def evaluate(self, env: Environment) -> float:
        return 0.0

    def names(self) -> Iterator[str]:
        node: Optional[ParamList] = self
        while node is not None:
            yield node.name
            node = node.rest

    def label(self) -> str:
        return f"paramlist: {self.name}"

    def children(self) -> List[Node]:
        return [] if self.rest is None else [self.rest]


@dataclass(frozen=True)
class FunctionDef(Node):
    name: str
    params: Optional[ParamList]
    body: Node

    def evaluate(self, env: Environment) -> float:
        env.set_function(self.name, self)
        if env.debug_level >= 1:
            env.debug(f"define function {self.name}")
        return 0.0

    def param_names(self) -> Iterator[str]:
        if self.params is None:
            return iter(())
        return self.params.names()

    def label(self) -> str:
        return f"function:{self.name}"

    def children(self) -> List[Node]:
        return [n for n in (self.params, self.body) if n is not None]


@dataclass(frozen=True)
class FunctionCall(Node):
    name: str
    args: Optional[ExprList] = None

    def evaluate(self, env: Environment) -> float:
        func = env.get_function(self.name)
        if func is None:
            if env.debug_level >= 1:
                env.debug(f"call to undefined function {self.name}")
            return 0.0
        if env.debug_level >= 1:
            env.debug(f"call {self.name}")
        # Prior bindings of the formals, None meaning "was unset". Only the
        # first save of a repeated name is kept so the caller's value wins.
        saved: Dict[str, Optional[float]] = {}
        actuals = self.args.items() if self.args is not None else iter(())
        try:
            for name in func.param_names():
                if name not in saved:
                    saved[name] = env.get_variable(name) if env.has_variable(name) else None
                expr = next(actuals, None)
                value = expr.evaluate(env) if expr is not None else 0.0
                env.set_variable(name, value)
                if env.debug_level >= 2:
                    env.debug(f"bind {name} = {numeric.format_number(value)}")
            return func.body.evaluate(env)
        finally:
            for name, previous in saved.items():
                if previous is None:
                    env.unset_variable(name)
                else:
                    env.set_variable(name, previous)
                if env.debug_level >= 2:
                    env.debug(f"restore {name}")

    def label(self) -> str:
        return f"call:{self.name}"

    def children(self) -> List[Node]:
        return [] if self.args is None else [self.args]
