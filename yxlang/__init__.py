# yxlang language package
# This package provides the AST, binding environment and tree-walking
# evaluator for the yxlang expression language.
from .ast import (
    Node, Constant, VariableRef, Negate, BinaryArith, Compare,
    UnaryBuiltin, BinaryBuiltin, ExprList, Assignment, Condition,
    Sequence, ParamList, FunctionDef, FunctionCall,
)
from .environment import Environment
from .program import Program
from .errors import YxlangError, AstFormatError

__all__ = [
    'Node',
    'Constant',
    'VariableRef',
    'Negate',
    'BinaryArith',
    'Compare',
    'UnaryBuiltin',
    'BinaryBuiltin',
    'ExprList',
    'Assignment',
    'Condition',
    'Sequence',
    'ParamList',
    'FunctionDef',
    'FunctionCall',
    'Environment',
    'Program',
    'YxlangError',
    'AstFormatError',
]
