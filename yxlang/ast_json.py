"""Plain-object form of yxlang trees, for front ends in another process.

Each node becomes a dict tagged with its class name under ``"type"``. The
linked argument and parameter chains are stored flat (``"items"`` and
``"names"`` lists) and relinked on load. Constants that JSON cannot spell
(``inf``, ``-inf``, ``nan``) travel as those strings. Anything that does not
describe a well-formed tree raises `AstFormatError`.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from .ast import (
    Node,
    Constant,
    VariableRef,
    Negate,
    BinaryArith,
    Compare,
    UnaryBuiltin,
    BinaryBuiltin,
    ExprList,
    Assignment,
    Condition,
    Sequence,
    ParamList,
    FunctionDef,
    FunctionCall,
)
from .errors import AstFormatError


def number_to_obj(value: float) -> Any:
    if math.isfinite(value):
        return value
    return repr(float(value))


def number_from_obj(obj: Any) -> float:
    if isinstance(obj, bool):
        raise AstFormatError(f"expected a number, got {obj!r}", obj)
    if isinstance(obj, (int, float)):
        try:
            return float(obj)
        except OverflowError:
            raise AstFormatError(f"number out of float range: {obj!r}", obj)
    if obj in ('inf', '-inf', 'nan'):
        return float(obj)
    raise AstFormatError(f"expected a number, got {obj!r}", obj)


def ast_to_obj(node: Optional[Node]) -> Any:
    if node is None:
        return None
    if isinstance(node, Constant):
        return {"type": "Constant", "value": number_to_obj(node.value)}
    if isinstance(node, VariableRef):
        return {"type": "VariableRef", "name": node.name}
    if isinstance(node, Negate):
        return {"type": "Negate", "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinaryArith):
        return {"type": "BinaryArith", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Compare):
        return {"type": "Compare", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryBuiltin):
        return {"type": "UnaryBuiltin", "fn": node.fn, "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinaryBuiltin):
        return {"type": "BinaryBuiltin", "fn": node.fn, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, ExprList):
        # Flattened; the linked form is rebuilt on load
        return {"type": "ExprList", "items": [ast_to_obj(e) for e in node.items()]}
    if isinstance(node, Assignment):
        return {"type": "Assignment", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, Condition):
        return {
            "type": "Condition",
            "cond": ast_to_obj(node.cond),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Sequence):
        return {"type": "Sequence", "first": ast_to_obj(node.first), "second": ast_to_obj(node.second)}
    if isinstance(node, ParamList):
        return {"type": "ParamList", "names": list(node.names())}
    if isinstance(node, FunctionDef):
        return {
            "type": "FunctionDef",
            "name": node.name,
            "params": ast_to_obj(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, FunctionCall):
        return {"type": "FunctionCall", "name": node.name, "args": ast_to_obj(node.args)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def _expr_list_from_items(items: Any) -> Optional[ExprList]:
    if not isinstance(items, list) or not items:
        raise AstFormatError("ExprList needs a non-empty list of items", items)
    result: Optional[ExprList] = None
    for item in reversed(items):
        result = ExprList(head=_node(item), tail=result)
    return result


def _param_list_from_names(names: Any) -> Optional[ParamList]:
    if not isinstance(names, list) or not names:
        raise AstFormatError("ParamList needs a non-empty list of names", names)
    result: Optional[ParamList] = None
    for name in reversed(names):
        result = ParamList(name=_name(name), rest=result)
    return result


def _name(obj: Any) -> str:
    if not isinstance(obj, str) or not obj:
        raise AstFormatError(f"expected a name, got {obj!r}", obj)
    return obj


def _symbol(obj: Any) -> str:
    # operator or builtin name; membership is checked by the node itself
    if not isinstance(obj, str):
        raise AstFormatError(f"expected an operator name, got {obj!r}", obj)
    return obj


def _node(obj: Any) -> Node:
    node = ast_from_obj(obj)
    if node is None:
        raise AstFormatError("missing required node", obj)
    return node


def _field(obj: Dict[str, Any], key: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise AstFormatError(f"{obj.get('type')} is missing field {key!r}", obj)


def ast_from_obj(obj: Any) -> Optional[Node]:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise AstFormatError("Invalid AST object", obj)
    t = obj.get("type")
    try:
        if t == "Constant":
            return Constant(value=number_from_obj(_field(obj, "value")))
        if t == "VariableRef":
            return VariableRef(name=_name(_field(obj, "name")))
        if t == "Negate":
            return Negate(operand=_node(_field(obj, "operand")))
        if t == "BinaryArith":
            return BinaryArith(op=_symbol(_field(obj, "op")), left=_node(_field(obj, "left")), right=_node(_field(obj, "right")))
        if t == "Compare":
            return Compare(op=_symbol(_field(obj, "op")), left=_node(_field(obj, "left")), right=_node(_field(obj, "right")))
        if t == "UnaryBuiltin":
            return UnaryBuiltin(fn=_symbol(_field(obj, "fn")), operand=_node(_field(obj, "operand")))
        if t == "BinaryBuiltin":
            return BinaryBuiltin(fn=_symbol(_field(obj, "fn")), left=_node(_field(obj, "left")), right=_node(_field(obj, "right")))
        if t == "ExprList":
            return _expr_list_from_items(_field(obj, "items"))
        if t == "Assignment":
            return Assignment(name=_name(_field(obj, "name")), value=_node(_field(obj, "value")))
        if t == "Condition":
            return Condition(
                cond=_node(_field(obj, "cond")),
                then_branch=ast_from_obj(obj.get("then_branch")),
                else_branch=ast_from_obj(obj.get("else_branch")),
            )
        if t == "Sequence":
            return Sequence(first=_node(_field(obj, "first")), second=_node(_field(obj, "second")))
        if t == "ParamList":
            return _param_list_from_names(_field(obj, "names"))
        if t == "FunctionDef":
            params = ast_from_obj(obj.get("params"))
            if params is not None and not isinstance(params, ParamList):
                raise AstFormatError("FunctionDef params must be a ParamList", obj)
            return FunctionDef(name=_name(_field(obj, "name")), params=params, body=_node(_field(obj, "body")))
        if t == "FunctionCall":
            args = ast_from_obj(obj.get("args"))
            if args is not None and not isinstance(args, ExprList):
                raise AstFormatError("FunctionCall args must be an ExprList", obj)
            return FunctionCall(name=_name(_field(obj, "name")), args=args)
    except ValueError as e:
        # unknown operator or builtin name
        raise AstFormatError(str(e), obj)

    raise AstFormatError(f"Unknown AST node type: {t}", obj)
