"""IEEE-754 arithmetic for the yxlang evaluator.

Python's float operators raise on conditions where C arithmetic quietly
produces ``inf`` or ``nan`` (``1.0 / 0.0``, ``math.sqrt(-1)``,
``math.exp(1000)``). The language defines those cases as ordinary values,
so every operation here goes through numpy ``float64`` ufuncs with floating
point warnings silenced, and the result is handed back as a plain ``float``.
"""

from __future__ import annotations

import numpy as np


def _ieee(ufunc, *args: float) -> float:
    with np.errstate(all='ignore'):
        return float(ufunc(*(np.float64(a) for a in args)))


def negate(x: float) -> float:
    return _ieee(np.negative, x)


def add(a: float, b: float) -> float:
    return _ieee(np.add, a, b)


def subtract(a: float, b: float) -> float:
    return _ieee(np.subtract, a, b)


def multiply(a: float, b: float) -> float:
    return _ieee(np.multiply, a, b)


def divide(a: float, b: float) -> float:
    return _ieee(np.true_divide, a, b)


def modulo(a: float, b: float) -> float:
    # fmod: result takes the sign of the dividend
    return _ieee(np.fmod, a, b)


def power(a: float, b: float) -> float:
    return _ieee(np.power, a, b)


def sqrt(x: float) -> float:
    return _ieee(np.sqrt, x)


def exp(x: float) -> float:
    return _ieee(np.exp, x)


def log(x: float) -> float:
    return _ieee(np.log, x)


ARITHMETIC_OPS = {
    '+': add,
    '-': subtract,
    '*': multiply,
    '/': divide,
    '%': modulo,
    '^': power,
}

COMPARE_OPS = {
    '>': lambda a, b: a > b,
    '<': lambda a, b: a < b,
    '!=': lambda a, b: a != b,
    '==': lambda a, b: a == b,
    '>=': lambda a, b: a >= b,
    '<=': lambda a, b: a <= b,
}

UNARY_FUNCTIONS = {
    'sqrt': sqrt,
    'exp': exp,
    'log': log,
}

BINARY_FUNCTIONS = {
    'pow': power,
}


def format_number(value: float) -> str:
    """Render a number the way a default C++ ostream prints a double.

    Six significant digits, trailing zeros dropped, exponent form for very
    large or small magnitudes: ``120``, ``0.5``, ``1e+06``, ``inf``, ``nan``.
    """
    return format(value, 'g')
