from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, Optional, TextIO

if TYPE_CHECKING:
    from yxlang.ast import FunctionDef


class Environment:
    """Shared name bindings for one evaluation session.

    There is exactly one variable table and one function table; every node
    evaluated against this environment reads and writes the same pair. Names
    are resolved dynamically at the time they are used, so a function body
    sees (and can overwrite) whatever its caller has bound.
    """
    def __init__(self, out: Optional[TextIO] = None, debug_level: int = 0,
                 debug_file: Optional[str] = None):
        self.variables: Dict[str, float] = {}
        self.functions: Dict[str, 'FunctionDef'] = {}
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None

    # Variables

    def get_variable(self, name: str) -> float:
        return self.variables.get(name, 0.0)

    def set_variable(self, name: str, value: float):
        self.variables[name] = value

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def unset_variable(self, name: str):
        self.variables.pop(name, None)

    # Functions

    def get_function(self, name: str) -> Optional['FunctionDef']:
        return self.functions.get(name)

    def set_function(self, name: str, fn: 'FunctionDef'):
        # The previous definition stays alive for as long as a running call
        # still holds it; only the name now points at the new one.
        self.functions[name] = fn

    def has_function(self, name: str) -> bool:
        return name in self.functions

    def reset(self):
        self.variables.clear()
        self.functions.clear()

    # Output

    def write(self, text: str):
        stream = self.out if self.out is not None else sys.stdout
        stream.write(text)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __repr__(self) -> str:
        return f"<Environment {len(self.variables)} variables, {len(self.functions)} functions>"
