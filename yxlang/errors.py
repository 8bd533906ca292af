from typing import Any


class YxlangError(Exception):
    """Base exception for host-facing yxlang helpers."""


class AstFormatError(YxlangError):
    """Raised when a serialized tree cannot be turned back into nodes."""
    def __init__(self, message: str, obj: Any = None):
        super().__init__(message)
        self.obj = obj
