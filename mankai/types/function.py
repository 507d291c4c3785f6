"""Callable runtime values: special forms, native functions and user functions."""

from __future__ import annotations

import copy

from mankai import SpecialFormFn, NativeFn
from mankai.types.value import Value


class _Callable(Value):
    __slots__ = ()

    # Callables have identity only: never equal, not even to themselves
    def __eq__(self, other) -> bool:
        return False

    def __ne__(self, other) -> bool:
        return True

    __hash__ = Value.__hash__


class SpecialForm(_Callable):
    """A handler receiving the evaluator, the environment and unevaluated sub-expressions."""

    __slots__ = ("name", "handler")
    __match_args__ = ("handler",)

    def __init__(self, name: str, handler: SpecialFormFn):
        self.name = name
        self.handler = handler

    def to_string(self) -> str:
        return "<special form>"

    def type_name(self) -> str:
        return "special form"

    def __repr__(self):
        return f"SpecialForm({self.name!r})"


class NativeFunction(_Callable):
    """A host function receiving already-evaluated arguments."""

    __slots__ = ("name", "handler")
    __match_args__ = ("handler",)

    def __init__(self, name: str, handler: NativeFn):
        self.name = name
        self.handler = handler

    def to_string(self) -> str:
        return "<native function>"

    def type_name(self) -> str:
        return "native function"

    def __repr__(self):
        return f"NativeFunction({self.name!r})"


class Function(_Callable):
    """A user-defined function.

    Owns its parameter names and a private copy of its body. It captures no
    environment: free identifiers in the body resolve against whatever layers
    are live when the function is called.
    """

    __slots__ = ("name", "params", "body")
    __match_args__ = ("name", "params", "body")

    def __init__(self, name: str | None, params: list[str], body):
        self.name = name
        self.params: list[str] = list(params)
        self.body = copy.deepcopy(body)

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else "anonymous function"

    def to_string(self) -> str:
        return "<user-defined function>"

    def type_name(self) -> str:
        return "function"

    def __repr__(self):
        return f"Function({self.display_name!r}, {self.params!r})"
