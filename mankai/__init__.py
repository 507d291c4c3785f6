# Core type aliases for Mankai's data model.
#
# Naming guidance:
# - Sexp: parsed code, either an Atom leaf or a Python list of Sexp.
# - Value: evaluated runtime objects (see mankai.types.value).
# Special forms receive Sexp, native functions receive Value.

from typing import Any, Callable, Union

from mankai.types.sexp import Atom, Token, TokenKind

Sexp = Union[Atom, list]

# Special form handler: (evaluator, environment, unevaluated tail) -> Value
SpecialFormFn = Callable[[Any, Any, list], Any]
# Native function handler: (evaluated arguments) -> Value
NativeFn = Callable[[list], Any]

__version__ = "0.1.0"
