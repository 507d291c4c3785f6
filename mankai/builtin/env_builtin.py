"""Built-in functions for the Mankai runtime environment.

This module defines arithmetic, comparison, boolean logic, list processing,
type predicates and string helpers exposed to Mankai code. Every native
function receives a list of already-evaluated Values, checks its own arity
and argument types, and reports type mismatches by 1-based position.
"""
from __future__ import annotations

import operator
from typing import Callable

from mankai.errors import ArityError, ArgumentTypeError, DivideByZeroError, EmptyListError
from mankai.types.environment import Environment
from mankai.types.function import NativeFunction
from mankai.types.value import Value, Number, String, Bool, List, TRUE, FALSE


# -------------------------------
# Argument checking helpers
# -------------------------------
def _plural(n: int) -> str:
    return "argument" if n == 1 else "arguments"


def at_least(name: str, args: list[Value], n: int) -> None:
    if len(args) < n:
        raise ArityError(f"'{name}' requires at least {n} {_plural(n)}, found {len(args)}")


def exactly(name: str, args: list[Value], n: int) -> None:
    if len(args) != n:
        raise ArityError(f"'{name}' requires exactly {n} {_plural(n)}, found {len(args)}")


def expect(name: str, value: Value, position: int, kind: type, expected: str):
    if not isinstance(value, kind):
        raise ArgumentTypeError(name, position, expected)
    return value


def numbers(name: str, args: list[Value]) -> list[float]:
    """Type-check every argument as a Number and return the raw floats."""
    return [expect(name, a, i, Number, "number").value for i, a in enumerate(args, start=1)]


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[Value]) -> Number:
    """Sum of all arguments."""
    at_least("+", args, 1)
    result = 0.0
    for x in numbers("+", args):
        result += x
    return Number(result)


def sub(args: list[Value]) -> Number:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    at_least("-", args, 1)
    xs = numbers("-", args)
    if len(xs) == 1:
        return Number(-xs[0])
    result = xs[0]
    for x in xs[1:]:
        result -= x
    return Number(result)


def mul(args: list[Value]) -> Number:
    """Product of all arguments."""
    at_least("*", args, 1)
    result = 1.0
    for x in numbers("*", args):
        result *= x
    return Number(result)


def div(args: list[Value]) -> Number:
    """Divide left-to-right; with one arg returns the reciprocal; a zero divisor is an error."""
    at_least("/", args, 1)
    xs = numbers("/", args)
    if len(xs) == 1:
        if xs[0] == 0:
            raise DivideByZeroError(1)
        return Number(1 / xs[0])
    result = xs[0]
    for i, x in enumerate(xs[1:], start=2):
        if x == 0:
            raise DivideByZeroError(i)
        result /= x
    return Number(result)


# -------------------------------
# Comparison
# -------------------------------
def _chained(name: str, relation: Callable[[float, float], bool]):
    def compare(args: list[Value]) -> Bool:
        at_least(name, args, 1)
        xs = numbers(name, args)
        return Bool(all(relation(a, b) for a, b in zip(xs, xs[1:])))

    compare.__name__ = f"compare_{relation.__name__}"
    compare.__doc__ = f"True when every adjacent pair of arguments satisfies '{name}'."
    return compare


num_eq = _chained("=", operator.eq)
lt = _chained("<", operator.lt)
gt = _chained(">", operator.gt)
lte = _chained("<=", operator.le)
gte = _chained(">=", operator.ge)


# -------------------------------
# Boolean logic
# -------------------------------
def logical_and(args: list[Value]) -> Bool:
    """False at the first false argument, true if all are true."""
    at_least("and", args, 1)
    for i, a in enumerate(args, start=1):
        if not expect("and", a, i, Bool, "boolean").value:
            return FALSE
    return TRUE


def logical_or(args: list[Value]) -> Bool:
    """True at the first true argument, false if all are false."""
    at_least("or", args, 1)
    for i, a in enumerate(args, start=1):
        if expect("or", a, i, Bool, "boolean").value:
            return TRUE
    return FALSE


def logical_not(args: list[Value]) -> Bool:
    exactly("not", args, 1)
    return Bool(not expect("not", args[0], 1, Bool, "boolean").value)


# -------------------------------
# List operations
# -------------------------------
def _non_empty(name: str, args: list[Value]) -> List:
    exactly(name, args, 1)
    lst = expect(name, args[0], 1, List, "list")
    if not lst.items:
        raise EmptyListError(name)
    return lst


def car(args: list[Value]) -> Value:
    return _non_empty("car", args).items[0]


def cdr(args: list[Value]) -> List:
    return List(_non_empty("cdr", args).items[1:])


def cons(args: list[Value]) -> List:
    """(cons lst x ...) => a new list with x ... appended to lst."""
    at_least("cons", args, 2)
    lst = expect("cons", args[0], 1, List, "list")
    return List(lst.items + args[1:])


def list_builtin(args: list[Value]) -> List:
    return List(args)


def length(args: list[Value]) -> Number:
    exactly("length", args, 1)
    return Number(len(expect("length", args[0], 1, List, "list").items))


def is_empty(args: list[Value]) -> Bool:
    exactly("empty?", args, 1)
    return Bool(not expect("empty?", args[0], 1, List, "list").items)


# -------------------------------
# Type predicates
# -------------------------------
def _predicate(name: str, kind: type):
    def test(args: list[Value]) -> Bool:
        exactly(name, args, 1)
        return Bool(isinstance(args[0], kind))

    test.__name__ = f"is_{kind.__name__.lower()}"
    return test


is_bool = _predicate("bool?", Bool)
is_list = _predicate("list?", List)
is_number = _predicate("number?", Number)
is_string = _predicate("string?", String)


# -------------------------------
# Strings
# -------------------------------
def string_concat(args: list[Value]) -> String:
    at_least("string-concat", args, 1)
    return String("".join(
        expect("string-concat", a, i, String, "string").value for i, a in enumerate(args, start=1)
    ))


def to_string(args: list[Value]) -> String:
    """Textual form of the argument as a String; Strings are returned unchanged."""
    exactly("to-string", args, 1)
    value = args[0]
    if isinstance(value, String):
        return value
    return String(value.to_string())


# -------------------------------
# Registration
# -------------------------------
NATIVE_FUNCTIONS: dict[str, Callable[[list[Value]], Value]] = {
    '+': add,
    '-': sub,
    '*': mul,
    '/': div,
    '=': num_eq,
    '>': gt,
    '<': lt,
    '>=': gte,
    '<=': lte,
    'and': logical_and,
    'or': logical_or,
    'not': logical_not,
    'car': car,
    'cdr': cdr,
    'cons': cons,
    'list': list_builtin,
    'length': length,
    'empty?': is_empty,
    'bool?': is_bool,
    'list?': is_list,
    'number?': is_number,
    'string?': is_string,
    'string-concat': string_concat,
    'to-string': to_string,
}

CONSTANTS: dict[str, Value] = {
    'true': TRUE,
    'false': FALSE,
}


def register(env: Environment) -> None:
    env.update({name: NativeFunction(name, fn) for name, fn in NATIVE_FUNCTIONS.items()})
    env.update(CONSTANTS)
