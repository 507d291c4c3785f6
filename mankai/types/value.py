"""Runtime values for Mankai.

Every evaluated object is an instance of one of a closed set of variants:
the data variants defined here (Number, String, Bool, List) and the callable
variants in mankai.types.function. Dispatch points match on the variant
class rather than calling overridden methods.

Value equality follows the language rules, not Python's: a Number never
equals a Bool, and callables are never equal to anything, themselves included.
"""

from __future__ import annotations

import math
from decimal import Decimal


class Value:
    """Common base of every runtime value."""

    __slots__ = ()

    def to_string(self) -> str:
        raise NotImplementedError

    def type_name(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()


def format_number(n: float) -> str:
    """Shortest round-trip decimal form, never in exponent notation.

    Integral values drop the fractional part.
    """
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    if n.is_integer():
        return str(int(n))
    return format(Decimal(repr(n)), "f")


class Number(Value):
    __slots__ = ("value",)
    __match_args__ = ("value",)

    def __init__(self, value: float):
        self.value = float(value)

    def to_string(self) -> str:
        return format_number(self.value)

    def type_name(self) -> str:
        return "number"

    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("number", self.value))

    def __repr__(self):
        return f"Number({self.value!r})"


class String(Value):
    __slots__ = ("value",)
    __match_args__ = ("value",)

    def __init__(self, value: str):
        self.value = value

    def to_string(self) -> str:
        return f'"{self.value}"'

    def type_name(self) -> str:
        return "string"

    def __eq__(self, other) -> bool:
        return isinstance(other, String) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("string", self.value))

    def __repr__(self):
        return f"String({self.value!r})"


class Bool(Value):
    __slots__ = ("value",)
    __match_args__ = ("value",)

    def __init__(self, value: bool):
        self.value = bool(value)

    def to_string(self) -> str:
        return "true" if self.value else "false"

    def type_name(self) -> str:
        return "boolean"

    def __eq__(self, other) -> bool:
        return isinstance(other, Bool) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("bool", self.value))

    def __repr__(self):
        return f"Bool({self.value!r})"


class List(Value):
    """Ordered, heterogeneous sequence of values."""

    __slots__ = ("items",)
    __match_args__ = ("items",)

    def __init__(self, items=()):
        self.items: list[Value] = list(items)

    def to_string(self) -> str:
        return "(" + " ".join(item.to_string() for item in self.items) + ")"

    def type_name(self) -> str:
        return "list"

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __eq__(self, other) -> bool:
        # Element-wise through Value.__eq__, so nested callables stay unequal
        if not isinstance(other, List) or len(self.items) != len(other.items):
            return False
        return all(a == b for a, b in zip(self.items, other.items))

    __hash__ = None

    def __repr__(self):
        return f"List({self.items!r})"


TRUE = Bool(True)
FALSE = Bool(False)
