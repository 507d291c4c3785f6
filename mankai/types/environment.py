"""Runtime environment for Mankai.

The Environment is a single stack of binding layers shared by the whole
session. Layer 0 is the global layer and is never removed. Entering a
user-defined call pushes a layer (`extend`), leaving it pops one
(`restrict`). Lookups walk the stack from the top, so a function body sees
whatever layers are live at call time: dynamic extent, not lexical closures.
"""

from __future__ import annotations

from io import StringIO

from mankai.errors import UnboundSymbolError, EnvironmentInvariantError
from mankai.types.value import Value


class Environment:
    """Stack of mappings from identifier to Value."""

    __slots__ = ("layers",)

    def __init__(self):
        self.layers: list[dict[str, Value]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.layers)

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to `value` in the topmost layer, replacing any binding there."""
        self.layers[-1][name] = value

    def lookup(self, name: str) -> Value:
        """Return the value bound to `name` in the topmost layer that has it.

        Raises UnboundSymbolError if no layer binds `name`.
        """
        for layer in reversed(self.layers):
            if name in layer:
                return layer[name]
        raise UnboundSymbolError(name)

    def contains(self, name: str) -> bool:
        return any(name in layer for layer in self.layers)

    def extend(self) -> None:
        """Push a new empty layer."""
        self.layers.append({})

    def restrict(self) -> None:
        """Pop the topmost layer.

        Raises EnvironmentInvariantError when only the global layer is left.
        """
        if len(self.layers) == 1:
            raise EnvironmentInvariantError("can't restrict the global environment layer")
        self.layers.pop()

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-define a mapping of name -> value in the topmost layer."""
        for k, v in mapping.items():
            self.define(k, v)

    @staticmethod
    def _write_layer(buffer: StringIO, layer: dict[str, Value]) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in layer.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Topmost layer only, with an indicator for the layers below it."""
        with StringIO() as buffer:
            self._write_layer(buffer, self.layers[-1])
            if len(self.layers) > 1:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"<Environment depth={len(self.layers)}: ")
            for i, layer in enumerate(reversed(self.layers)):
                if i:
                    buffer.write(" -> ")
                self._write_layer(buffer, layer)
            buffer.write(">")
            return buffer.getvalue()
