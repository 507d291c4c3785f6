"""Core evaluator for the Mankai interpreter.

Atoms evaluate to literals or environment lookups. A list evaluates its head
first: a special form receives the remaining sub-expressions unevaluated,
anything else gets its arguments evaluated left to right and is applied via
mankai.evaluation.apply.
"""

from __future__ import annotations

import logging
import sys

from mankai import Sexp
from mankai.config import get_max_call_depth, get_max_eval_depth
from mankai.errors import MankaiRuntimeError, NestingDepthError
from mankai.types.environment import Environment
from mankai.types.function import SpecialForm
from mankai.types.sexp import Atom, TokenKind
from mankai.types.value import Value, Number, String
from mankai.evaluation.apply import apply
from mankai.evaluation import special_forms
from mankai.builtin import env_builtin

logger = logging.getLogger(__name__)

# Host frames between two nested evaluate() calls, at most:
# evaluate -> _evaluate_list -> apply -> apply_function -> evaluate
_FRAMES_PER_LEVEL = 4
# Frames below the outermost evaluate(): front end, interpreter, test runner
_FRAME_HEADROOM = 1000


def reserve_host_stack(max_eval_depth: int) -> None:
    """Raise the host recursion limit so NestingDepthError fires before RecursionError.

    The recursion limit is process-wide: it is raised, never lowered, and
    stays raised after the evaluator is gone.
    """
    needed = max_eval_depth * _FRAMES_PER_LEVEL + _FRAME_HEADROOM
    if needed > sys.getrecursionlimit():
        logger.debug("raising host recursion limit to %d", needed)
        sys.setrecursionlimit(needed)


class Evaluator:
    """
    One interpreter session: the environment layer stack, the reserved-name
    tables and two depth counters.

    `call_depth` counts live user-defined calls and is checked against
    `max_call_depth` (0 disables that check). `eval_depth` counts nested
    evaluate() calls and is always checked against `max_eval_depth`; it is
    what keeps deep recursion from exhausting the host stack. Creating an
    Evaluator may raise the process-wide recursion limit, see
    reserve_host_stack.
    """

    def __init__(
        self,
        env: Environment | None = None,
        max_call_depth: int | None = None,
        max_eval_depth: int | None = None,
    ):
        self.env: Environment = env if env is not None else Environment()

        # Reserved-name tables, fixed for the lifetime of the session
        self.special_forms: frozenset[str] = frozenset(special_forms.SPECIAL_FORMS)
        self.native_functions: frozenset[str] = frozenset(env_builtin.NATIVE_FUNCTIONS)
        self.constants: frozenset[str] = frozenset(env_builtin.CONSTANTS)

        special_forms.register(self.env)
        env_builtin.register(self.env)

        self.max_call_depth: int = max_call_depth if max_call_depth is not None else get_max_call_depth()
        self.max_eval_depth: int = max_eval_depth if max_eval_depth is not None else get_max_eval_depth()
        if self.max_eval_depth < 1:
            raise ValueError(f"max_eval_depth must be positive, got {self.max_eval_depth}")
        self.call_depth: int = 0
        self.eval_depth: int = 0
        reserve_host_stack(self.max_eval_depth)
        logger.debug(
            "evaluator ready: %d special forms, %d native functions, max call depth %d, max eval depth %d",
            len(self.special_forms), len(self.native_functions), self.max_call_depth, self.max_eval_depth,
        )

    # --- Reserved names ---
    def is_special_form(self, name: str) -> bool:
        return name in self.special_forms

    def is_native_function(self, name: str) -> bool:
        return name in self.native_functions

    def is_constant(self, name: str) -> bool:
        return name in self.constants

    def reserved_category(self, name: str) -> str | None:
        """Return which reserved table holds `name`, or None."""
        if self.is_special_form(name):
            return "special form"
        if self.is_native_function(name):
            return "native function"
        if self.is_constant(name):
            return "constant"
        return None

    # --- Evaluation ---
    def evaluate(self, expr: Sexp) -> Value:
        if self.eval_depth >= self.max_eval_depth:
            raise NestingDepthError(self.max_eval_depth)
        self.eval_depth += 1
        try:
            match expr:
                case Atom():
                    return self._evaluate_atom(expr)
                case [head, *tail]:
                    return self._evaluate_list(head, tail)
            raise MankaiRuntimeError(f"can't evaluate {expr!r}")
        finally:
            self.eval_depth -= 1

    def _evaluate_atom(self, atom: Atom) -> Value:
        token = atom.token
        match token.kind:
            case TokenKind.NUMBER:
                return Number(token.value)
            case TokenKind.STRING:
                return String(token.value)
            case TokenKind.IDENTIFIER:
                return self.env.lookup(token.lexeme)
        raise MankaiRuntimeError("failed to convert atom to value")

    def _evaluate_list(self, head: Sexp, tail: list[Sexp]) -> Value:
        callee = self.evaluate(head)

        if isinstance(callee, SpecialForm):
            return callee.handler(self, self.env, tail)

        args = [self.evaluate(arg) for arg in tail]
        return apply(callee, args, self)
