from __future__ import annotations
import logging
from typing import Literal

from mankai import Sexp
from mankai.reader.parser import lex, TokenStream
from mankai.types.environment import Environment
from mankai.types.value import Value
from mankai.evaluation.evaluator import Evaluator
from mankai.modules.prelude_loader import load_prelude

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Mankai code.
    Owns one Evaluator, so bindings persist across calls to eval().
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        max_call_depth: int | None = None,
        max_eval_depth: int | None = None,
    ):
        self.evaluator = Evaluator(max_call_depth=max_call_depth, max_eval_depth=max_eval_depth)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)
        logger.info("interpreter session started (global bindings: %d)", len(self.env.layers[0]))

    @property
    def env(self) -> Environment:
        return self.evaluator.env

    def evaluate(self, expr: Sexp) -> Value:
        """Evaluate one already-parsed S-expression."""
        return self.evaluator.evaluate(expr)

    def eval_prelude(self, code: str) -> None:
        for expr in self._read(code):
            self.evaluator.evaluate(expr)

    def eval(self, code: str) -> Value | None:
        """Evaluate every expression in `code`; return the last value, or None if there was none."""
        result = None
        for expr in self._read(code):
            result = self.evaluator.evaluate(expr)
        return result

    @staticmethod
    def _read(code: str) -> list[Sexp]:
        # Lex and parse the whole input before evaluating any of it
        tokens = list(lex(code))
        return list(TokenStream(tokens).parse_all())
