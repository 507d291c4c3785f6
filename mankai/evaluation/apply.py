"""Application engine for Mankai.

Applies an evaluated callee to already-evaluated arguments:
- Native functions are invoked directly and do their own arity/type checks.
- User-defined functions get a fresh environment layer holding their
  parameters for the duration of the body; the layer is popped on every
  exit path, so the layer stack depth always matches the call nesting.
- Anything else is not callable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mankai.errors import ArityError, CallDepthError, NotCallableError
from mankai.types.function import Function, NativeFunction
from mankai.types.value import Value

if TYPE_CHECKING:
    from mankai.evaluation.evaluator import Evaluator

logger = logging.getLogger(__name__)


def apply_function(fn: Function, args: list[Value], evaluator: Evaluator) -> Value:
    """Apply a user-defined Function.

    Raises ArityError unless exactly one argument per parameter is given, and
    CallDepthError when the call would nest deeper than the evaluator allows.
    """
    if len(args) != fn.arity:
        raise ArityError(
            f"found {len(args)} arguments but '{fn.display_name}' requires {fn.arity}"
        )

    limit = evaluator.max_call_depth
    if 0 < limit <= evaluator.call_depth:
        raise CallDepthError(limit)

    env = evaluator.env
    env.extend()
    evaluator.call_depth += 1
    logger.debug("enter %s, depth %d", fn.display_name, evaluator.call_depth)
    try:
        for name, value in zip(fn.params, args):
            env.define(name, value)
        return evaluator.evaluate(fn.body)
    finally:
        evaluator.call_depth -= 1
        env.restrict()
        logger.debug("leave %s, depth %d", fn.display_name, evaluator.call_depth)


def apply(callee: Value, args: list[Value], evaluator: Evaluator) -> Value:
    match callee:
        case NativeFunction(handler):
            return handler(args)
        case Function():
            return apply_function(callee, args, evaluator)
    raise NotCallableError(callee.to_string())
