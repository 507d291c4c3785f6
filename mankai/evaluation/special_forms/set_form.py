from mankai import Sexp
from mankai.errors import ArityError
from mankai.types.environment import Environment
from mankai.types.value import Value
from mankai.evaluation.special_forms.lambda_form import expect_identifier


def set_form(evaluator, env: Environment, tail: list[Sexp]) -> Value:
    """
    (set! name value)
    Binds in the current layer without any reserved-name check.
    """
    if len(tail) != 2:
        raise ArityError("expected exactly two arguments to 'set!'")
    name = expect_identifier("set!", tail[0])
    value = evaluator.evaluate(tail[1])
    env.define(name, value)

    return value
