from mankai import Sexp
from mankai.errors import ArityError, ReservedNameError
from mankai.types.environment import Environment
from mankai.types.value import Value
from mankai.evaluation.special_forms.lambda_form import expect_identifier


def check_not_reserved(evaluator, form: str, name: str) -> None:
    category = evaluator.reserved_category(name)
    if category is not None:
        raise ReservedNameError(form, name, category)


def define_form(evaluator, env: Environment, tail: list[Sexp]) -> Value:
    """
    (define! name value)
    Like set!, but special form, native function and constant names are off limits.
    """
    if len(tail) != 2:
        raise ArityError("expected exactly two arguments to 'define!'")

    name = expect_identifier("define!", tail[0])
    check_not_reserved(evaluator, "define!", name)
    value = evaluator.evaluate(tail[1])
    env.define(name, value)
    return value
