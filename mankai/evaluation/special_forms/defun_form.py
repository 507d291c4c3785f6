from mankai import Sexp
from mankai.errors import ArityError
from mankai.types.environment import Environment
from mankai.types.function import Function
from mankai.evaluation.special_forms.lambda_form import expect_identifier, parse_params
from mankai.evaluation.special_forms.define_form import check_not_reserved


def defun_form(evaluator, env: Environment, tail: list[Sexp]) -> Function:
    """
    (defun! name (params...) body)
    Shorthand for (define! name (lambda! (params...) body)), except the
    function keeps `name` for error messages.
    """
    if len(tail) != 3:
        raise ArityError("expected exactly three arguments to 'defun!'")

    name = expect_identifier("defun!", tail[0])
    check_not_reserved(evaluator, "defun!", name)
    params = parse_params("defun!", tail[1])
    fn = Function(name, params, tail[2])
    env.define(name, fn)
    return fn
