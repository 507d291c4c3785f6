from mankai import Sexp
from mankai.errors import ArityError, MalformedFormError
from mankai.types.environment import Environment
from mankai.types.function import Function
from mankai.types.sexp import Atom


def expect_identifier(form: str, expr: Sexp, what: str = "first argument") -> str:
    """Return the identifier named by `expr`, which must be an identifier atom."""
    if isinstance(expr, Atom) and expr.is_identifier():
        return expr.lexeme
    raise MalformedFormError(f"expected identifier as {what} to '{form}'")


def parse_params(form: str, expr: Sexp) -> list[str]:
    """Return the parameter names of a parameter-list expression."""
    if not isinstance(expr, list):
        raise MalformedFormError(f"expected a parameter list in '{form}', got '{expr}'")
    params = []
    for i, param in enumerate(expr, start=1):
        if not (isinstance(param, Atom) and param.is_identifier()):
            raise MalformedFormError(f"parameter {i} of '{form}' is not an identifier", position=i)
        params.append(param.lexeme)
    return params


def lambda_form(evaluator, env: Environment, tail: list[Sexp]) -> Function:
    """
    (lambda! (params...) body)
    Builds an anonymous function; the environment is left untouched.
    """
    if len(tail) != 2:
        raise ArityError("expected exactly two arguments to 'lambda!'")

    params = parse_params("lambda!", tail[0])
    return Function(None, params, tail[1])
