from mankai import Sexp
from mankai.errors import ArityError, ArgumentTypeError
from mankai.types.environment import Environment
from mankai.types.value import Value, Bool


def if_form(evaluator, env: Environment, tail: list[Sexp]) -> Value:
    """
    (if! condition then else)
    Only the selected branch is evaluated.
    """
    if len(tail) != 3:
        raise ArityError("expected exactly three arguments to 'if!'")

    cond = evaluator.evaluate(tail[0])
    match cond:
        case Bool(True):
            return evaluator.evaluate(tail[1])
        case Bool(False):
            return evaluator.evaluate(tail[2])
    raise ArgumentTypeError(
        "if!", 1, "boolean",
        f"condition of 'if!' must evaluate to a boolean, got {cond.to_string()}",
    )
