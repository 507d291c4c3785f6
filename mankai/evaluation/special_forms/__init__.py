"""Registry of special forms for the Mankai evaluator.

Maps identifiers to handler functions that implement non-standard evaluation
rules. Each handler is called as handler(evaluator, env, tail) with the
unevaluated sub-expressions in `tail`.
"""

from mankai.types.environment import Environment
from mankai.types.function import SpecialForm
from mankai.evaluation.special_forms.if_form import if_form
from mankai.evaluation.special_forms.lambda_form import lambda_form
from mankai.evaluation.special_forms.set_form import set_form
from mankai.evaluation.special_forms.define_form import define_form
from mankai.evaluation.special_forms.defun_form import defun_form

SPECIAL_FORMS = {
    "if!": if_form,
    "lambda!": lambda_form,
    "set!": set_form,
    "define!": define_form,
    "defun!": defun_form,
}


def register(env: Environment) -> None:
    env.update({name: SpecialForm(name, handler) for name, handler in SPECIAL_FORMS.items()})
