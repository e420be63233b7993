"""Registry of special forms for the Squirrel evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application. Handlers receive the unevaluated operands.
"""

from squirrel.types.symbol import Symbol
from squirrel.evaluation.special_forms.define_form import define_form
from squirrel.evaluation.special_forms.set_form import set_form
from squirrel.evaluation.special_forms.do_form import do_form
from squirrel.evaluation.special_forms.if_form import if_form
from squirrel.evaluation.special_forms.lambda_form import lambda_form
from squirrel.evaluation.special_forms.quote_form import quote_form

SPECIAL_FORMS = {
    Symbol("def"): define_form,
    Symbol("set"): set_form,
    Symbol("do"): do_form,
    Symbol("if"): if_form,
    Symbol("lambda"): lambda_form,
    Symbol("quote"): quote_form,
}
