import logging

from .context import Context, getcontext, localcontext, setcontext
from .polynomial import PolynomialEvaluator, deflate, polyval, polyval_derivs

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "PolynomialEvaluator",
    "deflate",
    "polyval",
    "polyval_derivs",
]
