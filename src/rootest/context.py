"""
######################################
Configuration (:mod:`rootest.context`)
######################################

.. currentmodule:: rootest.context

This module provides the context that holds the parameters of bracket search.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from typing import Self


class Context:
    """Create a new context.

    Parameters
    ----------
    bracket_factor : float, default=1.6
        Factor by which a bracket is expanded at each step of
        :meth:`~rootest.roots.BracketedSingleRootEstimator.compute_bracket`. Must be
        greater than one.
    bracket_tries : int, default=50
        Maximum number of expansion steps.
    """

    __slots__ = ("_bracket_factor", "_bracket_tries")
    _bracket_factor: float
    _bracket_tries: int

    def __init__(self, bracket_factor: float = 1.6, bracket_tries: int = 50):
        if not bracket_factor > 1.0:
            raise ValueError("bracket_factor must be greater than one")

        if bracket_tries < 1:
            raise ValueError("bracket_tries must be positive")

        self._bracket_factor = float(bracket_factor)
        self._bracket_tries = bracket_tries

    @property
    def bracket_factor(self) -> float:
        return self._bracket_factor

    @property
    def bracket_tries(self) -> int:
        return self._bracket_tries

    def copy(self) -> Self:
        return self.__class__(self._bracket_factor, self._bracket_tries)

    def __repr__(self):
        return (
            f"{type(self).__name__}(bracket_factor={self._bracket_factor!r}, "
            f"bracket_tries={self._bracket_tries!r})"
        )

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("rootest")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    if not isinstance(ctx, Context):
        raise TypeError

    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    bracket_factor: float | None = None,
    bracket_tries: int | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> with localcontext(bracket_tries=5) as ctx:
    ...     print(ctx.bracket_tries)
    5
    >>> print(getcontext().bracket_tries)
    50
    """
    if ctx is None:
        ctx = getcontext()

    if bracket_factor is None:
        bracket_factor = ctx.bracket_factor

    if bracket_tries is None:
        bracket_tries = ctx.bracket_tries

    ctx = Context(bracket_factor, bracket_tries)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
