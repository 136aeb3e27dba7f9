"""
###############################
Typing (:mod:`rootest.typing`)
###############################

This module provides type definitions commonly used between modules.

.. autoclass:: Evaluator
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol


class Evaluator(Protocol):
    """Protocol for univariate real-valued functions.

    Objects implementing this protocol are passed to single-root estimators as the
    function whose root is searched, or as its derivative. They are called
    synchronously and are not assumed to be reentrant.
    """

    __slots__ = ()

    @abstractmethod
    def __call__(self, x: float, /) -> float: ...

