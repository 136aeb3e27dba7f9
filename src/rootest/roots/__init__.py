"""
######################################
Root estimation (:mod:`rootest.roots`)
######################################

.. currentmodule:: rootest.roots

This module provides estimators of roots of real functions and of polynomials.

Single roots
============

.. autosummary::
    :toctree: generated/

    BisectionEstimator
    BrentEstimator
    FalsePositionEstimator
    NewtonRaphsonEstimator
    RidderEstimator
    SafeNewtonRaphsonEstimator
    SecantEstimator

Roots of polynomials
====================

.. autosummary::
    :toctree: generated/

    FirstDegreeRootsEstimator
    SecondDegreeRootsEstimator
    ThirdDegreeRootsEstimator
    LaguerreRootsEstimator

Abstract classes
================

.. autosummary::
    :toctree: generated/

    RootEstimator
    SingleRootEstimator
    BracketedSingleRootEstimator
    DerivativeSingleRootEstimator
    PolynomialRootsEstimator

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    EstimationResult
    EvaluationError
    InvalidBracketRangeError
    LockedError
    NotAvailableError
    NotReadyError
    RootEstimationError

"""

from .bracketed import (
    BisectionEstimator,
    BrentEstimator,
    FalsePositionEstimator,
    RidderEstimator,
    SecantEstimator,
)
from .estimator import (
    EstimationResult,
    EvaluationError,
    InvalidBracketRangeError,
    LockedError,
    NotAvailableError,
    NotReadyError,
    RootEstimationError,
    RootEstimator,
)
from .laguerre import LaguerreRootsEstimator
from .newton import NewtonRaphsonEstimator, SafeNewtonRaphsonEstimator
from .polynomial import (
    FirstDegreeRootsEstimator,
    PolynomialRootsEstimator,
    SecondDegreeRootsEstimator,
    ThirdDegreeRootsEstimator,
)
from .single import (
    BracketedSingleRootEstimator,
    DerivativeSingleRootEstimator,
    SingleRootEstimator,
)

__all__ = [
    "BisectionEstimator",
    "BrentEstimator",
    "FalsePositionEstimator",
    "NewtonRaphsonEstimator",
    "RidderEstimator",
    "SafeNewtonRaphsonEstimator",
    "SecantEstimator",
    "FirstDegreeRootsEstimator",
    "SecondDegreeRootsEstimator",
    "ThirdDegreeRootsEstimator",
    "LaguerreRootsEstimator",
    "RootEstimator",
    "SingleRootEstimator",
    "BracketedSingleRootEstimator",
    "DerivativeSingleRootEstimator",
    "PolynomialRootsEstimator",
    "EstimationResult",
    "EvaluationError",
    "InvalidBracketRangeError",
    "LockedError",
    "NotAvailableError",
    "NotReadyError",
    "RootEstimationError",
]
