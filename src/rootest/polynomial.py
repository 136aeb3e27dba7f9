"""
########################################
Polynomials (:mod:`rootest.polynomial`)
########################################

.. currentmodule:: rootest.polynomial

This module provides the evaluation of polynomials with real or complex
coefficients. Coefficients are given with respect to the monomial basis, i.e.,
``coeffs[i]`` is the coefficient of ``x**i``.

.. autosummary::
    :toctree: generated/

    PolynomialEvaluator
    deflate
    polyval
    polyval_derivs

"""

from collections.abc import Sequence
from typing import Self, overload

import numpy as np
import numpy.typing as npt


def ascoeffs(coeffs: npt.ArrayLike, /) -> npt.NDArray:
    """Convert `coeffs` to a one-dimensional array of type ``float64`` or
    ``complex128``."""
    if isinstance(coeffs, (str, bytes)):
        raise TypeError

    result = np.array(coeffs)

    if result.ndim != 1 or result.size == 0:
        raise ValueError("coefficients must be a non-empty sequence")

    if np.iscomplexobj(result):
        return result.astype(np.complex128)

    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise TypeError

    return result.astype(np.float64)


@overload
def polyval(coeffs: npt.ArrayLike, x: float) -> float | complex: ...


@overload
def polyval(coeffs: npt.ArrayLike, x: complex) -> complex: ...


def polyval(coeffs, x):
    """Evaluate the polynomial at `x`.

    Examples
    --------
    >>> polyval([-6.0, 11.0, -6.0, 1.0], 2.0)
    0.0
    >>> polyval([1.0, 0.0, 1.0], 1j)
    0j
    """
    result = np.polynomial.polynomial.polyval(x, ascoeffs(coeffs))
    return result.item() if isinstance(result, np.generic) else result


def polyval_derivs(
    coeffs: npt.ArrayLike, x: complex
) -> tuple[complex, complex, complex]:
    """Evaluate the polynomial and its first and second derivatives at `x`.

    Returns
    -------
    r0 : complex
        Value of the polynomial.
    r1 : complex
        Value of the first derivative.
    r2 : complex
        Value of the second derivative.
    """
    b, d, f, _ = _horner2(ascoeffs(coeffs).tolist(), x)
    return b, d, 2.0 * f


def _horner2(
    a: list[complex], x: complex
) -> tuple[complex, complex, complex, float]:
    # Returns p(x), p'(x), p''(x) / 2, and a bound on the rounding error of p(x)
    # relative to the unit roundoff.
    b = complex(a[-1])
    d = f = 0j
    err = abs(b)
    abx = abs(x)

    for c in reversed(a[:-1]):
        f = f * x + d
        d = d * x + b
        b = b * x + c
        err = abs(b) + abx * err

    return b, d, f, err


def deflate(coeffs: npt.ArrayLike, root: complex) -> tuple[npt.NDArray, complex]:
    """Divide the polynomial by ``x - root``.

    Returns
    -------
    r0 : ndarray
        Coefficients of the quotient, one shorter than `coeffs`.
    r1 : complex
        Remainder, i.e., the value of the polynomial at `root`.

    Examples
    --------
    >>> q, r = deflate([-2.0, 1.0, 1.0], 1.0)
    >>> q.real.tolist(), r
    ([2.0, 1.0], 0j)
    """
    a = ascoeffs(coeffs).astype(np.complex128)

    if len(a) < 2:
        raise ValueError("polynomial must be at least of degree one")

    if a[-1] == 0:
        raise ValueError("leading coefficient must be non-zero")

    quotient, remainder = np.polynomial.polynomial.polydiv(a, [-root, 1.0])
    return quotient, complex(remainder[0])


class PolynomialEvaluator:
    """Callable polynomial.

    Instances can be passed to single-root estimators as the function or its
    derivative.

    Parameters
    ----------
    coeffs : ArrayLike
        Coefficients with respect to the monomial basis.

    Examples
    --------
    >>> p = PolynomialEvaluator([-6.0, 11.0, -6.0, 1.0])
    >>> p(1.0), p.derivative()(1.0)
    (0.0, 2.0)
    """

    __slots__ = ("_coeffs",)
    _coeffs: npt.NDArray

    def __init__(self, coeffs: npt.ArrayLike | Sequence[float | complex]):
        self._coeffs = ascoeffs(coeffs)

    @property
    def coeffs(self) -> npt.NDArray:
        return self._coeffs.copy()

    @property
    def degree(self) -> int:
        """Index of the highest non-zero coefficient (zero for the null polynomial)."""
        (nonzero,) = np.nonzero(self._coeffs)
        return int(nonzero[-1]) if len(nonzero) else 0

    def iscomplex(self) -> bool:
        return np.iscomplexobj(self._coeffs)

    def derivative(self) -> Self:
        """Return the derivative of the polynomial."""
        return self.__class__(np.polynomial.polynomial.polyder(self._coeffs))

    def __call__(self, x):
        return polyval(self._coeffs, x)

    def __repr__(self):
        return f"{type(self).__name__}({self._coeffs.tolist()!r})"
