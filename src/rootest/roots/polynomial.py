import math
from abc import abstractmethod

import numpy as np
import numpy.typing as npt

from rootest.polynomial import ascoeffs
from rootest.roots.estimator import (
    EstimationResult,
    LockedError,
    NotAvailableError,
    NotReadyError,
    RootEstimationError,
    RootEstimator,
)


class PolynomialRootsEstimator(RootEstimator[npt.NDArray[np.complex128]]):
    """Abstract base class for estimators of all roots of a polynomial.

    Coefficients are given with respect to the monomial basis, i.e.,
    ``polynomial_parameters[i]`` is the coefficient of ``x**i``. Roots are returned as
    an array of ``complex128`` whose length equals the degree; multiple roots are
    repeated.
    """

    __slots__ = ("_params", "_roots")
    _params: npt.NDArray | None
    _roots: npt.NDArray[np.complex128] | None

    def __init__(self):
        super().__init__()
        self._params = None
        self._roots = None

    @property
    def polynomial_parameters(self) -> npt.NDArray:
        """Coefficients of the polynomial.

        Raises
        ------
        NotAvailableError
            If the coefficients have not been set.
        """
        if self._params is None:
            raise NotAvailableError("polynomial parameters are not set")

        return self._params.copy()

    @polynomial_parameters.setter
    def polynomial_parameters(self, value: npt.ArrayLike) -> None:
        if self.is_locked():
            raise LockedError

        params = self._check_parameters(ascoeffs(value))
        self._configure()
        self._params = params

    @property
    def roots(self) -> npt.NDArray[np.complex128]:
        """Estimated roots.

        Raises
        ------
        NotAvailableError
            If no estimation has succeeded yet.
        """
        if self._roots is None:
            raise NotAvailableError("roots have not been estimated")

        return self._roots.copy()

    def are_polynomial_parameters_available(self) -> bool:
        return self._params is not None

    def are_roots_available(self) -> bool:
        return self._roots is not None

    def is_ready(self) -> bool:
        return self.are_polynomial_parameters_available()

    def estimate(self) -> EstimationResult[npt.NDArray[np.complex128]]:
        self._check_estimable()
        result = self._run(self._estimate)

        if result.status == "SUCCESS":
            self._roots = result.content

        return result

    @abstractmethod
    def _check_parameters(self, params: npt.NDArray) -> npt.NDArray:
        """Return validated coefficients, or raise :class:`ValueError`."""
        raise NotImplementedError

    @abstractmethod
    def _estimate(self) -> npt.NDArray[np.complex128]:
        raise NotImplementedError


class _DirectRootsEstimator(PolynomialRootsEstimator):
    __slots__ = ()
    DEGREE: int
    EPS = 1e-10

    def __init__(self, polynomial_parameters: npt.ArrayLike | None = None):
        super().__init__()

        if polynomial_parameters is not None:
            self._params = self._check_parameters(ascoeffs(polynomial_parameters))

    @property
    def real_polynomial_parameters(self) -> npt.NDArray[np.float64]:
        """Real coefficients of the polynomial (same as `polynomial_parameters`)."""
        return self.polynomial_parameters

    @classmethod
    def _has_degree(cls, params: npt.ArrayLike) -> bool:
        a = np.asarray(params)

        if a.ndim != 1 or len(a) < cls.DEGREE + 1:
            return False

        if not abs(a[cls.DEGREE]) > cls.EPS:
            return False

        return bool(np.all(np.abs(a[cls.DEGREE + 1 :]) <= cls.EPS))

    def _check_parameters(self, params):
        if np.iscomplexobj(params):
            raise ValueError("complex coefficients are not supported")

        if not self._has_degree(params):
            raise ValueError(f"polynomial is not of degree {self.DEGREE}")

        return params

    def _leading(self) -> list[float]:
        # Coefficients up to the expected degree; higher ones are negligible.
        if self._params is None:
            raise NotReadyError

        return self._params[: self.DEGREE + 1].tolist()


class FirstDegreeRootsEstimator(_DirectRootsEstimator):
    """Estimator of the root of a first-degree polynomial with real coefficients.

    Parameters
    ----------
    polynomial_parameters : ArrayLike, optional
        Real coefficients ``[c0, c1]`` of ``c0 + c1*x``.

    Raises
    ------
    ValueError
        If the coefficients are complex or the polynomial is not of degree one.
    """

    __slots__ = ()
    DEGREE = 1

    @staticmethod
    def is_first_degree(params: npt.ArrayLike) -> bool:
        """Return ``True`` if `params` describes a polynomial of degree one."""
        return FirstDegreeRootsEstimator._has_degree(params)

    def _estimate(self):
        c0, c1 = self._leading()
        return np.array([-c0 / c1], dtype=np.complex128)


class SecondDegreeRootsEstimator(_DirectRootsEstimator):
    """Estimator of the roots of a second-degree polynomial with real coefficients.

    The roots are classified by the discriminant :math:`d=c_1^2-4c_2c_0`. If
    :math:`|d|` does not exceed `EPS`, the polynomial is regarded as having a double
    root, which is reported twice.

    Parameters
    ----------
    polynomial_parameters : ArrayLike, optional
        Real coefficients ``[c0, c1, c2]`` of ``c0 + c1*x + c2*x**2``.

    Raises
    ------
    ValueError
        If the coefficients are complex or the polynomial is not of degree two.

    Examples
    --------
    >>> estimator = SecondDegreeRootsEstimator([2.0, -3.0, 1.0])
    >>> estimator.has_two_distinct_real_roots()
    True
    >>> r = estimator.estimate()
    >>> sorted(r.content.real.tolist())
    [1.0, 2.0]
    """

    __slots__ = ()
    DEGREE = 2

    @staticmethod
    def is_second_degree(params: npt.ArrayLike) -> bool:
        """Return ``True`` if `params` describes a polynomial of degree two."""
        return SecondDegreeRootsEstimator._has_degree(params)

    def discriminant(self) -> float:
        """Return the discriminant.

        Raises
        ------
        NotReadyError
            If the coefficients have not been set.
        """
        c0, c1, c2 = self._leading()
        return c1 * c1 - 4.0 * c2 * c0

    def has_two_distinct_real_roots(self) -> bool:
        return self.discriminant() > self.EPS

    def has_double_root(self) -> bool:
        return abs(self.discriminant()) <= self.EPS

    def has_two_complex_conjugate_roots(self) -> bool:
        return self.discriminant() < -self.EPS

    def _estimate(self):
        c, b, a = self._leading()
        d = b * b - 4.0 * a * c

        if abs(d) <= self.EPS:
            x1 = x2 = complex(-b / (2.0 * a))
        elif d > 0.0:
            q = -0.5 * (b + math.copysign(math.sqrt(d), b))
            x1 = complex(q / a)
            x2 = complex(c / q)
        else:
            re = -b / (2.0 * a)
            im = math.sqrt(-d) / (2.0 * a)
            x1 = complex(re, im)
            x2 = complex(re, -im)

        roots = np.array([x1, x2], dtype=np.complex128)

        if np.any(np.isnan(roots)):
            raise RootEstimationError("roots are not a number")

        return roots


class ThirdDegreeRootsEstimator(_DirectRootsEstimator):
    r"""Estimator of the roots of a third-degree polynomial with real coefficients.

    The roots are classified by the discriminant

    .. math::

        D = 18c_3c_2c_1c_0 - 4c_2^3c_0 + c_2^2c_1^2 - 4c_3c_1^3 - 27c_3^2c_0^2,

    and computed by the trigonometric method if all of them are real, or by Cardano's
    formula otherwise.

    Parameters
    ----------
    polynomial_parameters : ArrayLike, optional
        Real coefficients ``[c0, c1, c2, c3]`` of
        ``c0 + c1*x + c2*x**2 + c3*x**3``.

    Raises
    ------
    ValueError
        If the coefficients are complex or the polynomial is not of degree three.
    """

    __slots__ = ()
    DEGREE = 3

    @staticmethod
    def is_third_degree(params: npt.ArrayLike) -> bool:
        """Return ``True`` if `params` describes a polynomial of degree three."""
        return ThirdDegreeRootsEstimator._has_degree(params)

    def discriminant(self) -> float:
        d, c, b, a = self._leading()
        return (
            18.0 * a * b * c * d
            - 4.0 * b**3 * d
            + b**2 * c**2
            - 4.0 * a * c**3
            - 27.0 * a**2 * d**2
        )

    def has_three_distinct_real_roots(self) -> bool:
        return self.discriminant() > self.EPS

    def has_multiple_real_root(self) -> bool:
        return abs(self.discriminant()) <= self.EPS

    def has_one_real_root_and_two_complex_conjugate_roots(self) -> bool:
        return self.discriminant() < -self.EPS

    def _estimate(self):
        d, c, b, a = self._leading()
        f = (3.0 * c / a - b**2 / a**2) / 3.0
        g = (2.0 * b**3 / a**3 - 9.0 * b * c / a**2 + 27.0 * d / a) / 27.0
        h = g**2 / 4.0 + f**3 / 27.0
        p = -b / (3.0 * a)

        if abs(f) <= self.EPS and abs(g) <= self.EPS and abs(h) <= self.EPS:
            # triple root
            x = float(np.cbrt(-d / a))
            roots = [x, x, x]
        elif h <= 0.0:
            i = math.sqrt(g**2 / 4.0 - h)
            j = float(np.cbrt(i))
            k = math.acos(min(1.0, max(-1.0, -g / (2.0 * i)))) if i > 0.0 else 0.0
            m = math.cos(k / 3.0)
            n = math.sqrt(3.0) * math.sin(k / 3.0)
            roots = [2.0 * j * m + p, -j * (m + n) + p, -j * (m - n) + p]
        else:
            s = float(np.cbrt(-g / 2.0 + math.sqrt(h)))
            u = float(np.cbrt(-g / 2.0 - math.sqrt(h)))
            re = -(s + u) / 2.0 + p
            im = (s - u) * math.sqrt(3.0) / 2.0

            if abs(self.discriminant()) <= self.EPS:
                # a multiple real root, split off the real axis by rounding
                im = 0.0

            roots = [s + u + p, complex(re, im), complex(re, -im)]

        result = np.array(roots, dtype=np.complex128)

        if np.any(np.isnan(result)):
            raise RootEstimationError("roots are not a number")

        return result
