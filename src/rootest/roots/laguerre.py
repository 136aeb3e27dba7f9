import cmath

import numpy as np
import numpy.typing as npt

from rootest.polynomial import _horner2, ascoeffs, deflate
from rootest.roots.estimator import LockedError, RootEstimationError
from rootest.roots.polynomial import PolynomialRootsEstimator


class LaguerreRootsEstimator(PolynomialRootsEstimator):
    r"""Estimator of all roots of a polynomial with complex coefficients based on
    Laguerre's method.

    Starting from zero, Laguerre's iteration converges to a root of the polynomial,
    which is then divided out (deflation). This is repeated until the deflated
    polynomial is constant. If `polish_roots` is ``True``, every root is finally
    refined by Laguerre's iteration on the original polynomial.

    Roots are returned in the order in which they are found; sort them if a
    canonical order is needed.

    Parameters
    ----------
    polynomial_parameters : ArrayLike, optional
        Coefficients with respect to the monomial basis. At least two coefficients
        are required, and the last one must be non-zero.
    polish_roots : bool, default=True
        Whether to refine the roots against the original polynomial.

    Raises
    ------
    ValueError
        If `polynomial_parameters` describes a constant or has a zero leading
        coefficient.

    Notes
    -----
    At :math:`x`, the step is :math:`n/(G\pm\sqrt{(n-1)(nH-G^2)})`, where :math:`n`
    is the degree, :math:`G=p'(x)/p(x)` and :math:`H=G^2-p''(x)/p(x)`; the sign
    giving the denominator of larger modulus is chosen. Every `MT` iterations a
    fractional step is taken instead to break limit cycles.

    References
    ----------
    .. [#Pre07] W. H. Press, S. A. Teukolsky, W. T. Vetterling, and B. P. Flannery,
        *Numerical Recipes: The Art of Scientific Computing*, 3rd ed. Cambridge, UK:
        Cambridge University Press, 2007, sec. 9.5.

    Examples
    --------
    >>> estimator = LaguerreRootsEstimator([1.0, 0.0, 1.0])
    >>> r = estimator.estimate()
    >>> sorted(np.round(r.content, 12).tolist(), key=lambda z: z.imag)
    [-1j, 1j]
    """

    __slots__ = ("_polish_roots",)
    MR = 80
    MT = 100
    MAX_ITER = MT * MR
    LAGUER_EPS = 1e-10
    EPS = 1e-14
    FRAC = (0.0, 0.5, 0.25, 0.75, 0.13, 0.38, 0.62, 0.88, 1.0)
    _polish_roots: bool

    def __init__(
        self,
        polynomial_parameters: npt.ArrayLike | None = None,
        polish_roots: bool = True,
    ):
        super().__init__()
        self._polish_roots = bool(polish_roots)

        if polynomial_parameters is not None:
            self._params = self._check_parameters(ascoeffs(polynomial_parameters))

    @property
    def polish_roots(self) -> bool:
        return self._polish_roots

    @polish_roots.setter
    def polish_roots(self, value: bool) -> None:
        if self.is_locked():
            raise LockedError

        self._configure()
        self._polish_roots = bool(value)

    def _check_parameters(self, params):
        if len(params) < 2:
            raise ValueError("polynomial must be at least of degree one")

        if params[-1] == 0:
            raise ValueError("leading coefficient must be non-zero")

        return params.astype(np.complex128)

    def _estimate(self):
        a = self._params
        ad = a.copy()  # type: ignore
        roots: list[complex] = []

        while len(ad) > 1:
            x = self._laguer(ad, 0j)

            if abs(x.imag) <= 2.0 * self.EPS * abs(x.real):
                x = complex(x.real, 0.0)

            roots.append(x)
            ad, _ = deflate(ad, x)

        if self._polish_roots:
            roots = [self._laguer(a, x) for x in roots]  # type: ignore

        return np.array(roots, dtype=np.complex128)

    def _laguer(self, a: npt.NDArray, x: complex) -> complex:
        coeffs = a.tolist()
        m = len(coeffs) - 1

        for it in range(1, self.MAX_ITER + 1):
            b, d, f, err = _horner2(coeffs, x)

            if abs(b) <= self.LAGUER_EPS * err:
                return x

            g = d / b
            g2 = g * g
            h = g2 - 2.0 * f / b
            sq = cmath.sqrt((m - 1) * (m * h - g2))
            gp = g + sq
            gm = g - sq
            abp = abs(gp)
            abm = abs(gm)

            if abp < abm:
                gp = gm

            if max(abp, abm) > 0.0:
                dx = m / gp
            else:
                dx = cmath.rect(1.0 + abs(x), it)

            x1 = x - dx

            if x == x1:
                return x

            if it % self.MT != 0:
                x = x1
            else:
                x -= self.FRAC[min(it // self.MT, len(self.FRAC) - 1)] * dx

        raise RootEstimationError("Laguerre's iteration did not converge")
