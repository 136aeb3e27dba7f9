import math

import numpy as np

from rootest.roots.estimator import RootEstimationError
from rootest.roots.single import BracketedSingleRootEstimator, _check_sign_change

_NOT_BRACKETED = "bracket must contain a sign change"
_MAX_ITER_EXCEEDED = "maximum number of iterations exceeded"


class BisectionEstimator(BracketedSingleRootEstimator):
    """Estimator based on the bisection method.

    The bracket is halved at each step, keeping the half in which the function
    changes its sign, until the width of the bracket or the absolute value of the
    function at the midpoint falls below `tolerance`. The estimated root is the last
    midpoint.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    min_eval_point : float, default=0.0
    max_eval_point : float, default=1.0
    tolerance : float, default=1e-6

    Warnings
    --------
    The function must take finite values of strictly opposite signs at both ends of
    the bracket; otherwise, the estimation fails.

    Examples
    --------
    >>> estimator = BisectionEstimator(lambda x: x**2 - 2.0, 0.0, 2.0, 1e-10)
    >>> r = estimator.estimate()
    >>> print(r.status, format(r.content, ".8f"))
    SUCCESS 1.41421356
    """

    __slots__ = ()
    MAX_ITER = 100

    def _estimate(self):
        x1 = self._min_eval_point
        x2 = self._max_eval_point
        tol = self._tolerance
        f1 = self._evaluate(x1)
        f2 = self._evaluate(x2)
        _check_sign_change(f1, f2)

        # orient so that f(rtb) < 0
        if f1 < 0.0:
            dx = x2 - x1
            rtb = x1
        else:
            dx = x1 - x2
            rtb = x2

        for _ in range(self.MAX_ITER):
            dx *= 0.5
            xmid = rtb + dx
            fmid = self._evaluate(xmid)

            if fmid <= 0.0:
                rtb = xmid

            if abs(dx) < tol or abs(fmid) < tol:
                return xmid

        raise RootEstimationError(_MAX_ITER_EXCEEDED)


class FalsePositionEstimator(BracketedSingleRootEstimator):
    """Estimator based on the false position (regula falsi) method.

    Unlike bisection, the bracket is split at the point where the chord between both
    ends crosses zero. For functions with asymmetric curvature one end may stay fixed
    for many steps; convergence is then linear.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    min_eval_point : float, default=0.0
    max_eval_point : float, default=1.0
    tolerance : float, default=1e-6
    """

    __slots__ = ()
    MAX_ITER = 200

    def _estimate(self):
        x1 = self._min_eval_point
        x2 = self._max_eval_point
        tol = self._tolerance
        fl = self._evaluate(x1)
        fh = self._evaluate(x2)
        _check_sign_change(fl, fh)

        if fl < 0.0:
            xl, xh = x1, x2
        else:
            xl, xh = x2, x1
            fl, fh = fh, fl

        dx = xh - xl

        for _ in range(self.MAX_ITER):
            rtf = xl + dx * fl / (fl - fh)
            f = self._evaluate(rtf)

            if f < 0.0:
                delta = xl - rtf
                xl = rtf
                fl = f
            else:
                delta = xh - rtf
                xh = rtf
                fh = f

            dx = xh - xl

            if abs(delta) < tol or abs(f) < tol:
                return rtf

        raise RootEstimationError(_MAX_ITER_EXCEEDED)


class SecantEstimator(BracketedSingleRootEstimator):
    """Estimator based on the secant method.

    Both ends of the bracket are used as the two initial points, but no sign change
    is required. The iteration stops when the step falls below `tolerance`.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    min_eval_point : float, default=0.0
    max_eval_point : float, default=1.0
    tolerance : float, default=1e-6
    """

    __slots__ = ()
    MAX_ITER = 50

    def _estimate(self):
        x1 = self._min_eval_point
        x2 = self._max_eval_point
        tol = self._tolerance
        fl = self._evaluate(x1)
        f = self._evaluate(x2)

        if not (math.isfinite(fl) and math.isfinite(f)):
            raise RootEstimationError("function value at the bracket is not finite")

        # the point with the smaller function value is the most recent one
        if abs(fl) < abs(f):
            rts, xl = x1, x2
            fl, f = f, fl
        else:
            xl, rts = x1, x2

        for _ in range(self.MAX_ITER):
            if f == fl:
                raise RootEstimationError("secant denominator vanished")

            dx = (xl - rts) * f / (f - fl)

            if not math.isfinite(dx):
                raise RootEstimationError("secant step is not finite")

            xl = rts
            fl = f
            rts += dx
            f = self._evaluate(rts)

            if abs(dx) < tol or f == 0.0:
                return rts

        raise RootEstimationError(_MAX_ITER_EXCEEDED)


class RidderEstimator(BracketedSingleRootEstimator):
    """Estimator based on Ridders' method.

    The function is evaluated at the midpoint of the bracket, and an exponential
    factor that turns the function into a straight line through the three points is
    used to obtain the next estimate. The bracket is kept at every step.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    min_eval_point : float, default=0.0
    max_eval_point : float, default=1.0
    tolerance : float, default=1e-6

    References
    ----------
    .. [#Rid79] C. Ridders, "A new algorithm for computing a single root of a real
        continuous function," *IEEE Transactions on Circuits and Systems*, vol. 26,
        no. 11, pp. 979--980, 1979.
    """

    __slots__ = ()
    MAX_ITER = 60

    def _estimate(self):
        x1 = self._min_eval_point
        x2 = self._max_eval_point
        tol = self._tolerance
        fl = self._evaluate(x1)
        fh = self._evaluate(x2)
        _check_sign_change(fl, fh, allow_zero=True)

        if fl == 0.0:
            return x1

        if fh == 0.0:
            return x2

        xl, xh = x1, x2
        ans = math.nan

        for _ in range(self.MAX_ITER):
            xm = 0.5 * (xl + xh)
            fm = self._evaluate(xm)
            s = math.sqrt(fm * fm - fl * fh)

            if s == 0.0:
                return xm

            xnew = xm + (xm - xl) * (1.0 if fl >= fh else -1.0) * fm / s

            if abs(xnew - ans) <= tol:
                return xnew

            ans = xnew
            fnew = self._evaluate(ans)

            if fnew == 0.0:
                return ans

            if math.copysign(fm, fnew) != fm:
                xl, fl = xm, fm
                xh, fh = ans, fnew
            elif math.copysign(fl, fnew) != fl:
                xh, fh = ans, fnew
            elif math.copysign(fh, fnew) != fh:
                xl, fl = ans, fnew
            else:
                raise RootEstimationError(_NOT_BRACKETED)

            if abs(xh - xl) <= tol:
                return ans

        raise RootEstimationError(_MAX_ITER_EXCEEDED)


class BrentEstimator(BracketedSingleRootEstimator):
    """Estimator based on Brent's method.

    Inverse quadratic interpolation is combined with bisection: an interpolated step
    is accepted only if it falls inside the bracket and shrinks it fast enough;
    otherwise, the bracket is bisected. This is the recommended estimator for
    general use.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    min_eval_point : float, default=0.0
    max_eval_point : float, default=1.0
    tolerance : float, default=1e-6

    References
    ----------
    .. [#Bre73] R. P. Brent, *Algorithms for Minimization without Derivatives*.
        Englewood Cliffs, NJ, USA: Prentice-Hall, 1973, ch. 4.

    Examples
    --------
    >>> import math
    >>> estimator = BrentEstimator(math.cos, 1.0, 2.0, 1e-12)
    >>> r = estimator.estimate()
    >>> abs(r.content - math.pi / 2) < 1e-10
    True
    """

    __slots__ = ()
    MAX_ITER = 100
    EPS = float(np.finfo(np.float64).eps)

    def _estimate(self):
        tol = self._tolerance
        a = self._min_eval_point
        b = c = self._max_eval_point
        d = e = 0.0
        fa = self._evaluate(a)
        fb = self._evaluate(b)
        _check_sign_change(fa, fb, allow_zero=True)

        fc = fb

        for _ in range(self.MAX_ITER):
            if (fb > 0.0 and fc > 0.0) or (fb < 0.0 and fc < 0.0):
                c, fc = a, fa
                e = d = b - a

            if abs(fc) < abs(fb):
                a, b, c = b, c, b
                fa, fb, fc = fb, fc, fb

            tol1 = 2.0 * self.EPS * abs(b) + 0.5 * tol
            xm = 0.5 * (c - b)

            if abs(xm) <= tol1 or fb == 0.0:
                return b

            if abs(e) >= tol1 and abs(fa) > abs(fb):
                # inverse quadratic interpolation, or secant if a == c
                s = fb / fa

                if a == c:
                    p = 2.0 * xm * s
                    q = 1.0 - s
                else:
                    q = fa / fc
                    r = fb / fc
                    p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                    q = (q - 1.0) * (r - 1.0) * (s - 1.0)

                if p > 0.0:
                    q = -q

                p = abs(p)

                if 2.0 * p < min(3.0 * xm * q - abs(tol1 * q), abs(e * q)):
                    e = d
                    d = p / q
                else:
                    d = e = xm
            else:
                d = e = xm

            a, fa = b, fb

            if abs(d) > tol1:
                b += d
            else:
                b += math.copysign(tol1, xm)

            fb = self._evaluate(b)

        raise RootEstimationError(_MAX_ITER_EXCEEDED)
