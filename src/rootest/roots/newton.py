import math

from rootest.roots.estimator import RootEstimationError
from rootest.roots.single import DerivativeSingleRootEstimator, _check_sign_change


class NewtonRaphsonEstimator(DerivativeSingleRootEstimator):
    """Estimator based on the Newton-Raphson method.

    The iteration starts at the midpoint of the bracket and stops when the Newton
    step falls below `tolerance`. The bracket is not enforced, so the iterates may
    leave it.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    derivative_listener : Evaluator, optional
        Derivative of `listener`.
    min_eval_point : float, default=0.0
    max_eval_point : float, default=1.0
    tolerance : float, default=1e-6

    See Also
    --------
    SafeNewtonRaphsonEstimator

    Examples
    --------
    >>> estimator = NewtonRaphsonEstimator(
    ...     lambda x: x**3 - 2.0, lambda x: 3.0 * x**2, 1.0, 2.0, 1e-12
    ... )
    >>> r = estimator.estimate()
    >>> print(format(r.content, ".10f"))
    1.2599210499
    """

    __slots__ = ()
    MAX_ITER = 50

    def _estimate(self):
        tol = self._tolerance
        rtn = 0.5 * (self._min_eval_point + self._max_eval_point)

        for _ in range(self.MAX_ITER):
            f = self._evaluate(rtn)

            if f == 0.0:
                return rtn

            df = self._evaluate_derivative(rtn)

            if df == 0.0:
                raise RootEstimationError("derivative vanished")

            dx = f / df

            if not math.isfinite(dx):
                raise RootEstimationError("Newton step is not finite")

            rtn -= dx

            if abs(dx) < tol:
                return rtn

        raise RootEstimationError("maximum number of iterations exceeded")


class SafeNewtonRaphsonEstimator(DerivativeSingleRootEstimator):
    """Estimator combining the Newton-Raphson method with bisection.

    A Newton step is taken if it stays inside the current bracket and the step size
    at least halves; otherwise, the bracket is bisected. Both a sign change over the
    bracket and the derivative are required, in exchange for guaranteed convergence.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    derivative_listener : Evaluator, optional
        Derivative of `listener`.
    min_eval_point : float, default=0.0
    max_eval_point : float, default=1.0
    tolerance : float, default=1e-6
    """

    __slots__ = ()
    MAX_ITER = 100

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

        # orient so that f(xl) < 0
        if fl < 0.0:
            xl, xh = x1, x2
        else:
            xl, xh = x2, x1

        rts = 0.5 * (x1 + x2)
        dxold = abs(x2 - x1)
        dx = dxold
        f = self._evaluate(rts)
        df = self._evaluate_derivative(rts)

        for _ in range(self.MAX_ITER):
            if f == 0.0:
                return rts

            if (((rts - xh) * df - f) * ((rts - xl) * df - f) > 0.0) or (
                abs(2.0 * f) > abs(dxold * df)
            ):
                # bisect if Newton is out of range or not decreasing fast enough
                dxold = dx
                dx = 0.5 * (xh - xl)
                rts = xl + dx

                if xl == rts:
                    return rts
            else:
                dxold = dx
                dx = f / df
                temp = rts
                rts -= dx

                if temp == rts:
                    return rts

            if abs(dx) < tol:
                return rts

            f = self._evaluate(rts)
            df = self._evaluate_derivative(rts)

            if f < 0.0:
                xl = rts
            else:
                xh = rts

        raise RootEstimationError("maximum number of iterations exceeded")
