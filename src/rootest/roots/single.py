import logging
import math
from abc import abstractmethod

from rootest.context import getcontext
from rootest.roots.estimator import (
    EstimationResult,
    EvaluationError,
    InvalidBracketRangeError,
    LockedError,
    NotAvailableError,
    NotReadyError,
    RootEstimationError,
    RootEstimator,
)
from rootest.typing import Evaluator

logger = logging.getLogger(__name__)

DEFAULT_MIN_EVAL_POINT = 0.0
DEFAULT_MAX_EVAL_POINT = 1.0
DEFAULT_TOLERANCE = 1e-6
BRACKET_EPS = 1e-8


def _evaluate(fun: Evaluator, x: float) -> float:
    try:
        y = float(fun(x))
    except RootEstimationError:
        raise
    except Exception as e:
        raise EvaluationError(f"evaluation failed at x={x!r}") from e

    if math.isnan(y):
        raise RootEstimationError(f"function value is not a number at x={x!r}")

    return y


def _check_evaluator(fun: Evaluator | None) -> None:
    if fun is not None and not callable(fun):
        raise TypeError("evaluator must be callable")


class SingleRootEstimator(RootEstimator[float]):
    """Abstract base class for estimators of a single root of a real function.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    """

    __slots__ = ("_listener", "_root")
    _listener: Evaluator | None
    _root: float | None

    def __init__(self, listener: Evaluator | None = None):
        super().__init__()
        _check_evaluator(listener)
        self._listener = listener
        self._root = None

    @property
    def listener(self) -> Evaluator:
        """Function whose root is estimated.

        Raises
        ------
        NotAvailableError
            If the function has not been set.
        """
        if self._listener is None:
            raise NotAvailableError("function evaluator is not set")

        return self._listener

    @listener.setter
    def listener(self, value: Evaluator | None) -> None:
        if self.is_locked():
            raise LockedError

        _check_evaluator(value)
        self._configure()
        self._listener = value

    @property
    def root(self) -> float:
        """Estimated root.

        Raises
        ------
        NotAvailableError
            If no estimation has succeeded yet.
        """
        if self._root is None:
            raise NotAvailableError("root has not been estimated")

        return self._root

    def is_listener_available(self) -> bool:
        return self._listener is not None

    def is_ready(self) -> bool:
        return self.is_listener_available()

    def is_root_available(self) -> bool:
        return self._root is not None

    def estimate(self) -> EstimationResult[float]:
        self._check_estimable()
        result = self._run(self._estimate)

        if result.status == "SUCCESS":
            self._root = result.content

        return result

    @abstractmethod
    def _estimate(self) -> float:
        """Return the root, or raise :class:`RootEstimationError`."""
        raise NotImplementedError

    def _evaluate(self, x: float) -> float:
        return _evaluate(self._listener, x)  # type: ignore


class BracketedSingleRootEstimator(SingleRootEstimator):
    """Abstract base class for estimators seeded from a bracket.

    Parameters
    ----------
    listener : Evaluator, optional
        Function whose root is estimated.
    min_eval_point : float, default=0.0
        Lower end of the bracket.
    max_eval_point : float, default=1.0
        Upper end of the bracket.
    tolerance : float, default=1e-6
        Positive tolerance used by the convergence test.

    Raises
    ------
    InvalidBracketRangeError
        If `min_eval_point` is greater than `max_eval_point`.
    ValueError
        If `tolerance` is not positive.
    """

    __slots__ = ("_min_eval_point", "_max_eval_point", "_tolerance")
    MAX_ITER: int = 100
    _min_eval_point: float
    _max_eval_point: float
    _tolerance: float

    def __init__(
        self,
        listener: Evaluator | None = None,
        min_eval_point: float = DEFAULT_MIN_EVAL_POINT,
        max_eval_point: float = DEFAULT_MAX_EVAL_POINT,
        tolerance: float = DEFAULT_TOLERANCE,
    ):
        super().__init__(listener)
        self._min_eval_point, self._max_eval_point = _check_bracket(
            min_eval_point, max_eval_point
        )
        self._tolerance = _check_tolerance(tolerance)

    @property
    def bracket(self) -> tuple[float, float]:
        """Current bracket ``(min_eval_point, max_eval_point)``."""
        return (self._min_eval_point, self._max_eval_point)

    @property
    def min_eval_point(self) -> float:
        return self._min_eval_point

    @property
    def max_eval_point(self) -> float:
        return self._max_eval_point

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        if self.is_locked():
            raise LockedError

        value = _check_tolerance(value)
        self._configure()
        self._tolerance = value

    def set_bracket(self, min_eval_point: float, max_eval_point: float) -> None:
        """Replace the bracket.

        A degenerate bracket, i.e., ``min_eval_point == max_eval_point``, is accepted.

        Raises
        ------
        LockedError
            If the estimator is locked.
        InvalidBracketRangeError
            If `min_eval_point` is greater than `max_eval_point`.
        """
        if self.is_locked():
            raise LockedError

        bracket = _check_bracket(min_eval_point, max_eval_point)
        self._configure()
        self._min_eval_point, self._max_eval_point = bracket

    def compute_bracket(
        self, min_eval_point: float = 0.0, max_eval_point: float | None = None
    ) -> EstimationResult[tuple[float, float]]:
        """Search for a bracket in which the function changes its sign.

        Starting from ``[min_eval_point, max_eval_point]``, the interval is expanded
        geometrically, alternately at its lower and upper end, until the function
        takes values of opposite signs at both ends. The growth factor and the number
        of steps are taken from :func:`rootest.context.getcontext`.

        Parameters
        ----------
        min_eval_point : float, default=0.0
            Lower end of the seed interval.
        max_eval_point : float, optional
            Upper end of the seed interval. The default is slightly above
            `min_eval_point`.

        Returns
        -------
        r : EstimationResult
            If ``r.status`` is ``"SUCCESS"``, ``r.content`` is the new bracket, which
            also replaces the stored one; otherwise, the stored bracket is unchanged.

        Raises
        ------
        LockedError
            If the estimator is locked.
        NotReadyError
            If the function has not been set.
        InvalidBracketRangeError
            If `min_eval_point` is not less than `max_eval_point`.

        Examples
        --------
        >>> from rootest.roots import BrentEstimator
        >>> estimator = BrentEstimator(lambda x: x - 30.0)
        >>> r = estimator.compute_bracket(0.0, 1.0)
        >>> lo, hi = r.content
        >>> lo < 30.0 < hi
        True
        """
        if self.is_locked():
            raise LockedError

        if not self.is_listener_available():
            raise NotReadyError("function evaluator is not set")

        ctx = getcontext()

        if max_eval_point is None:
            max_eval_point = (
                min_eval_point + ctx.bracket_factor * abs(min_eval_point) + BRACKET_EPS
            )

        if not min_eval_point < max_eval_point:
            raise InvalidBracketRangeError

        def search() -> tuple[float, float]:
            x1 = float(min_eval_point)
            x2 = float(max_eval_point)
            f1 = self._evaluate(x1)
            f2 = self._evaluate(x2)

            if f1 * f2 < 0.0:
                return (x1, x2)

            for _ in range(ctx.bracket_tries):
                x1 += ctx.bracket_factor * (x1 - x2)

                if not math.isfinite(x1):
                    logger.debug("bracket search overflowed at the lower end")
                    break

                f1 = self._evaluate(x1)

                if f1 * f2 < 0.0:
                    return (x1, x2)

                x2 += ctx.bracket_factor * (x2 - x1)

                if not math.isfinite(x2):
                    logger.debug("bracket search overflowed at the upper end")
                    break

                f2 = self._evaluate(x2)

                if f1 * f2 < 0.0:
                    return (x1, x2)

            raise RootEstimationError("no sign change found while expanding bracket")

        result = self._run(search, record=False)

        if result.status == "SUCCESS":
            self._min_eval_point, self._max_eval_point = result.content  # type: ignore

        return result


class DerivativeSingleRootEstimator(BracketedSingleRootEstimator):
    """Abstract base class for estimators that also evaluate the derivative.

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

    __slots__ = ("_derivative_listener",)
    _derivative_listener: Evaluator | None

    def __init__(
        self,
        listener: Evaluator | None = None,
        derivative_listener: Evaluator | None = None,
        min_eval_point: float = DEFAULT_MIN_EVAL_POINT,
        max_eval_point: float = DEFAULT_MAX_EVAL_POINT,
        tolerance: float = DEFAULT_TOLERANCE,
    ):
        super().__init__(listener, min_eval_point, max_eval_point, tolerance)
        _check_evaluator(derivative_listener)
        self._derivative_listener = derivative_listener

    @property
    def derivative_listener(self) -> Evaluator:
        """Derivative of the function whose root is estimated.

        Raises
        ------
        NotAvailableError
            If the derivative has not been set.
        """
        if self._derivative_listener is None:
            raise NotAvailableError("derivative evaluator is not set")

        return self._derivative_listener

    @derivative_listener.setter
    def derivative_listener(self, value: Evaluator | None) -> None:
        if self.is_locked():
            raise LockedError

        _check_evaluator(value)
        self._configure()
        self._derivative_listener = value

    def is_derivative_listener_available(self) -> bool:
        return self._derivative_listener is not None

    def is_ready(self) -> bool:
        return self.is_listener_available() and self.is_derivative_listener_available()

    def _evaluate_derivative(self, x: float) -> float:
        return _evaluate(self._derivative_listener, x)  # type: ignore


def _check_bracket(
    min_eval_point: float, max_eval_point: float
) -> tuple[float, float]:
    min_eval_point = float(min_eval_point)
    max_eval_point = float(max_eval_point)

    if math.isnan(min_eval_point) or math.isnan(max_eval_point):
        raise ValueError("bracket must not contain NaN")

    if min_eval_point > max_eval_point:
        raise InvalidBracketRangeError

    return (min_eval_point, max_eval_point)


def _check_tolerance(tolerance: float) -> float:
    tolerance = float(tolerance)

    if not tolerance > 0.0:
        raise ValueError("tolerance must be positive")

    return tolerance


def _check_sign_change(fl: float, fh: float, *, allow_zero: bool = False) -> None:
    # Raises RootEstimationError unless fl and fh are finite and of opposite signs.
    if not (math.isfinite(fl) and math.isfinite(fh)):
        raise RootEstimationError("function value at the bracket is not finite")

    if (fl < 0.0 and fh > 0.0) or (fl > 0.0 and fh < 0.0):
        return

    if allow_zero and (fl == 0.0 or fh == 0.0):
        return

    raise RootEstimationError("bracket must contain a sign change")
