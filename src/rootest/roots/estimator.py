import dataclasses
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Literal

logger = logging.getLogger(__name__)

type Status = Literal["UNCONFIGURED", "READY", "ESTIMATING", "SUCCESS", "FAILURE"]


class LockedError(RuntimeError):
    """Raised when an estimator is modified or re-entered while it is estimating."""

    def __init__(self, message="estimator is locked", *args):
        super().__init__(message, *args)


class NotReadyError(RuntimeError):
    """Raised when an estimator is used before its configuration is complete."""

    def __init__(self, message="estimator is not ready", *args):
        super().__init__(message, *args)


class NotAvailableError(RuntimeError):
    """Raised when a value that has not been set or computed yet is read."""

    def __init__(self, message="value is not available", *args):
        super().__init__(message, *args)


class InvalidBracketRangeError(ValueError):
    """Raised when the lower end of a bracket is greater than its upper end."""

    def __init__(self, message="invalid bracket range", *args):
        super().__init__(message, *args)


class RootEstimationError(Exception):
    """Raised when a root cannot be estimated.

    Estimators convert this error into a :class:`EstimationResult` whose status is
    ``"FAILURE"``. Function evaluators may also raise it to abort the estimation.

    Parameters
    ----------
    message : str, default="root estimation failed"
    """

    message: str

    def __init__(self, message="root estimation failed", *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.message = message


class EvaluationError(Exception):
    """Raised when a function evaluator fails.

    The original exception is available as ``__cause__``.
    """


@dataclasses.dataclass(frozen=True, slots=True)
class EstimationResult[T]:
    """Output of :meth:`RootEstimator.estimate`.

    Attributes
    ----------
    status : Literal["FAILURE", "SUCCESS"]
    content
        Estimated root(s) or bracket if `status` is ``"SUCCESS"``; otherwise, ``None``.
    message : str
        Report from the estimator. Typically a reason for a failure.
    """

    status: Literal["FAILURE", "SUCCESS"]
    content: T | None
    message: str


class RootEstimator[T](ABC):
    """Abstract base class for root estimators.

    Attributes
    ----------
    status : Literal["UNCONFIGURED", "READY", "ESTIMATING", "SUCCESS", "FAILURE"]
        Current status of the estimator. ``"SUCCESS"`` and ``"FAILURE"`` report the
        outcome of the last estimation and are reset by any change of configuration.

    Notes
    -----
    Estimators are not thread-safe. The ``"ESTIMATING"`` status only guards against
    reentrant calls, e.g., from a function evaluator that modifies the estimator it
    is evaluated by; such calls raise :class:`LockedError`.
    """

    __slots__ = ("_phase",)
    _phase: Literal["IDLE", "ESTIMATING", "SUCCESS", "FAILURE"]

    def __init__(self):
        self._phase = "IDLE"

    @property
    def status(self) -> Status:
        if self._phase == "ESTIMATING":
            return "ESTIMATING"

        if not self.is_ready():
            return "UNCONFIGURED"

        if self._phase == "IDLE":
            return "READY"

        return self._phase

    def is_locked(self) -> bool:
        """Return ``True`` if and only if `status` is ``"ESTIMATING"``."""
        return self._phase == "ESTIMATING"

    @abstractmethod
    def is_ready(self) -> bool:
        """Return ``True`` if the estimator is configured well enough to estimate."""
        raise NotImplementedError

    @abstractmethod
    def estimate(self) -> EstimationResult[T]:
        """Estimate the root(s).

        Returns
        -------
        EstimationResult

        Raises
        ------
        LockedError
            If the estimator is locked.
        NotReadyError
            If the estimator is not ready.
        EvaluationError
            If a function evaluator fails.
        """
        raise NotImplementedError

    def _configure(self) -> None:
        # Called before any change of configuration.
        if self.is_locked():
            raise LockedError

        self._phase = "IDLE"

    def _check_estimable(self) -> None:
        if self.is_locked():
            raise LockedError

        if not self.is_ready():
            raise NotReadyError

    def _run[S](
        self, fun: Callable[[], S], *, record: bool = True
    ) -> EstimationResult[S]:
        """Invoke `fun` while the estimator is locked.

        :class:`RootEstimationError` raised by `fun` is converted into a failed result.
        If `record` is ``False``, the outcome does not change `status`.
        """
        if self.is_locked():
            raise LockedError

        name = type(self).__name__
        previous = self._phase
        self._phase = "ESTIMATING"

        try:
            content = fun()
        except RootEstimationError as e:
            self._phase = "FAILURE" if record else previous
            logger.debug("%s failed: %s", name, e.message)
            return EstimationResult("FAILURE", None, e.message)
        except BaseException:
            self._phase = previous
            raise

        self._phase = "SUCCESS" if record else "IDLE"
        logger.debug("%s succeeded: %r", name, content)
        return EstimationResult("SUCCESS", content, "success")
