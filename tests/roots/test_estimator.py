import pytest

from rootest.roots import (
    BisectionEstimator,
    BrentEstimator,
    EstimationResult,
    EvaluationError,
    InvalidBracketRangeError,
    LockedError,
    NewtonRaphsonEstimator,
    NotAvailableError,
    NotReadyError,
    RootEstimationError,
)


def test_status():
    estimator = BisectionEstimator()
    assert estimator.status == "UNCONFIGURED"

    estimator.listener = lambda x: x - 0.25
    assert estimator.status == "READY"

    assert estimator.estimate().status == "SUCCESS"
    assert estimator.status == "SUCCESS"

    estimator.tolerance = 1e-9
    assert estimator.status == "READY"

    estimator.set_bracket(0.5, 1.0)
    assert estimator.estimate().status == "FAILURE"
    assert estimator.status == "FAILURE"

    # the root of the last successful estimation is kept
    assert estimator.root == pytest.approx(0.25, abs=1e-6)


def test_derivative_status():
    estimator = NewtonRaphsonEstimator(lambda x: x - 0.5)
    assert estimator.status == "UNCONFIGURED"

    with pytest.raises(NotReadyError):
        estimator.estimate()

    estimator.derivative_listener = lambda x: 1.0
    assert estimator.status == "READY"
    assert estimator.estimate().content == pytest.approx(0.5)


def test_not_available():
    estimator = BrentEstimator()

    with pytest.raises(NotReadyError):
        estimator.estimate()

    with pytest.raises(NotAvailableError):
        estimator.root

    with pytest.raises(NotAvailableError):
        estimator.listener

    assert not estimator.is_listener_available()
    assert not estimator.is_root_available()


def test_configuration():
    estimator = BrentEstimator(lambda x: x)
    assert estimator.bracket == (0.0, 1.0)
    assert estimator.tolerance == 1e-6

    with pytest.raises(ValueError):
        estimator.tolerance = 0.0

    with pytest.raises(ValueError):
        estimator.tolerance = -1e-3

    with pytest.raises(ValueError):
        BrentEstimator(lambda x: x, tolerance=0.0)

    estimator.set_bracket(1.0, 1.0)
    assert estimator.bracket == (1.0, 1.0)

    with pytest.raises(InvalidBracketRangeError):
        estimator.set_bracket(2.0, 1.0)

    with pytest.raises(ValueError):
        BrentEstimator(lambda x: x, 2.0, 1.0)

    with pytest.raises(TypeError):
        estimator.listener = 1.0  # type: ignore


def test_idempotent():
    estimator = BrentEstimator(lambda x: x**3 - 2.0, 0.0, 2.0, 1e-12)
    r1 = estimator.estimate()
    r2 = estimator.estimate()
    assert r1 == r2
    assert isinstance(r1, EstimationResult)


def test_reentrant_estimate():
    def fun(x):
        estimator.estimate()
        return x

    estimator = BisectionEstimator(fun, -1.0, 1.0)

    with pytest.raises(EvaluationError) as excinfo:
        estimator.estimate()

    assert isinstance(excinfo.value.__cause__, LockedError)
    assert estimator.status == "READY"
    assert not estimator.is_locked()


def test_reentrant_configuration():
    def fun(x):
        statuses.append(estimator.status)

        try:
            estimator.tolerance = 1.0
        except LockedError:
            errors.append(x)

        try:
            estimator.compute_bracket()
        except LockedError:
            errors.append(x)

        return x

    statuses = []
    errors = []
    estimator = BisectionEstimator(fun, -1.0, 1.0, 0.1)
    r = estimator.estimate()
    assert r.status == "SUCCESS"
    assert set(statuses) == {"ESTIMATING"}
    assert len(errors) == 2 * len(statuses)
    assert estimator.tolerance == 0.1


def test_evaluator_failure():
    def fun(x):
        raise RootEstimationError("aborted")

    r = BrentEstimator(fun).estimate()
    assert r.status == "FAILURE"
    assert r.message == "aborted"

    estimator = BrentEstimator(lambda x: 1.0 / x, 0.0, 1.0)

    with pytest.raises(EvaluationError) as excinfo:
        estimator.estimate()

    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
    assert estimator.status == "READY"
