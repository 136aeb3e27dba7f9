import pytest

from rootest import localcontext
from rootest.roots import (
    BrentEstimator,
    InvalidBracketRangeError,
    NotReadyError,
    SecantEstimator,
)


def test_compute_bracket():
    estimator = BrentEstimator(lambda x: x - 30.0, tolerance=1e-12)
    r = estimator.compute_bracket(0.0, 1.0)
    assert r.status == "SUCCESS"
    lo, hi = r.content
    assert lo < 30.0 < hi
    assert estimator.bracket == (lo, hi)
    assert estimator.status == "READY"
    assert estimator.estimate().content == pytest.approx(30.0)
    assert estimator.status == "SUCCESS"

    # a new bracket is a change of configuration
    assert estimator.compute_bracket(0.0, 1.0).status == "SUCCESS"
    assert estimator.status == "READY"


def test_compute_bracket_default_max():
    estimator = BrentEstimator(lambda x: x + 5.0)
    r = estimator.compute_bracket()
    assert r.status == "SUCCESS"
    lo, hi = r.content
    assert lo < -5.0 < hi


def test_compute_bracket_failure():
    estimator = SecantEstimator(lambda x: x**2 + 1.0)
    estimator.set_bracket(-2.0, 3.0)
    r = estimator.compute_bracket(0.0, 1.0)
    assert r.status == "FAILURE"
    assert r.content is None
    assert estimator.bracket == (-2.0, 3.0)
    assert estimator.status == "READY"


def test_compute_bracket_tries():
    estimator = BrentEstimator(lambda x: x - 30.0)

    with localcontext(bracket_tries=1):
        assert estimator.compute_bracket(0.0, 1.0).status == "FAILURE"

    assert estimator.compute_bracket(0.0, 1.0).status == "SUCCESS"


def test_compute_bracket_invalid():
    estimator = BrentEstimator(lambda x: x)

    with pytest.raises(InvalidBracketRangeError):
        estimator.compute_bracket(1.0, 1.0)

    with pytest.raises(InvalidBracketRangeError):
        estimator.compute_bracket(2.0, 1.0)

    with pytest.raises(NotReadyError):
        BrentEstimator().compute_bracket()
