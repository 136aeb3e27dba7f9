import numpy as np
import pytest

from rootest import PolynomialEvaluator, deflate, polyval, polyval_derivs
from rootest.polynomial import ascoeffs


def test_ascoeffs():
    assert ascoeffs([1, 2, 3]).dtype == np.float64
    assert ascoeffs([1, 2j]).dtype == np.complex128

    with pytest.raises(ValueError):
        ascoeffs([])

    with pytest.raises(ValueError):
        ascoeffs([[1.0, 2.0], [3.0, 4.0]])

    with pytest.raises(TypeError):
        ascoeffs("123")


def test_polyval():
    # 1 - 3x + 2x^2
    assert polyval([1.0, -3.0, 2.0], 2.0) == pytest.approx(3.0)
    assert polyval([1.0, 0.0, 1.0], 1j) == pytest.approx(0.0)
    assert polyval([5.0], 123.0) == 5.0


def test_polyval_derivs():
    p, dp, d2p = polyval_derivs([1.0, -3.0, 2.0, 4.0], 2.0)
    assert p == pytest.approx(1.0 - 6.0 + 8.0 + 32.0)
    assert dp == pytest.approx(-3.0 + 8.0 + 48.0)
    assert d2p == pytest.approx(4.0 + 48.0)


def test_deflate():
    # (x - 1)(x - 2)(x + 3) = x^3 - 7x + 6
    q, r = deflate([6.0, -7.0, 0.0, 1.0], 2.0)
    assert abs(r) < 1e-12
    assert np.allclose(q, [-3.0, 2.0, 1.0])

    q, r = deflate([6.0, -7.0, 0.0, 1.0], 0.0)
    assert r == pytest.approx(6.0)

    with pytest.raises(ValueError):
        deflate([1.0], 0.0)

    with pytest.raises(ValueError):
        deflate([1.0, 2.0, 0.0], 1.0)


def test_evaluator():
    p = PolynomialEvaluator([1.0, -3.0, 2.0])
    assert p.degree == 2
    assert not p.iscomplex()
    assert p(2.0) == pytest.approx(3.0)

    dp = p.derivative()
    assert isinstance(dp, PolynomialEvaluator)
    assert dp.degree == 1
    assert dp(2.0) == pytest.approx(5.0)

    coeffs = p.coeffs
    coeffs[0] = 100.0
    assert p(0.0) == pytest.approx(1.0)


def test_evaluator_as_listener():
    from rootest.roots import BrentEstimator

    p = PolynomialEvaluator([-2.0, 0.0, 1.0])
    r = BrentEstimator(p, 0.0, 2.0, 1e-12).estimate()
    assert r.status == "SUCCESS"
    assert r.content == pytest.approx(np.sqrt(2.0))
