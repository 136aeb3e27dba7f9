import mpmath
import numpy as np
import pytest

from rootest.roots import LaguerreRootsEstimator, LockedError


def sort_roots(roots):
    roots = np.asarray(roots, dtype=np.complex128).tolist()
    return np.array(sorted(roots, key=lambda z: (round(z.real, 6), z.imag)))


def reference_roots(coeffs):
    roots = mpmath.polyroots(
        [float(c) for c in coeffs], maxsteps=200, extraprec=200, asc=True
    )
    return np.array([complex(z) for z in roots])


def test_laguerre():
    # (x - 1)(x - 2)(x - 3)
    estimator = LaguerreRootsEstimator([-6.0, 11.0, -6.0, 1.0])
    r = estimator.estimate()
    assert r.status == "SUCCESS"
    assert r.content.dtype == np.complex128
    assert np.allclose(sort_roots(r.content), [1.0, 2.0, 3.0], atol=1e-10)
    assert np.allclose(r.content.imag, 0.0, atol=1e-12)


def test_laguerre_complex_roots():
    # (x - 1)(x^2 + 1)
    estimator = LaguerreRootsEstimator([-1.0, 1.0, -1.0, 1.0])
    roots = sort_roots(estimator.estimate().content)
    assert np.allclose(roots, [-1.0j, 1.0j, 1.0], atol=1e-10)


def test_laguerre_complex_coefficients():
    expected = np.array([1.0 + 2.0j, -0.5j, 3.0])
    coeffs = np.polynomial.polynomial.polyfromroots(expected)
    estimator = LaguerreRootsEstimator(coeffs)
    assert np.allclose(sort_roots(estimator.estimate().content), sort_roots(expected))


def test_laguerre_multiple_roots():
    # (x - 2)^3
    estimator = LaguerreRootsEstimator([-8.0, 12.0, -6.0, 1.0])
    assert np.allclose(estimator.estimate().content, [2.0, 2.0, 2.0])

    # (x - 0.5)^2 (x + 1.5)
    coeffs = np.polynomial.polynomial.polyfromroots([0.5, 0.5, -1.5])
    estimator = LaguerreRootsEstimator(coeffs)
    roots = sort_roots(estimator.estimate().content)
    assert np.allclose(roots, [-1.5, 0.5, 0.5], atol=1e-4)


def test_laguerre_random():
    rng = np.random.default_rng(42)

    for degree in range(1, 9):
        coeffs = rng.uniform(-1.0, 1.0, degree + 1)
        coeffs[-1] = 1.0
        roots = LaguerreRootsEstimator(coeffs).estimate().content
        expected = reference_roots(coeffs)
        assert len(roots) == degree

        for z in roots:
            assert np.min(np.abs(expected - z)) < 1e-6


def test_laguerre_polish():
    coeffs = [-6.0, 11.0, -6.0, 1.0]
    estimator = LaguerreRootsEstimator(coeffs, polish_roots=False)
    assert not estimator.polish_roots
    assert np.allclose(sort_roots(estimator.estimate().content), [1.0, 2.0, 3.0])

    estimator.polish_roots = True
    assert estimator.status == "READY"
    assert np.allclose(sort_roots(estimator.estimate().content), [1.0, 2.0, 3.0])


def test_laguerre_idempotent():
    estimator = LaguerreRootsEstimator([1.0, 2.0, 3.0, 4.0, 5.0])
    r1 = estimator.estimate().content
    r2 = estimator.estimate().content
    assert np.array_equal(r1, r2)


def test_laguerre_invalid():
    with pytest.raises(ValueError):
        LaguerreRootsEstimator([1.0])

    with pytest.raises(ValueError):
        LaguerreRootsEstimator([1.0, 2.0, 0.0])

    estimator = LaguerreRootsEstimator()

    with pytest.raises(ValueError):
        estimator.polynomial_parameters = [0.0, 0.0]

    assert estimator.status == "UNCONFIGURED"


def test_laguerre_locked():
    estimator = LaguerreRootsEstimator([1.0, 1.0])
    estimator._phase = "ESTIMATING"

    with pytest.raises(LockedError):
        estimator.polish_roots = False

    with pytest.raises(LockedError):
        estimator.estimate()
