"""Tests for homerange_crw.sampling — wrapped Cauchy and Weibull deviates.

Statistical checks use fixed seeds and tolerances of several standard
errors, so they are deterministic in practice.
"""

import math

import numpy as np
import pytest
from scipy import stats
from scipy.special import gamma as gamma_fn

from homerange_crw.sampling import sample_weibull, sample_wrapped_cauchy, wrap_angle
from homerange_crw.types import ModelParameterError


# ═══════════════════════════════════════════════════════════════════════
# ANGLE WRAPPING
# ═══════════════════════════════════════════════════════════════════════

class TestWrapAngle:
    @pytest.mark.parametrize("theta, expected", [
        (0.0, 0.0),
        (math.pi, math.pi),
        (-math.pi, math.pi),
        (3 * math.pi + 0.5, 0.5 - math.pi),
        (2 * math.pi, 0.0),
        (1.5 * math.pi, -0.5 * math.pi),
        (-1.5 * math.pi, 0.5 * math.pi),
    ])
    def test_scalar(self, theta, expected):
        assert wrap_angle(theta) == pytest.approx(expected, abs=1e-12)

    def test_array_matches_scalar(self):
        thetas = np.linspace(-20, 20, 401)
        wrapped = wrap_angle(thetas)
        assert isinstance(wrapped, np.ndarray)
        np.testing.assert_allclose(wrapped, [wrap_angle(float(t)) for t in thetas])

    def test_range(self):
        thetas = np.concatenate([np.linspace(-50, 50, 10001), [-1e-300, 1e-300]])
        wrapped = wrap_angle(thetas)
        assert np.all(wrapped > -np.pi)
        assert np.all(wrapped <= np.pi)

    def test_preserves_direction(self):
        thetas = np.linspace(-30, 30, 97)
        wrapped = wrap_angle(thetas)
        np.testing.assert_allclose(np.cos(wrapped), np.cos(thetas), atol=1e-9)
        np.testing.assert_allclose(np.sin(wrapped), np.sin(thetas), atol=1e-9)


# ═══════════════════════════════════════════════════════════════════════
# WRAPPED CAUCHY
# ═══════════════════════════════════════════════════════════════════════

class TestWrappedCauchy:
    def test_scalar_returns_float(self, rng):
        assert isinstance(sample_wrapped_cauchy(0.3, 0.5, rng), float)

    @pytest.mark.parametrize("mu", [-math.pi, -1.0, 0.0, 2.5, math.pi, 7.0])
    @pytest.mark.parametrize("rho", [0.0, 0.3, 0.9, 0.999])
    def test_range(self, mu, rho):
        rng = np.random.default_rng(1)
        samples = sample_wrapped_cauchy(mu, rho, rng, size=5000)
        assert np.all(samples > -np.pi)
        assert np.all(samples <= np.pi)

    def test_rho_zero_is_uniform(self):
        rng = np.random.default_rng(2024)
        samples = sample_wrapped_cauchy(1.0, 0.0, rng, size=20_000)
        result = stats.kstest(samples, 'uniform', args=(-np.pi, 2 * np.pi))
        assert result.pvalue > 0.001

    @pytest.mark.parametrize("rho", [0.2, 0.6, 0.9])
    def test_mean_resultant_length_is_rho(self, rho):
        """For a wrapped Cauchy, E[cos(θ - μ)] = ρ and E[sin(θ - μ)] = 0."""
        mu = 2.0
        rng = np.random.default_rng(7)
        samples = sample_wrapped_cauchy(mu, rho, rng, size=100_000)
        assert np.mean(np.cos(samples - mu)) == pytest.approx(rho, abs=0.01)
        assert np.mean(np.sin(samples - mu)) == pytest.approx(0.0, abs=0.01)

    def test_matches_scipy_wrapcauchy(self):
        mu, rho = -0.7, 0.5
        rng = np.random.default_rng(99)
        samples = sample_wrapped_cauchy(mu, rho, rng, size=20_000)
        offsets = np.mod(samples - mu, 2 * np.pi)
        result = stats.kstest(offsets, stats.wrapcauchy(rho).cdf)
        assert result.pvalue > 0.001

    def test_scalar_and_array_agree(self):
        scalar = [sample_wrapped_cauchy(0.4, 0.6, np.random.default_rng(5))]
        array = sample_wrapped_cauchy(0.4, 0.6, np.random.default_rng(5), size=1)
        np.testing.assert_allclose(array, scalar)

    @pytest.mark.parametrize("rho", [1.0, 1.5, -0.1, float('nan'), float('inf')])
    def test_invalid_rho_raises(self, rho, rng):
        with pytest.raises(ModelParameterError):
            sample_wrapped_cauchy(0.0, rho, rng)


# ═══════════════════════════════════════════════════════════════════════
# WEIBULL
# ═══════════════════════════════════════════════════════════════════════

class TestWeibull:
    def test_scalar_returns_float(self, rng):
        assert isinstance(sample_weibull(2.0, 10.0, rng), float)

    @pytest.mark.parametrize("shape, scale", [(2.0, 10.0), (0.8, 3.0), (5.0, 50.0)])
    def test_mean(self, shape, scale):
        rng = np.random.default_rng(11)
        n = 200_000
        samples = sample_weibull(shape, scale, rng, size=n)
        expected_mean = scale * gamma_fn(1 + 1 / shape)
        expected_sd = scale * math.sqrt(
            gamma_fn(1 + 2 / shape) - gamma_fn(1 + 1 / shape) ** 2
        )
        assert abs(samples.mean() - expected_mean) < 5 * expected_sd / math.sqrt(n)

    def test_non_negative(self):
        samples = sample_weibull(1.2, 4.0, np.random.default_rng(3), size=50_000)
        assert np.all(samples >= 0)
        assert np.all(np.isfinite(samples))

    def test_matches_scipy_weibull(self):
        shape, scale = 1.7, 6.0
        samples = sample_weibull(shape, scale, np.random.default_rng(8), size=20_000)
        result = stats.kstest(samples, stats.weibull_min(shape, scale=scale).cdf)
        assert result.pvalue > 0.001

    @pytest.mark.parametrize("scale", [0.0, -1.0, float('nan')])
    def test_non_positive_scale_raises(self, scale, rng):
        with pytest.raises(ModelParameterError, match="scale"):
            sample_weibull(2.0, scale, rng)

    @pytest.mark.parametrize("shape", [0.0, -2.0, float('inf')])
    def test_non_positive_shape_raises(self, shape, rng):
        with pytest.raises(ModelParameterError, match="shape"):
            sample_weibull(shape, 10.0, rng)
