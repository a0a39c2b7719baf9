"""Shared fixtures: fitted parameter sets used across the test modules."""

import numpy as np
import pytest

from homerange_crw.types import ParameterSet


def _make_params(site='north', season='winter', individual='d01', **overrides):
    """ParameterSet with the reference scenario values unless overridden."""
    values = dict(
        shape=2.0,
        scale_intercept=10.0,
        scale_slope=0.0,
        rho0=0.9,
        rho_inf=0.1,
        gamma_rho=0.01,
    )
    values.update(overrides)
    return ParameterSet(site=site, season=season, individual=individual, **values)


@pytest.fixture
def make_params():
    """Factory: make_params(individual=..., rho0=...) → ParameterSet."""
    return _make_params


@pytest.fixture
def reference_params():
    """shape=2, scaleIntercept=10, scaleSlope=0, rho0=0.9, rhoInf=0.1, gammaRho=0.01."""
    return _make_params()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
