"""Tests for homerange_crw.types — parameter records, positions, paths."""

import math

import numpy as np
import pytest

from homerange_crw.types import (
    InputDataError,
    ModelParameterError,
    ParameterSet,
    Path,
    Position,
)


def _record(**overrides):
    record = {
        'site': 'north', 'season': 'winter', 'individual': 'd07',
        'shape': 2.0, 'scale_intercept': 10.0, 'scale_slope': 0.05,
        'rho0': 0.8, 'rho_inf': 0.2, 'gamma_rho': 0.01,
    }
    record.update(overrides)
    return record


class TestParameterSetFromRecord:
    def test_valid_record(self):
        p = ParameterSet.from_record(_record())
        assert p.key == ('north', 'winter', 'd07')
        assert p.shape == 2.0
        assert p.scale_slope == 0.05
        assert p.gamma_rho == 0.01

    def test_numeric_strings_parsed(self):
        p = ParameterSet.from_record(_record(shape='1.5', rho0='-0.25'))
        assert p.shape == 1.5
        assert p.rho0 == -0.25

    def test_keys_coerced_to_text(self):
        p = ParameterSet.from_record(_record(season=2019, individual=7))
        assert p.season == '2019'
        assert p.individual == '7'

    def test_missing_field_raises(self):
        record = _record()
        del record['rho_inf']
        with pytest.raises(InputDataError, match="rho_inf"):
            ParameterSet.from_record(record)

    def test_none_field_raises(self):
        with pytest.raises(InputDataError, match="gamma_rho"):
            ParameterSet.from_record(_record(gamma_rho=None))

    def test_nan_field_raises(self):
        with pytest.raises(InputDataError, match="rho0"):
            ParameterSet.from_record(_record(rho0=float('nan')))

    def test_non_numeric_field_raises(self):
        with pytest.raises(InputDataError, match="shape"):
            ParameterSet.from_record(_record(shape='wide'))

    def test_missing_key_raises(self):
        record = _record()
        del record['site']
        with pytest.raises(InputDataError, match="site"):
            ParameterSet.from_record(record)

    def test_message_names_dataset(self):
        with pytest.raises(InputDataError, match="north/winter/d07"):
            ParameterSet.from_record(_record(scale_slope=None))

    def test_frozen(self):
        p = ParameterSet.from_record(_record())
        with pytest.raises(Exception):
            p.shape = 3.0


class TestErrors:
    def test_errors_are_value_errors(self):
        assert issubclass(ModelParameterError, ValueError)
        assert issubclass(InputDataError, ValueError)


class TestPositionAndPath:
    def test_displacement(self):
        assert Position(3.0, 4.0).displacement == pytest.approx(5.0)
        assert Position(0.0, 0.0).displacement == 0.0

    def test_path_len_and_position(self):
        x = np.array([3.0, 0.0, -1.0])
        y = np.array([4.0, 2.0, 0.0])
        path = Path(x=x, y=y, displacement=np.hypot(x, y), initial_heading=0.5)
        assert len(path) == 3
        pos = path.position(1)
        assert pos == Position(0.0, 2.0)
        assert isinstance(pos.x, float)
        assert math.isclose(path.displacement[0], 5.0)
