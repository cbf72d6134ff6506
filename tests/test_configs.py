"""
Tests for FunctionConfig.
"""

import pytest

from pylinblock import FunctionConfig


def test_defaults():
    config = FunctionConfig()
    assert config.domain == (-1.0, 1.0)
    assert config.tol == 1e-14
    assert config.min_points <= config.max_points


def test_copy_with_overrides():
    base = FunctionConfig()
    unit = base.copy(domain=(0.0, 1.0), tol=1e-12)
    assert unit.domain == (0.0, 1.0)
    assert unit.tol == 1e-12
    # the original is untouched
    assert base.domain == (-1.0, 1.0)
    assert base.tol == 1e-14


def test_copy_rejects_unknown_parameter():
    with pytest.raises(ValueError, match="Unknown parameter"):
        FunctionConfig().copy(resolution=10)


def test_presets():
    accurate = FunctionConfig.high_accuracy()
    fast = FunctionConfig.fast()
    assert accurate.tol < FunctionConfig().tol < fast.tol
    assert fast.max_points < FunctionConfig().max_points < accurate.max_points


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_points": 0},
        {"min_points": 33, "max_points": 17},
        {"tol": 0.0},
        {"tol": -1e-10},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        FunctionConfig(**kwargs)
