"""Tests for LabConfig."""

import pytest

from derivlab.config import LabConfig


def test_defaults():
    """Defaults give the 20-step sweep from 1e-4 and 200 plot samples."""
    cfg = LabConfig()
    assert cfg.methods == ("Central Difference",)
    assert cfg.sweep_num_steps == 20
    assert cfg.sweep_start_exponent == -4.0
    assert cfg.sweep_exponent_step == 0.2
    assert cfg.plot_num_points == 200
    assert cfg.plot_spacing == 0.1
    assert cfg.tangent_half_width == 1.0
    assert "sweep_num_steps=20" in repr(cfg)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sweep_num_steps": 1},
        {"sweep_num_steps": 2.5},
        {"sweep_exponent_step": 0.0},
        {"sweep_start_exponent": float("inf")},
        {"plot_num_points": 0},
        {"plot_spacing": -0.1},
        {"tangent_half_width": float("nan")},
    ],
)
def test_invalid_values_raise(kwargs):
    """Out-of-range settings raise ValueError."""
    with pytest.raises(ValueError):
        LabConfig(**kwargs)
