"""Shared fixtures for the cloth simulation tests."""

from __future__ import annotations

import pytest

from clothsim.params import SimulationParameters, Stiffness
from clothsim.world import ClothSimulation


@pytest.fixture
def still_params() -> SimulationParameters:
    """No gravity, full stiffness, single solver pass."""
    return SimulationParameters(
        gravity=(0.0, 0.0),
        dt=0.016,
        solver_iterations=1,
        snap_ratio=4.0,
        stiffness=Stiffness(structural=1.0, bend=1.0, shear=1.0),
        restitution=0.5,
        velocity_retention=0.99,
    )


@pytest.fixture
def make_simulation():
    """Factory returning a built simulation; keyword overrides go to the parameters."""

    def _make(rows=3, columns=3, spacing=10.0, origin=(20.0, 20.0), pin_top_row=True,
              width=200.0, height=200.0, **param_overrides) -> ClothSimulation:
        params = SimulationParameters(**param_overrides)
        sim = ClothSimulation(width, height, params)
        sim.build(rows, columns, spacing, origin[0], origin[1], pin_top_row)
        return sim

    return _make
