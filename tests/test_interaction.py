import numpy as np
import pytest

from clothsim.DistanceConstraint import ConstraintType
from clothsim.interaction import cut, cut_along, drag_obstacle, segment_distances
from clothsim.world import ClothSimulation


def test_segment_distances_clamps_to_the_segment() -> None:
    segments = np.array([
        [[0.0, 0.0], [10.0, 0.0]],
        [[0.0, 0.0], [10.0, 0.0]],
        [[3.0, 4.0], [3.0, 4.0]],
    ])

    d = segment_distances(segments, 5.0, 2.0)
    assert np.isclose(d[0], 2.0)

    d = segment_distances(segments, 13.0, 4.0)
    assert np.isclose(d[1], 5.0)
    assert np.isclose(d[2], 10.0)


def test_cut_marks_crossing_constraints_only(still_params) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    sim.build(2, 2, 10.0, 10.0, 10.0)

    marked = cut(sim, 15.0, 15.0, 1.0)

    assert marked == 2
    assert all(c.constraint_type is ConstraintType.SHEAR for c in sim.constraints if c.broken)
    # a second cut at the same spot finds nothing new
    assert cut(sim, 15.0, 15.0, 1.0) == 0


def test_cut_takes_effect_on_the_next_step(still_params) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    sim.build(2, 2, 10.0, 10.0, 10.0)

    cut(sim, 15.0, 15.0, 1.0)
    assert len(sim.constraints) == 6

    sim.step()

    assert len(sim.constraints) == 4
    assert len(sim.points) == 4
    assert all(p.attached_constraints == 2 for p in sim.points)
    sim.check_invariants()


def test_cut_cascades_point_removal(still_params) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    sim.build(1, 2, 10.0, 10.0, 10.0, pin_top_row=False)

    assert cut(sim, 15.0, 10.0, 2.0) == 1
    sim.step()

    assert sim.points == []
    assert sim.constraints == []


def test_cut_with_zero_radius_or_empty_cloth_does_nothing(still_params) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    assert cut(sim, 0.0, 0.0, 5.0) == 0

    sim.build(2, 2, 10.0, 10.0, 10.0)
    assert cut(sim, 15.0, 15.0, 0.0) == 0


def test_cut_along_a_pointer_path(still_params) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    sim.build(1, 2, 10.0, 10.0, 20.0, pin_top_row=False)

    marked = cut_along(sim, 15.0, 5.0, 15.0, 35.0, 1.0)

    assert marked == 1
    assert sim.constraints[0].broken


def test_cut_along_with_zero_radius_does_nothing(still_params, monkeypatch) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    sim.build(3, 3, 10.0, 10.0, 10.0)
    calls = []
    real_linspace = np.linspace
    monkeypatch.setattr(np, "linspace", lambda *a, **kw: calls.append(a) or real_linspace(*a, **kw))

    assert cut_along(sim, 15.0, 5.0, 15.0, 35.0, 0.0) == 0
    assert cut_along(sim, 15.0, 5.0, 15.0, 35.0, -1.0) == 0
    assert calls == []
    assert not any(c.broken for c in sim.constraints)


def test_drag_obstacle(still_params) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    assert drag_obstacle(sim, 10.0, 10.0) is False

    sim.set_obstacle(50.0, 50.0, 5.0)
    assert drag_obstacle(sim, 20.0, 30.0) is True
    assert (sim.obstacle.center.x, sim.obstacle.center.y) == (20.0, 30.0)


@pytest.mark.parametrize("radius", [0.5, 3.0])
def test_cut_hits_hidden_bend_links(still_params, radius) -> None:
    sim = ClothSimulation(100.0, 100.0, still_params)
    sim.build(1, 3, 10.0, 10.0, 10.0, pin_top_row=False)

    # (20, 10) is the middle point; every link passes through or ends there
    assert cut(sim, 20.0, 10.0, radius) == 3
