import math

import pytest

from clothsim.Point import Point
from clothsim.Vec2 import Vec2
from clothsim.collision import CircleObstacle, detect_obstacle_collision
from clothsim.exceptions import InvalidConfigurationError


def test_point_inside_is_projected_to_the_surface_along_its_direction() -> None:
    obstacle = CircleObstacle((50.0, 50.0), 10.0, restitution=0.5)
    p = Point((50.0, 45.0))

    obstacle.collide(p)

    assert p.pos.x == pytest.approx(50.0)
    assert p.pos.y == pytest.approx(40.0)
    assert math.hypot(p.pos.x - 50.0, p.pos.y - 50.0) == pytest.approx(10.0)
    # jump of -5 along the normal, reflected with restitution 0.5
    assert p.prev_pos.y == pytest.approx(37.5)


def test_tangential_velocity_is_preserved() -> None:
    obstacle = CircleObstacle((50.0, 50.0), 10.0, restitution=0.5)
    p = Point((50.0, 45.0))
    p.prev_pos = Vec2(49.0, 45.0)

    obstacle.collide(p)

    assert p.velocity.x == pytest.approx(1.0)
    assert p.prev_pos.x == pytest.approx(49.0)


def test_point_outside_or_on_surface_is_untouched() -> None:
    obstacle = CircleObstacle((0.0, 0.0), 5.0)
    outside = Point((6.0, 0.0))
    on_surface = Point((0.0, 5.0))

    obstacle.collide(outside)
    obstacle.collide(on_surface)

    assert outside.pos == Vec2(6.0, 0.0)
    assert on_surface.pos == Vec2(0.0, 5.0)


def test_point_at_the_centre_is_untouched() -> None:
    obstacle = CircleObstacle((0.0, 0.0), 5.0)
    p = Point((0.0, 0.0))

    assert not detect_obstacle_collision(p, obstacle)
    obstacle.collide(p)

    assert p.pos == Vec2(0.0, 0.0)


def test_pinned_point_is_never_pushed_out() -> None:
    obstacle = CircleObstacle((0.0, 0.0), 5.0)
    p = Point((1.0, 1.0), pinned=True)

    obstacle.collide(p)

    assert p.pos == Vec2(1.0, 1.0)


def test_move_and_contains() -> None:
    obstacle = CircleObstacle((0.0, 0.0), 5.0)
    obstacle.move_to(100.0, 100.0)

    assert obstacle.center == Vec2(100.0, 100.0)
    assert obstacle.contains(102.0, 101.0)
    assert not obstacle.contains(0.0, 0.0)


@pytest.mark.parametrize("radius, restitution", [(0.0, 0.5), (-1.0, 0.5), (5.0, 1.5)])
def test_invalid_obstacle_is_rejected(radius, restitution) -> None:
    with pytest.raises(InvalidConfigurationError):
        CircleObstacle((0.0, 0.0), radius, restitution)
