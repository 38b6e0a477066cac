import logging
import math

from .Vec2 import Vec2
from .exceptions import InvalidConfigurationError

logger = logging.getLogger("clothsim")


class CircleObstacle:
    def __init__(self, center, radius, restitution=0.5):
        if not radius > 0.0:
            raise InvalidConfigurationError("radius", radius, f"Obstacle radius must be positive, got {radius!r}")
        if not 0.0 <= restitution <= 1.0:
            raise InvalidConfigurationError("restitution", restitution)
        self.center = Vec2.of(center)
        self.radius = float(radius)
        self.restitution = float(restitution)

    def move_to(self, x, y):
        self.center.set(x, y)
        logger.debug(f"Obstacle moved to ({x:.2f}, {y:.2f})")

    def contains(self, x, y):
        dx = x - self.center.x
        dy = y - self.center.y
        return dx * dx + dy * dy < self.radius * self.radius

    def collide(self, point):
        if detect_obstacle_collision(point, self):
            resolve_obstacle_collision(point, self)

    def __repr__(self):
        return (f"CircleObstacle(center=({self.center.x:.2f}, {self.center.y:.2f}), "
                f"radius={self.radius}, restitution={self.restitution})")


def detect_obstacle_collision(point, obstacle):
    """
    True if a free point lies strictly inside the obstacle.
    A point sitting exactly on the centre has no usable normal and is ignored.
    """
    if point.pinned:
        return False
    dx = point.pos.x - obstacle.center.x
    dy = point.pos.y - obstacle.center.y
    dist_sq = dx * dx + dy * dy
    return 0.0 < dist_sq < obstacle.radius * obstacle.radius


def resolve_obstacle_collision(point, obstacle):
    """
    Project the point onto the circle and reflect its implicit velocity.

    The velocity is rebuilt from the projected position and the old
    ``prev_pos``, so the jump onto the surface counts as motion. Its normal
    part is reflected and scaled by ``obstacle.restitution``; the tangential
    part is kept.
    """
    dx = point.pos.x - obstacle.center.x
    dy = point.pos.y - obstacle.center.y
    dist = math.hypot(dx, dy)
    if dist == 0.0 or dist >= obstacle.radius:
        return

    nx = dx / dist
    ny = dy / dist
    point.pos.x = obstacle.center.x + nx * obstacle.radius
    point.pos.y = obstacle.center.y + ny * obstacle.radius

    vx = point.pos.x - point.prev_pos.x
    vy = point.pos.y - point.prev_pos.y
    vel_along_normal = vx * nx + vy * ny
    k = (1.0 + obstacle.restitution) * vel_along_normal
    vx -= k * nx
    vy -= k * ny

    point.prev_pos.x = point.pos.x - vx
    point.prev_pos.y = point.pos.y - vy
